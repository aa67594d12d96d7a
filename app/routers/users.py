# =============================================================================
# app/routers/users.py - User CRUD Endpoints
# =============================================================================
# Add, get, list and update users.
# Handlers are plain `def` functions: pymongo is blocking, so FastAPI runs
# them on its worker thread pool.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import PlainTextResponse

from app.dependencies import UserServiceDep, require_json_body
from core.models.user import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    User,
    UserListParams,
    UserOrder,
    UserPage,
)
from core.services.user_service import MAX_BSON_INT

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Create
# =============================================================================

@router.post(
    "/api/add_user",
    response_class=PlainTextResponse,
    dependencies=[Depends(require_json_body)],
)
def add_user(user: User, service: UserServiceDep):
    """
    Add a new user.

    Any database failure, including a username the unique index rejects,
    answers an opaque 500.
    """
    service.add_user(user)
    return "user added"


# =============================================================================
# Read
# =============================================================================

@router.get("/api/get_user/{username}", response_model=User)
def get_user(
    username: Annotated[str, Path(description="Username to look up")],
    service: UserServiceDep,
):
    """
    Get the user with the supplied username.

    Answers 404 if no such user exists.
    """
    return service.get_user(username)


# Same lookup under the resource-style path used by PUT /user/{username}
router.add_api_route(
    "/user/{username}",
    get_user,
    methods=["GET"],
    response_model=User,
    name="get_user_by_resource_path",
)


@router.get("/users", response_model=UserPage)
def list_users(
    service: UserServiceDep,
    search: Annotated[str, Query(description="Case-insensitive username substring")] = "",
    page: Annotated[
        int, Query(ge=-MAX_BSON_INT - 1, le=MAX_BSON_INT, description="1-based page number")
    ] = DEFAULT_PAGE,
    per_page: Annotated[
        int, Query(ge=-MAX_BSON_INT - 1, le=MAX_BSON_INT, description="Users per page")
    ] = DEFAULT_PER_PAGE,
    order: Annotated[UserOrder, Query(description="NEW (newest first) or OLD")] = UserOrder.NEW,
):
    """
    List users with search and pagination.

    Returns `{data, total, page, per_page}`.
    """
    params = UserListParams(search=search, page=page, per_page=per_page, order=order)
    return service.list_users(params)


# =============================================================================
# Update
# =============================================================================

@router.put(
    "/user/{username}",
    response_class=PlainTextResponse,
    dependencies=[Depends(require_json_body)],
)
def update_user(
    username: Annotated[str, Path(description="Current username")],
    user: User,
    service: UserServiceDep,
):
    """
    Update a user.

    Overwrites first name, last name, username and email with the supplied
    values. A blank username answers 400, an unknown one 404.
    """
    service.update_user(username, user)
    return "success update user"
