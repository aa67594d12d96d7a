# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Settings and the MongoDB handle are created once per process by
# app.main.create_app / its lifespan and stored on app.state; nothing here
# reaches for a module-level global.
# =============================================================================

from email.message import Message
from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from app.exceptions import UnsupportedMediaTypeError
from core.services.user_service import UserService
from lib.mongo_client import MongoDatabase


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running app was built with."""
    return request.app.state.settings


def get_mongo(request: Request) -> MongoDatabase:
    """Return the process-wide MongoDB handle opened at startup."""
    return request.app.state.mongo


def get_user_service(
    mongo: Annotated[MongoDatabase, Depends(get_mongo)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserService:
    """
    Get a UserService bound to the users collection.

    The service is a lightweight wrapper; the pooled client underneath is
    shared by all requests.
    """
    return UserService(mongo.users, total_scope=settings.USERS_TOTAL_SCOPE)


def require_json_body(request: Request) -> None:
    """
    Reject request bodies that are not declared as JSON.

    Accepts application/json and any application/*+json type.

    Raises:
        UnsupportedMediaTypeError: For any other (or missing) Content-Type
    """
    content_type = request.headers.get("content-type")
    if content_type:
        message = Message()
        message["content-type"] = content_type
        subtype = message.get_content_subtype()
        if message.get_content_maintype() == "application" and (
            subtype == "json" or subtype.endswith("+json")
        ):
            return
    raise UnsupportedMediaTypeError(content_type)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
MongoDep = Annotated[MongoDatabase, Depends(get_mongo)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
