# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - User: One user document (request body for add/update, response for get)
# - UserOrder: Sort order for listings
# - UserListParams: Query parameters of GET /users
# - UserPage: One page of a listing
#
# Users are stored one document per user; `username` is the identity key
# and is kept unique by a database index.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10


class User(BaseModel):
    """
    A user document.

    All four fields are required but may be empty strings. Extra keys in a
    request body (and MongoDB's `_id` when loading documents) are ignored.

    Example:
        {
            "username": "alice",
            "first_name": "Alice",
            "last_name": "Liddell",
            "email": "alice@example.com"
        }
    """

    model_config = ConfigDict(extra="ignore")

    username: str = Field(
        ...,
        description="Unique username; identifies the user in URLs"
    )

    first_name: str = Field(
        ...,
        description="Given name"
    )

    last_name: str = Field(
        ...,
        description="Family name"
    )

    email: str = Field(
        ...,
        description="Contact email address"
    )


class UserOrder(str, Enum):
    """
    Sort order for user listings.

    - NEW: most recently inserted first
    - OLD: oldest first
    """
    NEW = "NEW"
    OLD = "OLD"


class UserListParams(BaseModel):
    """
    Listing parameters.

    `page` and `per_page` are taken as given; the service clamps them when
    turning them into skip/limit values.
    """

    search: str = Field(
        default="",
        description="Case-insensitive substring matched against usernames"
    )

    page: int = Field(
        default=DEFAULT_PAGE,
        description="1-based page number"
    )

    per_page: int = Field(
        default=DEFAULT_PER_PAGE,
        description="Users per page"
    )

    order: UserOrder = Field(
        default=UserOrder.NEW,
        description="Sort order"
    )


class UserPage(BaseModel):
    """
    One page of users.

    Returned by GET /users.

    Example:
        {
            "data": [...],
            "total": 42,
            "page": 1,
            "per_page": 10
        }
    """

    data: list[User] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Number of users counted for this listing")
    page: int
    per_page: int


class QRRequest(BaseModel):
    """Body of POST /api/svg."""
    data: str = Field(..., description="Text to encode in the QR code")


class QRResponse(BaseModel):
    """JSON answer of POST /api/svg."""
    svg: str = Field(..., description="SVG markup of the QR code")
