# =============================================================================
# core/services/user_service.py - User Repository Operations
# =============================================================================
# Handles user CRUD against the users collection.
# Separates HTTP concerns from database logic: routes call these methods and
# let the raised UserHubException subclasses become HTTP responses.
# =============================================================================

import logging
import re
from typing import Any, Literal

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.exceptions import (
    DatabaseError,
    InvalidUsernameError,
    UserNotFoundError,
)
from core.models.user import DEFAULT_PER_PAGE, User, UserListParams, UserOrder, UserPage

logger = logging.getLogger(__name__)

# Never send MongoDB's ObjectId back to clients
USER_PROJECTION = {"_id": False}

MAX_BSON_INT = 2**63 - 1


def page_window(page: int, per_page: int) -> tuple[int, int]:
    """
    Turn a page number and page size into (skip, limit).

    A non-positive page size falls back to the default, since a limit of 0
    means "no limit" to MongoDB. Pages before the first clamp to skip 0.
    BSON only carries 64-bit integers, so a limit past that range falls back
    to the default and a skip past it to 0.

    Example:
        page_window(3, 2)        # (4, 2)
        page_window(0, 10)       # (0, 10)
        page_window(1, -5)       # (0, 10)
        page_window(10**19, 10)  # (0, 10)
    """
    limit = per_page if 0 < per_page <= MAX_BSON_INT else DEFAULT_PER_PAGE
    skip = (page - 1) * limit
    if not 0 <= skip <= MAX_BSON_INT:
        skip = 0
    return skip, limit


def username_filter(search: str) -> dict[str, Any]:
    """Case-insensitive literal substring match on username."""
    return {"username": {"$regex": re.escape(search), "$options": "i"}}


class UserService:
    """
    Service for user management operations.

    Wraps one pymongo Collection. Every driver failure is logged with the
    driver's message and re-raised as DatabaseError, which carries none of it.
    """

    def __init__(
        self,
        collection: Collection,
        total_scope: Literal["matching", "all"] = "matching",
    ):
        self.collection = collection
        self.total_scope = total_scope

    def add_user(self, user: User) -> None:
        """
        Insert a new user.

        Args:
            user: The user to store

        Raises:
            DatabaseError: If the insert fails, including a username the
                unique index rejects
        """
        try:
            self.collection.insert_one(user.model_dump())
        except PyMongoError as e:
            logger.error(f"Failed to add user {user.username}: {e}")
            raise DatabaseError("add_user")

        logger.info(f"Added user: {user.username}")

    def get_user(self, username: str) -> User:
        """
        Get a user by exact username.

        Raises:
            UserNotFoundError: If no document matches
            DatabaseError: If the lookup fails
        """
        try:
            document = self.collection.find_one({"username": username}, USER_PROJECTION)
        except PyMongoError as e:
            logger.error(f"Failed to get user {username}: {e}")
            raise DatabaseError("get_user")

        if document is None:
            raise UserNotFoundError(username)

        return User.model_validate(document)

    def list_users(self, params: UserListParams) -> UserPage:
        """
        List users whose username contains `params.search`, one page at a time.

        NEW sorts by insertion order descending, OLD ascending (ObjectIds
        grow with insertion time). `total` counts the matching documents, or
        the whole collection when the service was built with
        total_scope="all".

        Returns:
            UserPage echoing the requested page and per_page

        Raises:
            DatabaseError: If the query or count fails
        """
        query = username_filter(params.search)
        skip, limit = page_window(params.page, params.per_page)
        direction = DESCENDING if params.order == UserOrder.NEW else ASCENDING

        try:
            cursor = (
                self.collection.find(query, USER_PROJECTION)
                .sort("_id", direction)
                .skip(skip)
                .limit(limit)
            )
            users = [User.model_validate(document) for document in cursor]
            total = self.collection.count_documents(query if self.total_scope == "matching" else {})
        except PyMongoError as e:
            logger.error(f"Failed to list users (search={params.search!r}): {e}")
            raise DatabaseError("list_users")

        logger.debug(f"Listed {len(users)} of {total} users (skip={skip}, limit={limit})")

        return UserPage(
            data=users,
            total=total,
            page=params.page,
            per_page=params.per_page,
        )

    def update_user(self, username: str, user: User) -> None:
        """
        Overwrite every field of the user identified by `username`.

        All four fields are set to the supplied values, including renaming
        the user when `user.username` differs.

        Args:
            username: Current username (from the URL path)
            user: New field values

        Raises:
            InvalidUsernameError: If `username` is blank (no database call)
            UserNotFoundError: If no document matches
            DatabaseError: If the update fails, including a rename onto a
                taken username
        """
        if not username.strip():
            raise InvalidUsernameError()

        try:
            updated = self.collection.find_one_and_update(
                {"username": username},
                {"$set": user.model_dump()},
                projection=USER_PROJECTION,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update user {username}: {e}")
            raise DatabaseError("update_user")

        if updated is None:
            raise UserNotFoundError(username)

        logger.info(f"Updated user: {username}")
