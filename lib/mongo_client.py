# =============================================================================
# lib/mongo_client.py - MongoDB Client Wrapper
# =============================================================================
# This module owns the connection to the document store:
# - Opens a MongoClient from the configured URI
# - Selects the users database and collection
# - Ensures the unique index on `username` exists
# - Provides a cheap ping for readiness checks
#
# One MongoDatabase is created per process at startup and stored on
# app.state; handlers reach it through app.dependencies.
#
# Usage:
#   from lib.mongo_client import MongoDatabase
#   mongo = MongoDatabase.from_settings(settings)
#   mongo.connect()
#   mongo.users.find_one({"username": "alice"})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)

USERNAME_INDEX_NAME = "username_unique"


class MongoClientError(Exception):
    """
    Error while connecting to or preparing MongoDB.

    Raised at startup; the API refuses to start without a usable database.
    """

    def __init__(
        self,
        message: str,
        code: str = "MONGO_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class MongoDatabase:
    """
    Handle on the users collection of one MongoDB database.

    The underlying MongoClient is thread-safe and pools connections, so a
    single instance is shared by every request handler in the process.

    Example:
        mongo = MongoDatabase("mongodb://localhost:27017", "myApp", "users")
        mongo.connect()
        mongo.users.insert_one({"username": "alice", ...})
        mongo.close()
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        collection_name: str,
        timeout_ms: int = 30000,
        client: MongoClient | None = None,
    ):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.timeout_ms = timeout_ms
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> MongoDatabase:
        """Build an unconnected handle from application settings."""
        return cls(
            uri=settings.MONGODB_URI,
            db_name=settings.DB_NAME,
            collection_name=settings.COLL_NAME,
            timeout_ms=settings.MONGODB_TIMEOUT_MS,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def connect(self) -> MongoDatabase:
        """
        Open the client (unless one was injected) and ensure the username index.

        Index creation is the first real round trip, so an unreachable server
        fails here rather than on the first request.

        Raises:
            MongoClientError: If the client cannot be created or the index
                cannot be built
        """
        if self._client is None:
            try:
                self._client = MongoClient(
                    self.uri,
                    serverSelectionTimeoutMS=self.timeout_ms,
                )
            except PyMongoError as e:
                raise MongoClientError(
                    message=f"Failed to create MongoDB client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check MONGODB_URI in your .env file",
                )

        self.ensure_username_index()
        logger.info(f"Connected to MongoDB database '{self.db_name}', collection '{self.collection_name}'")
        return self

    def ensure_username_index(self) -> str:
        """
        Create the unique index on `username` if it does not exist.

        Returns:
            The index name

        Raises:
            MongoClientError: If index creation fails (including when existing
                documents already violate uniqueness)
        """
        try:
            name = self.users.create_index(
                [("username", ASCENDING)],
                unique=True,
                name=USERNAME_INDEX_NAME,
            )
            logger.debug(f"Ensured index {name} on {self.collection_name}")
            return name
        except PyMongoError as e:
            raise MongoClientError(
                message=f"Failed to create username index: {e}",
                code="INDEX_CREATE_FAILED",
                suggestion="Check the server is reachable and no duplicate usernames are stored",
                details={"collection": self.collection_name},
            )

    def close(self) -> None:
        """Close the client and release pooled connections."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("MongoDB client closed")

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            raise MongoClientError(
                message="MongoDB client is not connected",
                code="NOT_CONNECTED",
                suggestion="Call connect() during application startup",
            )
        return self._client

    @property
    def database(self) -> Database:
        return self.client[self.db_name]

    @property
    def users(self) -> Collection:
        return self.database[self.collection_name]

    def ping(self) -> bool:
        """Return True if the server answers a ping command."""
        try:
            self.client.admin.command("ping")
            return True
        except (PyMongoError, MongoClientError) as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False
