# =============================================================================
# tests/test_mongo_client.py - MongoDB Connector Tests
# =============================================================================

from unittest.mock import MagicMock

import mongomock
import pytest
from pymongo.errors import DuplicateKeyError, OperationFailure, ServerSelectionTimeoutError

from app.config import Settings
from lib.mongo_client import USERNAME_INDEX_NAME, MongoClientError, MongoDatabase


class TestMongoDatabase:
    """Tests for MongoDatabase."""

    def test_from_settings(self):
        settings = Settings(
            MONGODB_URI="mongodb://db.example:27017",
            DB_NAME="directory",
            COLL_NAME="people",
            MONGODB_TIMEOUT_MS=1500,
        )

        mongo = MongoDatabase.from_settings(settings)

        assert mongo.uri == "mongodb://db.example:27017"
        assert mongo.db_name == "directory"
        assert mongo.collection_name == "people"
        assert mongo.timeout_ms == 1500

    def test_connect_creates_unique_username_index(self, mongo):
        indexes = mongo.users.index_information()

        assert USERNAME_INDEX_NAME in indexes
        assert indexes[USERNAME_INDEX_NAME]["key"] == [("username", 1)]
        assert indexes[USERNAME_INDEX_NAME]["unique"] is True

    def test_index_enforces_uniqueness(self, mongo):
        mongo.users.insert_one({"username": "alice"})

        with pytest.raises(DuplicateKeyError):
            mongo.users.insert_one({"username": "alice"})

    def test_connect_is_idempotent(self, mongo):
        """Re-running index creation on startup is harmless."""
        assert mongo.ensure_username_index() == USERNAME_INDEX_NAME

    def test_selects_configured_database_and_collection(self):
        client = mongomock.MongoClient()
        mongo = MongoDatabase("mongodb://localhost", "directory", "people", client=client).connect()

        mongo.users.insert_one({"username": "alice"})

        assert client["directory"]["people"].count_documents({}) == 1

    def test_index_failure_is_fatal(self):
        client = MagicMock()
        client.__getitem__.return_value.__getitem__.return_value.create_index.side_effect = (
            ServerSelectionTimeoutError("no servers found")
        )
        mongo = MongoDatabase("mongodb://localhost", "myApp", "users", client=client)

        with pytest.raises(MongoClientError) as exc_info:
            mongo.connect()

        assert exc_info.value.code == "INDEX_CREATE_FAILED"

    def test_index_failure_on_existing_duplicates(self):
        client = mongomock.MongoClient()
        client["myApp"]["users"].insert_many([{"username": "dup"}, {"username": "dup"}])
        mongo = MongoDatabase("mongodb://localhost", "myApp", "users", client=client)

        with pytest.raises(MongoClientError):
            mongo.connect()

    def test_accessing_collection_before_connect(self):
        mongo = MongoDatabase("mongodb://localhost", "myApp", "users")

        with pytest.raises(MongoClientError) as exc_info:
            mongo.users

        assert exc_info.value.code == "NOT_CONNECTED"

    def test_close_releases_client(self):
        client = MagicMock()
        mongo = MongoDatabase("mongodb://localhost", "myApp", "users", client=client)

        mongo.close()

        client.close.assert_called_once()
        with pytest.raises(MongoClientError):
            mongo.client

    def test_ping(self):
        client = MagicMock()
        mongo = MongoDatabase("mongodb://localhost", "myApp", "users", client=client)

        assert mongo.ping() is True
        client.admin.command.assert_called_once_with("ping")

    def test_ping_failure(self):
        client = MagicMock()
        client.admin.command.side_effect = OperationFailure("not authorized")
        mongo = MongoDatabase("mongodb://localhost", "myApp", "users", client=client)

        assert mongo.ping() is False

    def test_ping_when_not_connected(self):
        mongo = MongoDatabase("mongodb://localhost", "myApp", "users")

        assert mongo.ping() is False


class TestMongoClientError:
    """Tests for MongoClientError formatting."""

    def test_str_includes_code_and_suggestion(self):
        error = MongoClientError("boom", code="X", suggestion="fix it")

        assert str(error) == "[X] boom Suggestion: fix it"
