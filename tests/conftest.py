# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides mongomock-backed collections with the production username index
# - Builds TestClients around apps created by create_app
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds a module-level app from the environment on import

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("DB_NAME", "userhub-test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from core.models.user import User
from core.services.user_service import UserService
from lib.mongo_client import MongoDatabase


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def mongo():
    """A connected MongoDatabase on an in-memory mongomock client."""
    database = MongoDatabase(
        uri="mongodb://localhost:27017",
        db_name="userhub-test",
        collection_name="users",
        client=mongomock.MongoClient(),
    )
    database.connect()
    yield database
    database.close()


@pytest.fixture
def users_collection(mongo):
    """The users collection, with the unique username index in place."""
    return mongo.users


@pytest.fixture
def user_service(users_collection):
    """UserService counting matching documents (the default)."""
    return UserService(users_collection)


# =============================================================================
# Sample Data
# =============================================================================

@pytest.fixture
def alice():
    """The user from the add/get scenario."""
    return User(username="alice", first_name="A", last_name="B", email="a@x.com")


@pytest.fixture
def five_users():
    """Five users; three have 'an' in their username."""
    return [
        User(username="anna", first_name="Anna", last_name="Karenina", email="anna@example.com"),
        User(username="brian", first_name="Brian", last_name="Cohen", email="brian@example.com"),
        User(username="carol", first_name="Carol", last_name="Danvers", email="carol@example.com"),
        User(username="DANIEL", first_name="Daniel", last_name="Jackson", email="daniel@example.com"),
        User(username="erin", first_name="Erin", last_name="Gilbert", email="erin@example.com"),
    ]


@pytest.fixture
def seeded_service(user_service, five_users):
    """UserService with the five sample users inserted in order."""
    for user in five_users:
        user_service.add_user(user)
    return user_service


# =============================================================================
# HTTP Fixtures
# =============================================================================

@pytest.fixture
def make_client(mongo):
    """
    Factory for TestClients.

    The lifespan handler is not entered, so no real MongoDB is contacted;
    app.state.mongo is set directly instead.

    Usage:
        client = make_client(USERS_TOTAL_SCOPE="all")
        client = make_client(mongo_handle=MagicMock(spec=MongoDatabase))
    """
    def _make(mongo_handle=None, **overrides) -> TestClient:
        app = create_app(Settings(**overrides))
        app.state.mongo = mongo_handle if mongo_handle is not None else mongo
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    """TestClient over the default settings and the mongomock database."""
    return make_client()
