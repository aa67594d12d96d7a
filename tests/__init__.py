# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the UserHub API:
# - test_models.py: Pydantic model validation
# - test_user_service.py / test_mongo_client.py: service and driver wrapper
#   against mongomock
# - test_users_api.py / test_pages_api.py: endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================
