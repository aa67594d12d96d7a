# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the logic behind the HTTP surface:
# - models/: Pydantic schemas for data validation
# - services/: User repository operations and the session visit counter
#
# Routes stay thin: they parse the request, call one service method and
# return its result.
# =============================================================================
