# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User document, listing parameters and pages, QR payloads
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    QRRequest,
    QRResponse,
    User,
    UserListParams,
    UserOrder,
    UserPage,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PER_PAGE",
    "QRRequest",
    "QRResponse",
    "User",
    "UserListParams",
    "UserOrder",
    "UserPage",
]
