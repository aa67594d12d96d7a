# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService, page_window, username_filter
from .visit_counter import COUNTER_KEY, bump_visit_counter

__all__ = [
    "UserService",
    "page_window",
    "username_filter",
    "COUNTER_KEY",
    "bump_visit_counter",
]
