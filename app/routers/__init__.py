# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: User add/get/list/update endpoints
# - qr.py: QR code SVG endpoints
# - pages.py: Favicon, welcome page, root redirect, streaming demo
#
# Each router is mounted in main.py.
# =============================================================================

from . import health
from . import pages
from . import qr
from . import users

__all__ = [
    "health",
    "pages",
    "qr",
    "users",
]
