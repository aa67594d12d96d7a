# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains adapters over third-party libraries:
# - mongo_client.py: MongoDB connection, users collection and username index
# - qr.py: QR code to SVG rendering via segno
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongo_client import MongoClientError, MongoDatabase
from lib.qr import render_svg, wrap_in_html

__all__ = [
    # MongoDB
    "MongoClientError",
    "MongoDatabase",
    # QR
    "render_svg",
    "wrap_in_html",
]
