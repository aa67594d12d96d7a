# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - dependencies.py: Settings, database and service providers
# - static_files.py: Static mount with directory listings
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# database logic to the core/ package.
# =============================================================================

__version__ = "1.0.0"
