# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the UserHub API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python scripts/start_server.py
# =============================================================================

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from app import __version__
from app.config import Settings, get_settings
from app.exceptions import (
    UserHubException,
    UserNotFoundError,
    not_found_exception_handler,
    unhandled_exception_handler,
    user_not_found_exception_handler,
    userhub_exception_handler,
    validation_exception_handler,
)
from app.routers import health, pages, qr, users
from app.static_files import ListingStaticFiles
from lib.mongo_client import MongoDatabase

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging once, DEBUG level when settings.DEBUG is set."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format=LOG_FORMAT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Connect to MongoDB and ensure the username index. Any failure
      propagates and aborts the server start.
    - Shutdown: Close the MongoDB client
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting UserHub API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    mongo = MongoDatabase.from_settings(settings).connect()
    app.state.mongo = mongo

    yield

    # Shutdown
    logger.info("Shutting down UserHub API")
    mongo.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the cached environment settings

    Returns:
        Configured FastAPI app. `app.state.settings` holds the settings;
        `app.state.mongo` is set by the lifespan handler on startup.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="UserHub API",
        description="""
## User Directory and QR Code API

Stores users in MongoDB and renders QR codes as SVG.

### Endpoints

| Area | Routes |
|------|--------|
| **Users** | `POST /api/add_user`, `GET /api/get_user/{username}`, `GET /users`, `PUT /user/{username}` |
| **QR codes** | `GET /api/qr?data=...`, `POST /api/svg` |
| **Pages** | `GET /welcome`, `GET /favicon`, `GET /async-body/{name}`, `/static/*` |

### Quick Start

```bash
curl -X POST http://localhost:8080/api/add_user \\
  -H "Content-Type: application/json" \\
  -d '{"username": "alice", "first_name": "Alice", "last_name": "Liddell", "email": "alice@example.com"}'

curl http://localhost:8080/api/get_user/alice

curl "http://localhost:8080/users?search=ali&page=1&per_page=10&order=NEW"
```
""",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Users", "description": "Add, get, list and update users"},
            {"name": "QR", "description": "QR code rendering"},
            {"name": "Pages", "description": "Welcome page, favicon and demo endpoints"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )
    app.state.settings = settings

    # =========================================================================
    # Middleware
    # =========================================================================
    # Each add wraps the previous ones: requests pass request logging, CORS,
    # gzip and finally the session cookie on their way in.

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        https_only=settings.SESSION_COOKIE_SECURE,
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Accept", "Content-Type"],
        max_age=settings.CORS_MAX_AGE,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log method, path, status and duration of every request."""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
        return response

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(UserNotFoundError, user_not_found_exception_handler)
    app.add_exception_handler(UserHubException, userhub_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(users.router, tags=["Users"])
    app.include_router(qr.router, tags=["QR"])
    app.include_router(pages.router, tags=["Pages"])
    app.include_router(health.router, prefix="/api", tags=["Health"])

    # Static files, with directory listings
    app.mount(
        "/static",
        ListingStaticFiles(directory=settings.PATH_STATIC, check_dir=False),
        name="static",
    )

    return app


app = create_app()
