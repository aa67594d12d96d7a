# =============================================================================
# app/routers/pages.py - Page Endpoints
# =============================================================================
# Browser-facing endpoints backed by files in PATH_STATIC:
# - GET /                  -> redirect to the static welcome page
# - GET /favicon           -> favicon.ico
# - GET /welcome           -> welcome.html, counting visits in the session
# - GET /async-body/{name} -> streamed greeting
# =============================================================================

import logging
from collections.abc import AsyncIterator
from pathlib import Path as PathType
from typing import Annotated

from fastapi import APIRouter, Path, Request
from fastapi.responses import FileResponse, RedirectResponse, StreamingResponse

from app.config import Settings
from app.dependencies import SettingsDep
from app.exceptions import StaticFileNotFoundError
from core.services.visit_counter import bump_visit_counter

logger = logging.getLogger(__name__)

router = APIRouter()


def _static_file(settings: Settings, filename: str) -> PathType:
    path = settings.static_dir / filename
    if not path.is_file():
        raise StaticFileNotFoundError(filename)
    return path


@router.get("/", include_in_schema=False)
async def root():
    """Send browsers to the static welcome page."""
    return RedirectResponse(url="/static/welcome.html", status_code=302)


@router.get("/favicon")
def favicon(settings: SettingsDep):
    """Serve the site icon."""
    return FileResponse(_static_file(settings, "favicon.ico"), media_type="image/x-icon")


@router.get("/welcome")
def welcome(request: Request, settings: SettingsDep):
    """
    Serve the welcome page and count the visit.

    The counter lives in the signed session cookie: first visit sets it to
    1, each later visit with a valid cookie adds one.
    """
    page = _static_file(settings, "welcome.html")
    counter = bump_visit_counter(request.session)
    logger.debug(f"Welcome visit #{counter} from {request.client.host if request.client else 'unknown'}")

    return FileResponse(page, media_type="text/html")


async def _greeting(name: str) -> AsyncIterator[bytes]:
    yield b"Hello "
    yield name.encode("utf-8")
    yield b"!"


@router.get("/async-body/{name}")
async def streaming_response(name: Annotated[str, Path(description="Who to greet")]):
    """Stream `Hello {name}!` in three chunks."""
    return StreamingResponse(_greeting(name), media_type="text/plain")
