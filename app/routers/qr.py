# =============================================================================
# app/routers/qr.py - QR Code Endpoints
# =============================================================================
# Renders QR codes as SVG:
# - GET  /api/qr?data=...  -> SVG inside a small HTML page
# - POST /api/svg {"data"} -> {"svg": "..."} or raw SVG for Accept: image/svg+xml
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, Response

from app.dependencies import SettingsDep, require_json_body
from core.models.user import QRRequest, QRResponse
from lib.qr import render_svg, wrap_in_html

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"


def accepts_svg(accept: str | None) -> bool:
    """
    True when the Accept header names image/svg+xml with a non-zero q value.

    Wildcards do not count: clients get raw SVG only by asking for it.
    """
    for media_range in (accept or "").split(","):
        media_type, *params = (part.strip() for part in media_range.split(";"))
        if media_type.lower() != SVG_MEDIA_TYPE:
            continue
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            return True
    return False


@router.get("/api/qr", response_class=HTMLResponse)
def generate_qr(
    data: Annotated[str, Query(description="Text to encode")],
    settings: SettingsDep,
):
    """
    Render `data` as a QR code inside an HTML page.

    A missing `data` parameter answers 400.
    """
    svg = render_svg(data, scale=settings.QR_SCALE, error=settings.QR_ERROR_LEVEL)
    return HTMLResponse(wrap_in_html(svg))


@router.post(
    "/api/svg",
    response_model=QRResponse,
    dependencies=[Depends(require_json_body)],
    responses={200: {"content": {SVG_MEDIA_TYPE: {}}}},
)
def get_svg(body: QRRequest, request: Request, settings: SettingsDep):
    """
    Render the `data` field of the JSON body as a QR code.

    Returns `{"svg": ...}` by default. Clients sending
    `Accept: image/svg+xml` receive the SVG document itself.
    """
    svg = render_svg(body.data, scale=settings.QR_SCALE, error=settings.QR_ERROR_LEVEL)

    if accepts_svg(request.headers.get("accept")):
        return Response(content=svg, media_type=SVG_MEDIA_TYPE)

    return QRResponse(svg=svg)
