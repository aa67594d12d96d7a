# =============================================================================
# lib/qr.py - QR Code Rendering
# =============================================================================
# Thin adapter over segno: turns a string payload into SVG markup.
# Rendering is pure, so the same data always produces the same bytes.
# =============================================================================

import io
import logging

import segno

from app.exceptions import QRRenderError

logger = logging.getLogger(__name__)


def render_svg(data: str, scale: int = 4, error: str = "m") -> str:
    """
    Render `data` as a QR code and return the SVG document.

    Always produces a regular (not Micro) QR code; the smallest version that
    fits the payload is chosen by segno. The XML declaration is omitted so
    the markup can be embedded in HTML or JSON directly.

    Args:
        data: Payload to encode; may be empty
        scale: Size of one module in SVG user units
        error: Error correction level ("l", "m", "q" or "h")

    Returns:
        SVG markup as a string

    Raises:
        QRRenderError: If segno refuses the payload (e.g. too large)
    """
    try:
        qr = segno.make_qr(data, error=error, boost_error=False)
    except ValueError as e:
        # segno.DataOverflowError is a ValueError
        logger.info(f"QR rendering refused {len(data)} characters: {e}")
        raise QRRenderError(str(e))

    buff = io.BytesIO()
    qr.save(buff, kind="svg", scale=scale, xmldecl=False)
    return buff.getvalue().decode("utf-8")


def wrap_in_html(svg: str, title: str = "QR code") -> str:
    """Embed SVG markup in a minimal HTML document."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        f"<head><meta charset=\"utf-8\"><title>{title}</title></head>\n"
        f"<body>\n{svg}\n</body>\n"
        "</html>\n"
    )
