# =============================================================================
# app/static_files.py - Static Files With Directory Listings
# =============================================================================
# Starlette's StaticFiles serves files but answers 404 for directories
# without an index.html. This subclass renders a plain HTML listing instead.
# =============================================================================

import html
import os
import stat

import anyio
from starlette.exceptions import HTTPException
from starlette.responses import HTMLResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope


class ListingStaticFiles(StaticFiles):
    """StaticFiles that lists directory contents when no file matches."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise

            full_path, stat_result = await anyio.to_thread.run_sync(self.lookup_path, path)
            if stat_result is None or not stat.S_ISDIR(stat_result.st_mode):
                raise

            entries = await anyio.to_thread.run_sync(_list_directory, full_path)
            # Relative links resolve against the directory only with a trailing slash
            prefix = "" if scope["path"].endswith("/") else os.path.basename(full_path) + "/"
            return HTMLResponse(render_listing(scope["path"], entries, prefix))


def _list_directory(directory: str) -> list[tuple[str, bool]]:
    """(name, is_dir) pairs, directories first, then alphabetical."""
    with os.scandir(directory) as it:
        entries = [(entry.name, entry.is_dir()) for entry in it if not entry.name.startswith(".")]
    return sorted(entries, key=lambda entry: (not entry[1], entry[0].lower()))


def render_listing(url_path: str, entries: list[tuple[str, bool]], prefix: str = "") -> str:
    """Render an HTML index of `entries`, linking each one as `prefix + name`."""
    title = html.escape(f"Index of {url_path}")

    items = []
    for name, is_dir in entries:
        label = name + "/" if is_dir else name
        href = html.escape(prefix + label, quote=True)
        items.append(f'<li><a href="{href}">{html.escape(label)}</a></li>')

    return (
        "<!DOCTYPE html>\n"
        f"<html><head><meta charset=\"utf-8\"><title>{title}</title></head>\n"
        f"<body><h1>{title}</h1>\n<ul>\n" + "\n".join(items) + "\n</ul>\n</body></html>\n"
    )
