"""
webshop.routing.static

Static asset serving for non-API GET requests.
"""

from __future__ import annotations

from pathlib import Path

from starlette.responses import FileResponse, Response

from webshop.api import responses


class StaticAssetServer:
    def __init__(self, root: Path) -> None:
        self._root = root.resolve()

    @property
    def root(self) -> Path:
        return self._root

    async def serve(self, path: str) -> Response:
        name = path.lstrip("/") or "index.html"
        try:
            target = (self._root / name).resolve()
            # Anything resolving outside the public root (e.g. `..` segments) is a miss.
            found = target.is_relative_to(self._root) and target.is_file()
        except (OSError, ValueError):
            # Names the filesystem cannot represent (embedded NUL, too long).
            found = False
        if not found:
            return responses.not_found()
        return FileResponse(target)
