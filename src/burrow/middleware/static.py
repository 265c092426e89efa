"""Static asset serving with single-page-app fallback.

Consulted by the dispatch loop only after no API route matched.  A
GET/HEAD request is resolved against the built assets directory; when
no file exists there, the shell document (``index.html``) is served so
the client-side router can take over.  Any other method gets a 404.
"""

import logging
from pathlib import Path, PurePosixPath

import anyio

from burrow.http.request import Request
from burrow.http.response import Response

logger = logging.getLogger("burrow.server")

# Fixed extension -> content type table
CONTENT_TYPES: dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".htm": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "text/javascript; charset=utf-8",
    ".mjs": "text/javascript; charset=utf-8",
    ".json": "application/json",
    ".map": "application/json",
    ".txt": "text/plain; charset=utf-8",
    ".xml": "application/xml",
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".ico": "image/x-icon",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".wasm": "application/wasm",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"

SHELL_CONTENT_TYPE = "text/html; charset=utf-8"


def content_type_for(path: str | PurePosixPath | Path) -> str:
    """Map a file path's extension to a content type."""
    suffix = PurePosixPath(str(path)).suffix.lower()
    return CONTENT_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)


class StaticAssets:
    """Serve built assets, falling back to the SPA shell document.

    Security: resolves symlinks and verifies the final path is within
    the configured directory to prevent path traversal.

    Usage::

        assets = StaticAssets("dist")
        response = await assets(request)   # asset, shell, 403 or 404
    """

    __slots__ = ("_cache_control", "_directory", "_shell", "_shell_cache_control")

    def __init__(
        self,
        directory: str | Path,
        *,
        shell: str = "index.html",
        cache_control: str = "public, max-age=3600",
        shell_cache_control: str = "no-cache",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._shell = shell
        self._cache_control = cache_control
        self._shell_cache_control = shell_cache_control

    @property
    def directory(self) -> Path:
        return self._directory

    async def __call__(self, request: Request) -> Response:
        """Resolve *request* to an asset, the shell document, or a 404."""
        if request.method not in ("GET", "HEAD"):
            return Response(body="Not Found", status=404)

        head = request.method == "HEAD"
        relative = request.path.lstrip("/")

        if not relative:
            return await self._serve_shell(head=head)

        # Paths the OS cannot represent (embedded NUL, overlong names)
        # are treated as missing assets.
        try:
            file_path = (self._directory / relative).resolve()
        except (ValueError, OSError):
            return await self._serve_shell(head=head)
        if not file_path.is_relative_to(self._directory):
            return Response(body="Forbidden", status=403)

        try:
            is_file = await anyio.Path(file_path).is_file()
        except (ValueError, OSError):
            is_file = False

        if is_file:
            return await self._serve_file(
                file_path,
                content_type=content_type_for(file_path),
                cache_control=self._cache_control,
                head=head,
            )

        return await self._serve_shell(head=head)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _serve_shell(self, *, head: bool) -> Response:
        shell_path = (self._directory / self._shell).resolve()
        if not (shell_path.is_relative_to(self._directory) and await anyio.Path(shell_path).is_file()):
            logger.debug("Shell document %s not found", shell_path)
            return Response(body="Not Found", status=404)

        return await self._serve_file(
            shell_path,
            content_type=SHELL_CONTENT_TYPE,
            cache_control=self._shell_cache_control,
            head=head,
        )

    async def _serve_file(
        self,
        file_path: Path,
        *,
        content_type: str,
        cache_control: str,
        head: bool,
    ) -> Response:
        """Read a file and build a response."""
        body = await anyio.Path(file_path).read_bytes()

        return (
            Response(body=b"" if head else body, content_type=content_type)
            .with_header("Content-Length", str(len(body)))
            .with_header("Cache-Control", cache_control)
        )
