"""Middleware — Protocol-based, no inheritance required.

A middleware stage is any callable matching:
    async def stage(request: Request) -> Response | Request | None

Provided here:
    with_middleware -- Compose stages around a terminal handler
    StaticAssets -- Serve built assets with SPA shell fallback
"""

from burrow.middleware.compose import with_middleware
from burrow.middleware.protocol import Handler, Middleware, MiddlewareResult
from burrow.middleware.static import StaticAssets, content_type_for

__all__ = [
    "Handler",
    "Middleware",
    "MiddlewareResult",
    "StaticAssets",
    "content_type_for",
    "with_middleware",
]
