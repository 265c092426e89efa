"""Handler and middleware shapes.

A route handler is any callable::

    async def handler(request: Request) -> Response: ...

A middleware stage is any callable::

    async def stage(request: Request) -> Response | Request | None: ...

Both may also be plain ``def`` functions.  No base class required.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from burrow.http.request import Request
from burrow.http.response import Response

# What a middleware stage may produce
type MiddlewareResult = Response | Request | None

# The terminal handler of a chain (and every registered route handler)
type Handler = Callable[[Request], Response | Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for burrow middleware stages.

    Accepts both functions and callable objects::

        # Function middleware: stash data for the handler
        def tag_request(request: Request) -> None:
            request.state["tagged"] = True

        # Class middleware: short-circuit with a response
        class RequireToken:
            async def __call__(self, request: Request) -> Response | None:
                if "authorization" not in request.headers:
                    return Response("Unauthorized", status=401)
                return None
    """

    def __call__(self, request: Request) -> MiddlewareResult | Awaitable[MiddlewareResult]: ...
