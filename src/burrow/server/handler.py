"""ASGI handler — the per-request dispatch loop.

The only component that touches raw ASGI directly. Converts the scope to
a Request, matches it against the route table, runs the matched handler
chain or falls back to static assets, and sends the Response back
through ASGI ``send()``::

    Start -> method recognised? -> route matched? -> handler -> Response
                                          | no
                                          +-> GET/HEAD? -> asset or shell
                                          +-> otherwise -> 404

Errors raised anywhere in a handler or its middleware are caught here;
they never escape into the server's accept loop.
"""

from burrow._internal.asgi import Receive, Scope, Send
from burrow._internal.invoke import invoke
from burrow.errors import ContractViolation, HTTPError, NotFound
from burrow.http.request import Request
from burrow.http.response import Response
from burrow.middleware.static import StaticAssets
from burrow.routing.route import HTTP_METHODS, RouteMatch
from burrow.routing.table import RouteTable
from burrow.server.errors import handle_http_error, handle_internal_error
from burrow.server.sender import send_response

# Methods the dispatch loop serves; HEAD is answered by GET routes
RECOGNIZED_METHODS = frozenset({*HTTP_METHODS, "HEAD"})

# Methods allowed to fall back to static assets and the shell document
FALLBACK_METHODS = frozenset({"GET", "HEAD"})


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    assets: StaticAssets | None = None,
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await dispatch(request, table=table, assets=assets)
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug)

    await send_response(response, send, head=request.method == "HEAD")


async def dispatch(
    request: Request,
    *,
    table: RouteTable,
    assets: StaticAssets | None = None,
) -> Response:
    """Resolve *request* to a Response.

    Raises:
        NotFound: For unrecognised methods, and for unmatched requests
            that may not fall back to static assets.
    """
    if request.method not in RECOGNIZED_METHODS:
        raise NotFound(f"Unsupported method {request.method}")

    lookup_method = "GET" if request.method == "HEAD" else request.method
    match = table.match(lookup_method, request.path)
    if match is not None:
        return await _invoke_handler(match, request)

    if request.method in FALLBACK_METHODS and assets is not None:
        return await assets(request)

    raise NotFound(f"No route matches {request.method} {request.path!r}")


async def _invoke_handler(match: RouteMatch, request: Request) -> Response:
    """Call the matched handler with the path parameters attached."""
    routed = request.with_params(match.params)
    response = await invoke(match.entry.target, routed)
    if not isinstance(response, Response):
        msg = (
            f"Handler for {match.entry.method} {match.entry.path} returned "
            f"{type(response).__name__}; it must return a Response"
        )
        raise ContractViolation(msg)
    return response
