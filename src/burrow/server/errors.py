"""Error handling at the dispatch boundary.

Maps HTTPError exceptions and unexpected failures to Response objects.
Internal errors are logged in full but never echoed to the client
outside debug mode.
"""

import logging

from burrow.errors import ContractViolation, HTTPError
from burrow.http.request import Request
from burrow.http.response import Response

logger = logging.getLogger("burrow.server")

INTERNAL_ERROR_BODY = "Internal Server Error"


def handle_http_error(exc: HTTPError, request: Request, debug: bool = False) -> Response:
    """Map an HTTPError to a plain-text response with the same status."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, debug: bool = False) -> Response:
    """Log an unexpected exception and answer with a generic 500.

    Must be called from inside the ``except`` block so the traceback
    is attached to the log record.
    """
    if isinstance(exc, ContractViolation):
        logger.exception("500 %s %s — middleware contract violated", request.method, request.path)
    else:
        logger.exception("500 %s %s", request.method, request.path)

    body = INTERNAL_ERROR_BODY
    if debug:
        body = f"{INTERNAL_ERROR_BODY}\n\n{type(exc).__name__}: {exc}"
    return Response(body=body, status=500)
