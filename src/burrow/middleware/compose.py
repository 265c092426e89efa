"""Middleware composer — chain stages around a terminal handler.

Usage, in a route module::

    from burrow import Response, with_middleware

    def log_method(request):
        request.state["seen_by"] = "log_method"

    async def get_widget(request):
        return Response.json({"id": request.path_params["id"]})

    handler = with_middleware(log_method, get_widget)

Every stage but the last receives the current request and returns:

- a ``Response``: the chain stops and that response is the result;
- a ``Request``: the chain continues with it as the current request;
- ``None``: the chain continues with the current request unchanged.

The last callable is the terminal handler and must return a
``Response``.  Anything else is a :class:`~burrow.errors.ContractViolation`.
"""

from collections.abc import Callable
from typing import Any

from burrow._internal.invoke import invoke
from burrow.errors import ContractViolation
from burrow.http.request import Request
from burrow.http.response import Response


def _name(func: Any) -> str:
    return getattr(func, "__qualname__", None) or type(func).__name__


def with_middleware(*fns: Callable[..., Any]) -> Callable[[Request], Any]:
    """Compose *fns* into one async request handler.

    The chain is fixed at composition time; the returned handler can be
    called concurrently because each call keeps its own current request.

    Raises:
        ValueError: If no functions are given.
    """
    if not fns:
        msg = "with_middleware() needs at least a terminal handler"
        raise ValueError(msg)

    stages = fns[:-1]
    terminal = fns[-1]

    async def composed(request: Request) -> Response:
        current = request

        for stage in stages:
            result = await invoke(stage, current)
            if isinstance(result, Response):
                return result
            if isinstance(result, Request):
                current = result
            elif result is not None:
                msg = (
                    f"Middleware {_name(stage)} returned {type(result).__name__}; "
                    "expected Response, Request or None"
                )
                raise ContractViolation(msg)

        final = await invoke(terminal, current)
        if not isinstance(final, Response):
            msg = (
                f"Terminal handler {_name(terminal)} returned {type(final).__name__}; "
                "it must return a Response"
            )
            raise ContractViolation(msg)
        return final

    composed.__name__ = f"with_middleware({_name(terminal)})"
    composed.__qualname__ = composed.__name__
    composed.__wrapped__ = terminal  # type: ignore[attr-defined]
    return composed
