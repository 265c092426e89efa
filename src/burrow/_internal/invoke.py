"""Invoke helpers — call sync or async callables uniformly.

Route handlers, middleware, and page loaders can all be ``def`` or
``async def``. Any code that calls user-provided callables must handle
both cases, so the sync/async check lives here.

Usage::

    from burrow._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
