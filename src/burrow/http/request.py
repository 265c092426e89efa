"""Immutable HTTP request.

Frozen metadata with async body access. The request doubles as the
per-request context threaded through a middleware chain: the matcher
attaches ``path_params``, and middleware passes data downstream either
by returning a replacement (``evolve`` / ``with_state``) or by writing
into the request-local ``state`` mapping.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from burrow._internal.asgi import Receive, Scope
from burrow.http.headers import Headers
from burrow.http.query import QueryParams

_BODY_KEY = "body"


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """One incoming request, as seen by middleware and handlers.

    Every field is fixed once the request is built; the body is read
    lazily through ``await request.body()`` (or ``text()`` / ``json()``).

    ``state`` is the one mutable slot: a dict owned by this request (and
    by any replacement derived from it) for middleware-to-handler data.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: Mapping[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    state: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)

    # Private: body cache, shared by every replacement of this request
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent them."""
        query = self.query.raw
        return f"{self.path}?{query}" if query else self.path

    # -- Replacement --

    def evolve(self, **changes: Any) -> Request:
        """Return a copy with *changes* applied.

        The copy shares ``state`` and the body cache with this request,
        so a middleware that swaps the request does not lose data
        written by earlier stages.
        """
        return replace(self, **changes)

    def with_params(self, params: Mapping[str, str]) -> Request:
        """Return a copy carrying the matched path parameters."""
        return replace(self, path_params=dict(params))

    def with_state(self, **values: Any) -> Request:
        """Return a copy whose ``state`` has *values* merged in.

        Unlike writing to ``request.state`` directly, the original
        request's state is left untouched.
        """
        return replace(self, state={**self.state, **values})

    # -- Body --

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks as the server delivers them.

        Can only be consumed once per request; use :meth:`body` when the
        bytes are needed more than once.
        """
        more_body = True
        while more_body:
            message = await self._receive()
            if message["type"] != "http.request":
                return
            more_body = message.get("more_body", False)
            chunk = message.get("body", b"")
            if chunk:
                yield chunk

    async def body(self) -> bytes:
        """The whole body, read once and shared with every replacement."""
        cached = self._cache.get(_BODY_KEY)
        if cached is None:
            cached = b"".join([chunk async for chunk in self.stream()])
            self._cache[_BODY_KEY] = cached
        return cached

    async def text(self, encoding: str = "utf-8") -> str:
        return (await self.body()).decode(encoding)

    async def json(self) -> Any:
        return json_module.loads(await self.body())

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build the request for an ASGI ``http`` scope."""
        peer = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=(peer[0], peer[1]) if peer else None,
            _receive=receive,
        )
