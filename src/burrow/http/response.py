"""Immutable HTTP response value.

Handlers build a ``Response`` and refine it with ``with_*`` calls; each
call returns a fresh copy, so a response shared between requests (a
module-level constant, say) can never be changed underneath them.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

PLAIN_TEXT = "text/plain; charset=utf-8"
JSON = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, content type, extra headers and a body.

    ``body`` may be ``str`` (sent as UTF-8) or ``bytes``.  Header names
    keep the case they were given; lookups through :meth:`header` ignore
    case.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = PLAIN_TEXT
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def json(cls, data: Any, *, status: int = 200) -> "Response":
        """Serialize *data* with :func:`json.dumps`."""
        return cls(json_module.dumps(data), status=status, content_type=JSON)

    def with_status(self, status: int) -> "Response":
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> "Response":
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> "Response":
        """Append one header; earlier values for *name* are kept."""
        return self.with_headers({name: value})

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        return replace(self, headers=self.headers + tuple(headers.items()))

    def header(self, name: str) -> str | None:
        """First value sent under *name*, or ``None``."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        body = self.body
        return body.encode("utf-8") if isinstance(body, str) else body

    @property
    def text(self) -> str:
        body = self.body
        return body.decode("utf-8") if isinstance(body, bytes) else body
