"""Burrow exception hierarchy.

Shared across the pattern compiler, table builders, middleware composer,
and dispatch loop so every module raises and catches the same types.
"""

from dataclasses import dataclass


class BurrowError(Exception):
    """Base for all burrow-specific errors."""


class ConfigurationError(BurrowError):
    """Raised when app configuration or a route tree is invalid.

    Typically surfaces during ``App._freeze()`` at startup.
    """


class InvalidPatternSyntax(ConfigurationError):
    """A path segment uses malformed bracket syntax.

    Fatal at build time: the whole table build is aborted.
    """

    def __init__(self, path: str, segment: str, reason: str) -> None:
        self.path = path
        self.segment = segment
        self.reason = reason
        super().__init__(f"Invalid route segment {segment!r} in {path!r}: {reason}")


class ContractViolation(BurrowError):
    """A middleware chain stage returned something it must not.

    A programming error, not a user-facing fault. The dispatch loop
    logs it and answers with a generic 500.
    """


class ModuleLoadFailure(BurrowError):
    """A route or page module could not be loaded or lacks its export."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot load {path!r}: {detail}")


@dataclass(frozen=True, slots=True)
class HTTPError(BurrowError):
    """An error that maps directly to an HTTP status code.

    Handlers and middleware may raise these; the dispatch loop turns
    them into a response with the same status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route and no asset matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
