"""RouteEntry and RouteMatch frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from burrow.routing.pattern import PathPattern

# Methods a route file may register (file stem, uppercased)
HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")

# Pseudo-method for client page entries
RENDER = "RENDER"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A frozen route definition.

    ``target`` is a request handler for server entries and a lazy page
    loader for client entries.
    """

    method: str
    pattern: PathPattern
    target: Callable[..., Any]
    is_fallback: bool = False
    source: str | None = None

    @property
    def path(self) -> str:
        """The rendered pattern, e.g. ``/users/:id``."""
        return str(self.pattern)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match."""

    entry: RouteEntry
    params: Mapping[str, str] = field(default_factory=dict)
