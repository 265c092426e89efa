"""Server route table — HTTP method to ``{pattern: entry}``.

Built once at startup and read-only afterwards.  Concurrent requests
share it without locking because nothing writes to it after
construction; a reload builds a new table and swaps the reference.
"""

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from burrow.routing.matcher import match_ordered, order_candidates
from burrow.routing.route import RouteEntry, RouteMatch


class RouteTable:
    """Immutable per-method route table.

    Entries are keyed by rendered pattern within a method, so a later
    entry with the same (method, pattern) replaces an earlier one while
    keeping the earlier one's position.

    Usage::

        table = RouteTable.from_entries(entries)
        match = table.match("GET", "/api/widgets/42")
    """

    __slots__ = ("_by_method", "_candidates")

    def __init__(self, entries: Iterable[RouteEntry] = ()) -> None:
        by_method: dict[str, dict[str, RouteEntry]] = {}
        for entry in entries:
            by_method.setdefault(entry.method, {})[entry.path] = entry

        self._by_method = MappingProxyType(
            {method: MappingProxyType(routes) for method, routes in by_method.items()}
        )
        # Precomputed static-first order per method
        self._candidates = MappingProxyType(
            {method: order_candidates(routes.values()) for method, routes in by_method.items()}
        )

    @classmethod
    def from_entries(cls, entries: Iterable[RouteEntry]) -> "RouteTable":
        return cls(entries)

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Match *path* among the entries registered for *method*."""
        candidates = self._candidates.get(method)
        if not candidates:
            return None
        return match_ordered(candidates, path)

    def get(self, method: str, pattern: str) -> RouteEntry | None:
        """Look up the entry registered for an exact (method, pattern)."""
        routes = self._by_method.get(method)
        if routes is None:
            return None
        return routes.get(pattern)

    @property
    def methods(self) -> tuple[str, ...]:
        return tuple(self._by_method)

    def entries(self, method: str | None = None) -> tuple[RouteEntry, ...]:
        """Entries in registration order, for one method or all of them."""
        if method is not None:
            return tuple(self._by_method.get(method, {}).values())
        return tuple(entry for routes in self._by_method.values() for entry in routes.values())

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return sum(len(routes) for routes in self._by_method.values())

    def __repr__(self) -> str:
        return f"RouteTable({len(self)} routes, methods={list(self._by_method)})"
