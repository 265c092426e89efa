"""Data models for client-side page routing.

Immutable frozen dataclasses representing the page table and the state
of a navigation.  The table is built once; a new navigation state is
produced for every navigation.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from burrow.http.query import QueryParams
from burrow.routing.matcher import match_ordered, order_candidates
from burrow.routing.route import RouteEntry, RouteMatch


@dataclass(frozen=True, slots=True)
class PageTable:
    """Ordered page entries plus the fallback page.

    Attributes:
        entries: Page entries in enumeration order.  Fallback entries are
            never part of this tuple.
        fallback: The ``404`` page (or the built-in not-found page).
    """

    entries: tuple[RouteEntry, ...]
    fallback: RouteEntry
    _candidates: tuple[RouteEntry, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_candidates", order_candidates(self.entries))

    def match(self, path: str) -> RouteMatch:
        """Match *path*, falling back to the fallback page.

        Never fails: an unmatched path yields the fallback entry with no
        parameters.
        """
        match = match_ordered(self._candidates, path)
        if match is None:
            return RouteMatch(entry=self.fallback, params={})
        return match

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class NavigationStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class NavigationState:
    """What the navigator shows for one navigation.

    ``path`` is the matched path, ``url`` the location as navigated to
    (query string and fragment included) and ``query`` its parsed query
    string.  ``error`` is set only for ``ERROR``: the page module failed
    to load, and the error boundary should render instead of the page.
    """

    path: str
    status: NavigationStatus
    entry: RouteEntry | None = None
    params: Mapping[str, str] = field(default_factory=dict)
    query: QueryParams = field(default_factory=QueryParams)
    url: str = ""
    page: Any = None
    error: BaseException | None = None

    @property
    def is_fallback(self) -> bool:
        return self.entry is not None and self.entry.is_fallback
