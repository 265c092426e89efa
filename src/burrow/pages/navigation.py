"""Client-side navigation over a page table.

Matching is synchronous; loading the page module is the suspension
point.  While a load is pending the navigator reports ``LOADING`` for the
new path.  When several navigations overlap, only the most recent one
may commit: a superseded load is awaited to completion but its result
is discarded.  Loads are never cancelled.

Usage::

    navigator = Navigator(build_page_table(modules))
    state = await navigator.navigate("/users/42?tab=posts")
    if state.status is NavigationStatus.ERROR:
        ...  # render the error boundary with state.error
"""

import logging
from urllib.parse import quote

from burrow.errors import ModuleLoadFailure
from burrow.http.query import QueryParams
from burrow.pages.types import NavigationState, NavigationStatus, PageTable

logger = logging.getLogger("burrow.pages")


def _split_location(location: str) -> tuple[str, QueryParams]:
    """Split *location* into its path and parsed query, dropping the fragment."""
    location = location.split("#", 1)[0]
    path, _, query = location.partition("?")
    # Non-ASCII characters are percent-encoded so they decode as UTF-8.
    encoded = quote(query, safe="=&;+%/?:@,$!'()*[]")
    return path or "/", QueryParams(encoded.encode("ascii"))


class Navigator:
    """Resolve locations to loaded pages, most recent navigation wins.

    Not thread-safe: one navigator belongs to one event loop, like the
    UI it drives.
    """

    __slots__ = ("_generation", "_state", "_table")

    def __init__(self, table: PageTable) -> None:
        self._table = table
        self._generation = 0
        self._state = NavigationState(path="", status=NavigationStatus.IDLE)

    @property
    def table(self) -> PageTable:
        return self._table

    @property
    def state(self) -> NavigationState:
        """The state of the most recent navigation."""
        return self._state

    async def navigate(self, location: str) -> NavigationState:
        """Navigate to *location* and return the resulting state.

        If another navigation starts before this one's page has loaded,
        this call returns the newer navigation's state instead of its own.
        Load failures are reported as an ``ERROR`` state, not raised.
        """
        self._generation += 1
        generation = self._generation

        path, query = _split_location(location)
        match = self._table.match(path)
        self._state = NavigationState(
            path=path,
            url=location,
            query=query,
            status=NavigationStatus.LOADING,
            entry=match.entry,
            params=match.params,
        )

        try:
            page = await match.entry.target()
        except ModuleLoadFailure as exc:
            logger.warning("Page for %s failed to load: %s", path, exc)
            result = NavigationState(
                path=path,
                url=location,
                query=query,
                status=NavigationStatus.ERROR,
                entry=match.entry,
                params=match.params,
                error=exc,
            )
        else:
            result = NavigationState(
                path=path,
                url=location,
                query=query,
                status=NavigationStatus.READY,
                entry=match.entry,
                params=match.params,
                page=page,
            )

        if generation != self._generation:
            logger.debug("Discarding superseded navigation to %s", path)
            return self._state

        self._state = result
        return result
