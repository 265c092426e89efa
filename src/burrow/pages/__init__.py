"""Client-side page routing.

The page tree mirrors the server routes tree, but entries are lazily
loaded page modules instead of request handlers:

    pages/
      index.py           # /
      [shop]/
        route.py         # /:shop/route
      404.py             # fallback for unmatched locations

Usage::

    table = discover_pages("pages")
    navigator = Navigator(table)
    state = await navigator.navigate("/acme/route")
"""

from burrow.pages.discovery import (
    build_page_table,
    discover_pages,
    enumerate_pages,
    lazy_page,
    not_found_page,
)
from burrow.pages.navigation import Navigator
from burrow.pages.types import NavigationState, NavigationStatus, PageTable

__all__ = [
    "NavigationState",
    "NavigationStatus",
    "Navigator",
    "PageTable",
    "build_page_table",
    "discover_pages",
    "enumerate_pages",
    "lazy_page",
    "not_found_page",
]
