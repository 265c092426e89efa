"""Page table construction for client-side routing.

A build tool enumerates every page module under the pages root and hands
over a ``module path -> loader`` mapping.  This module turns that mapping
into a :class:`PageTable`:

- paths inside an ``api`` subtree are dropped (the server owns them);
- files whose name starts with ``_`` are private and dropped;
- the ``404`` page becomes the fallback entry;
- every other path is compiled with the pattern compiler.

Each loader is wrapped so the loaded module's ``page`` export is
returned, and any loading error surfaces as
:class:`~burrow.errors.ModuleLoadFailure`.

Conventions::

    pages/
      index.py            # /
      about.py            # /about
      [shop]/
        route.py          # /:shop/route
      docs/
        [...slug].py      # /docs/:slug*
      404.py              # fallback
      api/                # excluded
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from functools import partial
from pathlib import Path
from typing import Any

from anyio import to_thread

from burrow.errors import ConfigurationError, ModuleLoadFailure
from burrow.loader import PAGE_EXPORT, get_export, load_module
from burrow.pages.types import PageTable
from burrow.routing.pattern import (
    FALLBACK_NAME,
    compile_pattern,
    is_api_path,
    is_fallback_path,
    split_path,
)
from burrow.routing.route import RENDER, RouteEntry

logger = logging.getLogger("burrow.pages")

# Default pages root segment stripped from module keys
PAGES_ROOT = "pages"

# A loader returns a module (or an awaitable of one)
type PageLoader = Callable[[], Any]

# A wrapped loader returns the page export
type LazyPage = Callable[[], Awaitable[Any]]


def not_found_page() -> str:
    """Built-in fallback page used when no ``404`` page exists."""
    return "no route found"


def lazy_page(loader: PageLoader, *, source: str) -> LazyPage:
    """Wrap *loader* so awaiting it yields the module's ``page`` export.

    Sync loaders run in a worker thread so a slow import does not block
    the event loop.
    """

    async def load() -> Any:
        try:
            if inspect.iscoroutinefunction(loader):
                module = await loader()
            else:
                module = await to_thread.run_sync(loader)
                if inspect.isawaitable(module):
                    module = await module
        except ModuleLoadFailure:
            raise
        except Exception as exc:
            raise ModuleLoadFailure(source, f"{type(exc).__name__}: {exc}") from exc
        return get_export(module, PAGE_EXPORT, source=source)

    load.__qualname__ = f"lazy_page({source})"
    return load


async def _builtin_fallback() -> Any:
    return not_found_page


def _relative_to_root(key: str, root: str | None) -> str:
    """Strip everything up to and including the *root* segment."""
    parts = split_path(key.replace("\\", "/"))
    if root is not None and root in parts:
        parts = parts[parts.index(root) + 1 :]
    return "/".join(part for part in parts if part not in (".", ".."))


def build_page_table(
    modules: Mapping[str, PageLoader],
    *,
    root: str | None = PAGES_ROOT,
) -> PageTable:
    """Build the client page table from a ``path -> loader`` mapping.

    Args:
        modules: Module paths (``"../pages/users/[id].py"`` or
            ``"users/[id].py"``) mapped to zero-argument loaders.
            Enumeration order is kept.
        root: Name of the pages root segment to strip from keys, or
            ``None`` when keys are already root-relative.

    Raises:
        ConfigurationError: If more than one ``404`` page is present.
        InvalidPatternSyntax: If a page path has malformed brackets.
    """
    entries: list[RouteEntry] = []
    fallback: RouteEntry | None = None

    for key, loader in modules.items():
        relative = _relative_to_root(key, root)
        if not relative:
            continue
        if is_api_path(relative):
            logger.debug("Excluding server-only page %s", key)
            continue
        if Path(relative).name.startswith("_"):
            continue

        entry = RouteEntry(
            method=RENDER,
            pattern=compile_pattern(relative),
            target=lazy_page(loader, source=key),
            is_fallback=is_fallback_path(relative),
            source=key,
        )

        if entry.is_fallback:
            if fallback is not None:
                msg = f"Only one {FALLBACK_NAME} page is allowed: {fallback.source} and {key}"
                raise ConfigurationError(msg)
            fallback = entry
            continue

        logger.debug("Registered page %s from %s", entry.path, key)
        entries.append(entry)

    if fallback is None:
        fallback = RouteEntry(
            method=RENDER,
            pattern=compile_pattern(FALLBACK_NAME),
            target=_builtin_fallback,
            is_fallback=True,
        )

    return PageTable(entries=tuple(entries), fallback=fallback)


def enumerate_pages(pages_dir: str | Path, *, suffixes: tuple[str, ...] = (".py",)) -> dict[str, PageLoader]:
    """Enumerate page modules on disk, the way a build tool would.

    Returns root-relative POSIX paths mapped to loaders that import the
    file on first call.  Paths are sorted, so enumeration order is
    stable across platforms.

    Raises:
        ConfigurationError: If *pages_dir* is not a directory.
    """
    root = Path(pages_dir).resolve()
    if not root.is_dir():
        raise ConfigurationError(f"Pages directory not found: {root}")

    modules: dict[str, PageLoader] = {}
    for file in sorted(root.rglob("*")):
        if not file.is_file() or file.suffix not in suffixes:
            continue
        if "__pycache__" in file.parts:
            continue
        modules[file.relative_to(root).as_posix()] = partial(load_module, file)
    return modules


def discover_pages(pages_dir: str | Path) -> PageTable:
    """Enumerate *pages_dir* and build its page table."""
    return build_page_table(enumerate_pages(pages_dir), root=None)
