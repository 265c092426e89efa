"""Filesystem route discovery for the server routes directory.

Walks the routes directory tree and registers one route per method file:

- Directory names become URL segments; ``[name]`` and ``[...name]``
  directories become dynamic and catch-all segments.
- A file's stem, uppercased, names the HTTP method (``get.py`` ->
  ``GET``).  Files whose stem is not a supported method are ignored.
- Each method file must export a callable ``handler``.  Files that fail
  to load or lack the export are skipped.

Conventions::

    routes/
      get.py                  # GET    /api
      widgets/
        get.py                # GET    /api/widgets
        post.py               # POST   /api/widgets
        [id]/
          get.py              # GET    /api/widgets/:id
          delete.py           # DELETE /api/widgets/:id
      files/
        [...path]/
          get.py              # GET    /api/files/:path*

Traversal is lexicographic, files of a directory before its
subdirectories, so when two files register the same method and pattern
the later one in that order wins on every platform.
"""

import logging
from pathlib import Path

from burrow.errors import ConfigurationError, ModuleLoadFailure
from burrow.loader import ModuleLoader, load_handler
from burrow.routing.pattern import (
    FALLBACK_NAME,
    PathSegment,
    build_pattern,
    compile_segment,
    split_path,
)
from burrow.routing.route import HTTP_METHODS, RouteEntry
from burrow.routing.table import RouteTable

logger = logging.getLogger("burrow.routing")

# Suffixes recognised as route modules by default
ROUTE_SUFFIXES = (".py",)


def discover_routes(
    routes_dir: str | Path,
    *,
    prefix: str = "",
    loader: ModuleLoader = load_handler,
    suffixes: tuple[str, ...] = ROUTE_SUFFIXES,
) -> list[RouteEntry]:
    """Walk a routes directory and return its entries in traversal order.

    Args:
        routes_dir: Path to the routes directory.
        prefix: URL prefix prepended to every pattern (e.g. ``"/api"``).
        loader: Called with each method file's path; returns its handler
            or raises :class:`~burrow.errors.ModuleLoadFailure`.
        suffixes: File suffixes treated as route modules.

    Raises:
        ConfigurationError: If *routes_dir* is not a directory.
        InvalidPatternSyntax: If a directory name has malformed brackets.
    """
    root = Path(routes_dir).resolve()
    if not root.is_dir():
        raise ConfigurationError(f"Routes directory not found: {root}")

    segments = [compile_segment(part, path=prefix) for part in split_path(prefix)]
    build_pattern(segments, path=prefix)

    entries: list[RouteEntry] = []
    _walk_directory(
        root,
        root,
        segments=segments,
        loader=loader,
        suffixes=suffixes,
        entries=entries,
    )
    return entries


def build_route_table(
    routes_dir: str | Path,
    *,
    prefix: str = "",
    loader: ModuleLoader = load_handler,
    suffixes: tuple[str, ...] = ROUTE_SUFFIXES,
) -> RouteTable:
    """Discover routes and freeze them into a :class:`RouteTable`."""
    entries = discover_routes(routes_dir, prefix=prefix, loader=loader, suffixes=suffixes)
    table = RouteTable(entries)
    logger.info("Loaded %d routes from %s", len(table), routes_dir)
    return table


def _walk_directory(
    directory: Path,
    root: Path,
    *,
    segments: list[PathSegment],
    loader: ModuleLoader,
    suffixes: tuple[str, ...],
    entries: list[RouteEntry],
) -> None:
    """Recursively walk a directory, registering method files.

    Args:
        directory: Current directory being walked.
        root: Root routes directory (for relative source paths).
        segments: URL segments accumulated so far, prefix included.
        loader: Module loader capability.
        suffixes: Route module suffixes.
        entries: Accumulator for discovered entries.
    """
    children = sorted(directory.iterdir())

    for item in children:
        if not item.is_file() or item.suffix not in suffixes:
            continue
        if item.name.startswith("_"):
            continue

        method = item.stem.upper()
        relative = item.relative_to(root).as_posix()
        if method not in HTTP_METHODS:
            logger.debug("Ignoring %s: %r is not an HTTP method", relative, item.stem)
            continue

        try:
            handler = loader(item)
        except ModuleLoadFailure as exc:
            logger.debug("Skipping %s: %s", relative, exc.detail)
            continue

        entry = RouteEntry(
            method=method,
            pattern=build_pattern(segments, path=relative),
            target=handler,
            source=relative,
        )
        logger.debug("Registered %s %s from %s", entry.method, entry.path, relative)
        entries.append(entry)

    for item in children:
        if not item.is_dir():
            continue
        if item.name.startswith(("_", ".")) or item.name.lower() == FALLBACK_NAME:
            continue

        relative = item.relative_to(root).as_posix()
        child_segments = [*segments, compile_segment(item.name, path=relative)]
        build_pattern(child_segments, path=relative)

        _walk_directory(
            item,
            root,
            segments=child_segments,
            loader=loader,
            suffixes=suffixes,
            entries=entries,
        )
