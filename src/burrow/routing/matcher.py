"""Route matcher — find the entry for a concrete path.

Candidates are tried static-first: every pattern without parameters is
tried before any pattern with one.  The partition is stable, so among
dynamic patterns (and among static ones) the table's traversal order
decides.  There is no further specificity ranking: ``/:a/settings`` and
``/users/:id`` are tried in the order they were discovered.

Segment counts must agree exactly, with one exception: a trailing
catch-all absorbs one or more remaining segments, bound as a single
``/``-joined value.
"""

from collections.abc import Iterable

from burrow.routing.pattern import PathPattern, SegmentKind, split_path
from burrow.routing.route import RouteEntry, RouteMatch


def order_candidates(entries: Iterable[RouteEntry]) -> tuple[RouteEntry, ...]:
    """Stable partition of *entries*: static patterns first.

    Fallback entries never take part in normal matching and are dropped.
    """
    static: list[RouteEntry] = []
    dynamic: list[RouteEntry] = []
    for entry in entries:
        if entry.is_fallback:
            continue
        if entry.pattern.is_static:
            static.append(entry)
        else:
            dynamic.append(entry)
    return (*static, *dynamic)


def match_pattern(pattern: PathPattern, parts: list[str]) -> dict[str, str] | None:
    """Match path *parts* against *pattern*.

    Returns the bound parameters, or ``None`` at the first mismatch.
    """
    segments = pattern.segments
    if pattern.has_catch_all:
        if len(parts) < len(segments):
            return None
    elif len(parts) != len(segments):
        return None

    params: dict[str, str] = {}
    for index, seg in enumerate(segments):
        part = parts[index]
        if seg.kind is SegmentKind.STATIC:
            if part != seg.value:
                return None
        elif seg.kind is SegmentKind.DYNAMIC:
            if not part:
                return None
            params[seg.value] = part
        else:
            rest = parts[index:]
            if not all(rest):
                return None
            params[seg.value] = "/".join(rest)
    return params


def match_ordered(candidates: Iterable[RouteEntry], path: str) -> RouteMatch | None:
    """Return the first of the already-ordered *candidates* matching *path*."""
    parts = split_path(path)
    for entry in candidates:
        params = match_pattern(entry.pattern, parts)
        if params is not None:
            return RouteMatch(entry=entry, params=params)
    return None


def match_route(entries: Iterable[RouteEntry], path: str) -> RouteMatch | None:
    """Match *path* against *entries* in static-first order.

    A ``None`` result is not an error: the caller falls back to static
    assets (server) or the fallback page (client).
    """
    return match_ordered(order_candidates(entries), path)
