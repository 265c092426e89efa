"""Routing — file paths compiled into an immutable route table.

The route table is built once from the filesystem at startup and is
read-only afterwards.
"""

from burrow.routing.discovery import build_route_table, discover_routes
from burrow.routing.matcher import match_route, order_candidates
from burrow.routing.pattern import (
    PathPattern,
    PathSegment,
    SegmentKind,
    compile_path,
    compile_pattern,
    is_api_path,
    is_fallback_path,
    parse_pattern,
)
from burrow.routing.route import HTTP_METHODS, RENDER, RouteEntry, RouteMatch
from burrow.routing.table import RouteTable

__all__ = [
    "HTTP_METHODS",
    "RENDER",
    "PathPattern",
    "PathSegment",
    "RouteEntry",
    "RouteMatch",
    "RouteTable",
    "SegmentKind",
    "build_route_table",
    "compile_path",
    "compile_pattern",
    "discover_routes",
    "is_api_path",
    "is_fallback_path",
    "match_route",
    "order_candidates",
    "parse_pattern",
]
