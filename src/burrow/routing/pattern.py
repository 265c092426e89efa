"""Pattern compiler — filesystem paths to URL patterns.

A module's path relative to its routes (or pages) root defines its URL::

    "index.py"              -> "/"
    "users/index.py"        -> "/users"
    "users/[id]/edit.py"    -> "/users/:id/edit"
    "docs/[...slug].py"     -> "/docs/:slug*"

Rendered patterns use ``:name`` for a dynamic segment and ``:name*`` for
a catch-all.  Compilation is pure: the same path always produces the same
pattern, and the only failure is malformed bracket syntax.
"""

import re
from dataclasses import dataclass
from enum import Enum

from burrow.errors import InvalidPatternSyntax

# Source-file extensions stripped before compiling
SOURCE_EXTENSIONS = (".py", ".pyw", ".js", ".jsx", ".mjs", ".ts", ".tsx")

# A trailing segment with this name maps to its directory's own URL
INDEX_NAME = "index"

# Reserved segment names (compared case-insensitively)
FALLBACK_NAME = "404"
API_NAME = "api"

_PARAM_NAME_RE = re.compile(r"^\w+$")
_CATCH_ALL_RE = re.compile(r"^\[\.\.\.(.*)\]$")
_DYNAMIC_RE = re.compile(r"^\[(.*)\]$")


class SegmentKind(Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"
    CATCH_ALL = "catch_all"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One compiled segment of a URL pattern.

    Static:    ``users``       (value is the literal)
    Dynamic:   ``[id]``        (value is the parameter name)
    CatchAll:  ``[...rest]``   (value is the parameter name)
    """

    kind: SegmentKind
    value: str

    @property
    def is_param(self) -> bool:
        return self.kind is not SegmentKind.STATIC

    def render(self) -> str:
        if self.kind is SegmentKind.DYNAMIC:
            return f":{self.value}"
        if self.kind is SegmentKind.CATCH_ALL:
            return f":{self.value}*"
        return self.value


@dataclass(frozen=True, slots=True)
class PathPattern:
    """An ordered sequence of segments.

    Two patterns are equal when their segments are equal, which is the
    same as their rendered strings being equal.
    """

    segments: tuple[PathSegment, ...] = ()

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @property
    def is_static(self) -> bool:
        """True if no segment binds a parameter."""
        return not any(seg.is_param for seg in self.segments)

    @property
    def has_catch_all(self) -> bool:
        return bool(self.segments) and self.segments[-1].kind is SegmentKind.CATCH_ALL

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(seg.value for seg in self.segments if seg.is_param)

    def __str__(self) -> str:
        return "/" + "/".join(seg.render() for seg in self.segments)


def split_path(path: str) -> list[str]:
    """Split a URL or relative file path into its segments.

    Leading and trailing slashes are ignored, so ``"/users/"`` and
    ``"users"`` both give ``["users"]`` and ``"/"`` gives ``[]``.
    """
    stripped = path.strip("/")
    if not stripped:
        return []
    return stripped.split("/")


def strip_extension(path: str) -> str:
    """Remove a known source-file extension from *path*."""
    for ext in SOURCE_EXTENSIONS:
        if path.endswith(ext):
            return path[: -len(ext)]
    return path


def compile_segment(name: str, *, path: str | None = None) -> PathSegment:
    """Compile a single directory or file name into a segment.

    Raises:
        InvalidPatternSyntax: If *name* contains brackets that are not
            exactly ``[name]`` or ``[...name]``.
    """
    source = path if path is not None else name

    if "[" not in name and "]" not in name:
        return PathSegment(SegmentKind.STATIC, name)

    catch_all = _CATCH_ALL_RE.match(name)
    if catch_all:
        return PathSegment(SegmentKind.CATCH_ALL, _param_name(catch_all.group(1), name, source))

    dynamic = _DYNAMIC_RE.match(name)
    if dynamic:
        return PathSegment(SegmentKind.DYNAMIC, _param_name(dynamic.group(1), name, source))

    raise InvalidPatternSyntax(source, name, "brackets must enclose the whole segment")


def _param_name(inner: str, segment: str, source: str) -> str:
    if not inner:
        raise InvalidPatternSyntax(source, segment, "empty parameter name")
    if not _PARAM_NAME_RE.match(inner):
        raise InvalidPatternSyntax(
            source, segment, "parameter names may only contain letters, digits and '_'"
        )
    return inner


def build_pattern(segments: list[PathSegment] | tuple[PathSegment, ...], *, path: str) -> PathPattern:
    """Validate compiled segments and wrap them in a :class:`PathPattern`.

    Raises:
        InvalidPatternSyntax: If a catch-all is not the last segment or a
            parameter name repeats.
    """
    seen: set[str] = set()
    for i, seg in enumerate(segments):
        if seg.kind is SegmentKind.CATCH_ALL and i != len(segments) - 1:
            raise InvalidPatternSyntax(path, seg.render(), "a catch-all must be the last segment")
        if seg.is_param:
            if seg.value in seen:
                raise InvalidPatternSyntax(
                    path, seg.render(), f"parameter {seg.value!r} is bound twice"
                )
            seen.add(seg.value)
    return PathPattern(tuple(segments))


def compile_pattern(relative_path: str) -> PathPattern:
    """Compile a root-relative module path into a :class:`PathPattern`."""
    normalized = strip_extension(relative_path.replace("\\", "/"))
    parts = [part for part in split_path(normalized) if part not in ("", ".")]

    if parts and parts[-1] == INDEX_NAME:
        parts.pop()

    return build_pattern(
        [compile_segment(part, path=relative_path) for part in parts],
        path=relative_path,
    )


def compile_path(relative_path: str) -> str:
    """Compile a root-relative module path into a rendered URL pattern.

    Examples::

        compile_path("index.py")          # "/"
        compile_path("a/[id]/edit.tsx")   # "/a/:id/edit"
        compile_path("a/[...rest]")       # "/a/:rest*"
    """
    return str(compile_pattern(relative_path))


def parse_pattern(pattern: str) -> PathPattern:
    """Parse a rendered pattern (``/users/:id``) back into segments.

    Bracket syntax is accepted too, so ``/users/[id]`` parses the same.
    """
    segments: list[PathSegment] = []
    for part in split_path(pattern):
        if part.startswith(":") and part.endswith("*"):
            name = _param_name(part[1:-1], part, pattern)
            segments.append(PathSegment(SegmentKind.CATCH_ALL, name))
        elif part.startswith(":"):
            name = _param_name(part[1:], part, pattern)
            segments.append(PathSegment(SegmentKind.DYNAMIC, name))
        else:
            segments.append(compile_segment(part, path=pattern))
    return build_pattern(segments, path=pattern)


def _has_segment(relative_path: str, reserved: str) -> bool:
    normalized = strip_extension(relative_path.replace("\\", "/"))
    return any(part.lower() == reserved for part in split_path(normalized))


def is_fallback_path(relative_path: str) -> bool:
    """True if the path names the ``404`` fallback module."""
    return _has_segment(relative_path, FALLBACK_NAME)


def is_api_path(relative_path: str) -> bool:
    """True if the path lies under the root ``api`` directory (server-only).

    Only the leading directory counts: ``api/users.py`` is server-only,
    while ``docs/api.py`` and ``docs/api/intro.py`` remain pages.
    """
    parts = split_path(relative_path.replace("\\", "/"))
    return len(parts) > 1 and parts[0].lower() == API_NAME
