"""Case-insensitive, read-only view over ASGI request headers.

ASGI delivers headers as a sequence of ``(name, value)`` byte pairs.
They are decoded once, grouped under lowercased names, and never
changed afterwards.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType


class Headers(Mapping[str, str]):
    """Request headers keyed by lowercased name.

    Indexing yields the first value a client sent under a name;
    :meth:`get_list` yields all of them, in arrival order.
    """

    __slots__ = ("_grouped", "_pairs")

    def __init__(self, pairs: Iterable[tuple[bytes, bytes]] = ()) -> None:
        self._pairs = tuple(pairs)
        grouped: dict[str, list[str]] = {}
        for name, value in self._pairs:
            grouped.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
        self._grouped = MappingProxyType({name: tuple(vals) for name, vals in grouped.items()})

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> "Headers":
        """Build headers from ``{"Name": "value"}`` (handy in tests)."""
        return cls((name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers.items())

    def __getitem__(self, name: str) -> str:
        return self._grouped[name.lower()][0]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._grouped

    def __iter__(self) -> Iterator[str]:
        return iter(self._grouped)

    def __len__(self) -> int:
        return len(self._grouped)

    def __repr__(self) -> str:
        return f"Headers({dict(self)!r})"

    def get_list(self, name: str) -> list[str]:
        return list(self._grouped.get(name.lower(), ()))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """The pairs exactly as received."""
        return self._pairs
