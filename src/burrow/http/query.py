"""Parsed query string, read-only."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """``?a=1&a=2&b=`` as a mapping of first values.

    Blank values are kept (``b`` maps to ``""``).  Use :meth:`get_list`
    for repeated keys and :attr:`raw` to rebuild a URL.
    """

    __slots__ = ("_multi", "_query_string")

    def __init__(self, query_string: bytes = b"") -> None:
        self._query_string = query_string.decode("latin-1")
        multi: dict[str, list[str]] = {}
        for key, value in parse_qsl(self._query_string, keep_blank_values=True):
            multi.setdefault(key, []).append(value)
        self._multi = MappingProxyType(multi)

    def __getitem__(self, key: str) -> str:
        return self._multi[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._multi)

    def __len__(self) -> int:
        return len(self._multi)

    def __repr__(self) -> str:
        return f"QueryParams({self._query_string!r})"

    def get_list(self, key: str) -> list[str]:
        return list(self._multi.get(key, ()))

    @property
    def raw(self) -> str:
        """The query string without its leading ``?``."""
        return self._query_string
