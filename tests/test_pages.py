"""Tests for burrow.pages.discovery — the client page table."""

import types
from pathlib import Path

import pytest

from burrow.errors import ConfigurationError, InvalidPatternSyntax, ModuleLoadFailure
from burrow.pages.discovery import (
    build_page_table,
    discover_pages,
    enumerate_pages,
    lazy_page,
    not_found_page,
)
from burrow.routing.route import RENDER


def _module(page: object) -> types.ModuleType:
    mod = types.ModuleType("fake_page")
    mod.page = page  # type: ignore[attr-defined]
    return mod


def _loader(name: str):
    """Sync loader returning a module whose page is *name*."""

    def load() -> types.ModuleType:
        return _module(name)

    return load


def _async_loader(name: str):
    async def load() -> types.ModuleType:
        return _module(name)

    return load


class TestBuildPageTable:
    def test_entries_compiled_in_order(self) -> None:
        table = build_page_table(
            {
                "../pages/index.py": _loader("home"),
                "../pages/users/[id].py": _loader("user"),
                "../pages/about.py": _loader("about"),
            }
        )
        assert [e.path for e in table] == ["/", "/users/:id", "/about"]
        assert all(e.method == RENDER for e in table)
        assert len(table) == 3

    def test_api_subtree_excluded(self) -> None:
        table = build_page_table(
            {
                "pages/api/users.py": _loader("x"),
                "pages/Api/stats.py": _loader("x"),
                "pages/about.py": _loader("about"),
            }
        )
        assert [e.path for e in table] == ["/about"]

    def test_nested_api_names_are_pages(self) -> None:
        table = build_page_table(
            {
                "pages/api/x.py": _loader("x"),
                "pages/docs/api.py": _loader("docs-api"),
                "pages/docs/api/x.py": _loader("docs-api-x"),
            }
        )
        assert [e.path for e in table] == ["/docs/api", "/docs/api/x"]

    def test_private_files_excluded(self) -> None:
        table = build_page_table(
            {"pages/_layout.py": _loader("x"), "pages/about.py": _loader("about")}
        )
        assert [e.path for e in table] == ["/about"]

    def test_root_none_uses_keys_as_is(self) -> None:
        table = build_page_table({"shop/[item].py": _loader("item")}, root=None)
        assert [e.path for e in table] == ["/shop/:item"]

    def test_fallback_designated(self) -> None:
        table = build_page_table(
            {"pages/404.py": _loader("missing"), "pages/about.py": _loader("about")}
        )
        assert [e.path for e in table] == ["/about"]
        assert table.fallback.is_fallback is True
        assert table.fallback.source == "pages/404.py"

    def test_two_fallbacks_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            build_page_table({"pages/404.py": _loader("a"), "pages/docs/404.py": _loader("b")})

    def test_malformed_path(self) -> None:
        with pytest.raises(InvalidPatternSyntax):
            build_page_table({"pages/[oops.py": _loader("x")})

    def test_match_falls_back(self) -> None:
        table = build_page_table(
            {"pages/404.py": _loader("missing"), "pages/about.py": _loader("about")}
        )
        match = table.match("/nowhere")
        assert match.entry is table.fallback
        assert match.params == {}

    def test_match_static_first(self) -> None:
        table = build_page_table(
            {"pages/[slug].py": _loader("slug"), "pages/about.py": _loader("about")}
        )
        assert table.match("/about").entry.path == "/about"
        assert table.match("/other").params == {"slug": "other"}

    async def test_builtin_fallback(self) -> None:
        table = build_page_table({"pages/about.py": _loader("about")})
        assert table.fallback.is_fallback is True
        page = await table.fallback.target()
        assert page is not_found_page
        assert page() == "no route found"


class TestLazyPage:
    async def test_sync_loader(self) -> None:
        load = lazy_page(_loader("home"), source="pages/index.py")
        assert await load() == "home"

    async def test_async_loader(self) -> None:
        load = lazy_page(_async_loader("home"), source="pages/index.py")
        assert await load() == "home"

    async def test_missing_export(self) -> None:
        load = lazy_page(lambda: types.ModuleType("empty"), source="pages/x.py")
        with pytest.raises(ModuleLoadFailure) as exc_info:
            await load()
        assert exc_info.value.path == "pages/x.py"

    async def test_loader_error_wrapped(self) -> None:
        def broken() -> types.ModuleType:
            raise ImportError("chunk failed")

        load = lazy_page(broken, source="pages/x.py")
        with pytest.raises(ModuleLoadFailure) as exc_info:
            await load()
        assert "chunk failed" in exc_info.value.detail

    async def test_not_called_until_awaited(self) -> None:
        calls = []

        def load_module() -> types.ModuleType:
            calls.append(1)
            return _module("x")

        build_page_table({"pages/x.py": load_module})
        assert calls == []


class TestDiscoverPages:
    def _write(self, root: Path, relative: str, body: str) -> None:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"def page():\n    return {body!r}\n")

    def test_enumerate_sorted(self, tmp_path: Path) -> None:
        self._write(tmp_path, "b.py", "b")
        self._write(tmp_path, "a/[id].py", "a")
        (tmp_path / "notes.md").write_text("skip")
        assert list(enumerate_pages(tmp_path)) == ["a/[id].py", "b.py"]

    async def test_discover_and_load(self, tmp_path: Path) -> None:
        self._write(tmp_path, "index.py", "home")
        self._write(tmp_path, "users/[id].py", "user")
        self._write(tmp_path, "404.py", "missing")
        self._write(tmp_path, "api/secret.py", "secret")

        table = discover_pages(tmp_path)
        assert sorted(e.path for e in table) == ["/", "/users/:id"]

        match = table.match("/users/9")
        page = await match.entry.target()
        assert page() == "user"

        fallback_page = await table.match("/nope").entry.target()
        assert fallback_page() == "missing"

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            enumerate_pages(tmp_path / "missing")
