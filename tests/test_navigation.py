"""Tests for burrow.pages.navigation — most recent navigation wins."""

import asyncio
import types

from burrow.errors import ModuleLoadFailure
from burrow.pages.discovery import build_page_table
from burrow.pages.navigation import Navigator
from burrow.pages.types import NavigationStatus


def _module(page: object) -> types.ModuleType:
    mod = types.ModuleType("fake_page")
    mod.page = page  # type: ignore[attr-defined]
    return mod


def _gated_loader(name: str, gate: asyncio.Event):
    async def load() -> types.ModuleType:
        await gate.wait()
        return _module(name)

    return load


def _ready_loader(name: str):
    async def load() -> types.ModuleType:
        return _module(name)

    return load


class TestNavigate:
    async def test_initial_state(self) -> None:
        navigator = Navigator(build_page_table({"pages/a.py": _ready_loader("a")}))
        assert navigator.state.status is NavigationStatus.IDLE

    async def test_ready(self) -> None:
        navigator = Navigator(build_page_table({"pages/users/[id].py": _ready_loader("user")}))
        state = await navigator.navigate("/users/42?tab=posts#top")
        assert state.status is NavigationStatus.READY
        assert state.path == "/users/42"
        assert state.params == {"id": "42"}
        assert state.query["tab"] == "posts"
        assert state.url == "/users/42?tab=posts#top"
        assert state.page == "user"
        assert state.is_fallback is False
        assert navigator.state is state

    async def test_query_repeated_and_non_ascii(self) -> None:
        navigator = Navigator(build_page_table({"pages/search.py": _ready_loader("search")}))
        state = await navigator.navigate("/search?tag=a&tag=b&q=caf\u00e9")
        assert state.path == "/search"
        assert state.query.get_list("tag") == ["a", "b"]
        assert state.query["q"] == "caf\u00e9"
        assert state.url == "/search?tag=a&tag=b&q=caf\u00e9"

    async def test_no_query(self) -> None:
        navigator = Navigator(build_page_table({"pages/a.py": _ready_loader("a")}))
        state = await navigator.navigate("/a")
        assert len(state.query) == 0
        assert state.url == "/a"

    async def test_loading_state_carries_url(self) -> None:
        gate = asyncio.Event()
        navigator = Navigator(build_page_table({"pages/a.py": _gated_loader("a", gate)}))
        task = asyncio.create_task(navigator.navigate("/a?x=1"))
        await asyncio.sleep(0)
        assert navigator.state.status is NavigationStatus.LOADING
        assert navigator.state.query["x"] == "1"
        assert navigator.state.url == "/a?x=1"
        gate.set()
        await task

    async def test_unmatched_uses_fallback(self) -> None:
        table = build_page_table(
            {"pages/a.py": _ready_loader("a"), "pages/404.py": _ready_loader("missing")}
        )
        state = await Navigator(table).navigate("/zzz")
        assert state.status is NavigationStatus.READY
        assert state.is_fallback is True
        assert state.page == "missing"

    async def test_loading_state_while_pending(self) -> None:
        gate = asyncio.Event()
        navigator = Navigator(build_page_table({"pages/slow.py": _gated_loader("slow", gate)}))

        task = asyncio.create_task(navigator.navigate("/slow"))
        await asyncio.sleep(0)
        assert navigator.state.status is NavigationStatus.LOADING
        assert navigator.state.path == "/slow"

        gate.set()
        state = await task
        assert state.status is NavigationStatus.READY

    async def test_superseded_load_discarded(self) -> None:
        slow_gate = asyncio.Event()
        table = build_page_table(
            {
                "pages/slow.py": _gated_loader("slow", slow_gate),
                "pages/fast.py": _ready_loader("fast"),
            }
        )
        navigator = Navigator(table)

        slow = asyncio.create_task(navigator.navigate("/slow"))
        await asyncio.sleep(0)
        fast_state = await navigator.navigate("/fast")
        assert fast_state.page == "fast"

        slow_gate.set()
        slow_state = await slow

        # The late result never replaces the newer navigation
        assert slow_state is fast_state
        assert navigator.state.page == "fast"
        assert navigator.state.path == "/fast"

    async def test_load_error_surfaces_as_state(self) -> None:
        async def broken() -> types.ModuleType:
            raise ImportError("network down")

        navigator = Navigator(build_page_table({"pages/x.py": broken}))
        state = await navigator.navigate("/x")
        assert state.status is NavigationStatus.ERROR
        assert isinstance(state.error, ModuleLoadFailure)
        assert state.page is None

    async def test_missing_export_is_error(self) -> None:
        async def empty() -> types.ModuleType:
            return types.ModuleType("empty")

        state = await Navigator(build_page_table({"pages/x.py": empty})).navigate("/x")
        assert state.status is NavigationStatus.ERROR

    async def test_empty_location_is_root(self) -> None:
        navigator = Navigator(build_page_table({"pages/index.py": _ready_loader("home")}))
        state = await navigator.navigate("?q=1")
        assert state.path == "/"
        assert state.page == "home"
