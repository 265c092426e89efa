"""Tests for burrow.loader — importing route and page modules by path."""

from pathlib import Path

import pytest

from burrow.errors import ModuleLoadFailure
from burrow.loader import get_export, load_handler, load_module


class TestLoadModule:
    def test_imports_file(self, tmp_path: Path) -> None:
        path = tmp_path / "get.py"
        path.write_text("VALUE = 41 + 1\n")
        assert load_module(path).VALUE == 42

    def test_dataclass_in_module(self, tmp_path: Path) -> None:
        path = tmp_path / "[id]" / "get.py"
        path.parent.mkdir()
        path.write_text(
            "from dataclasses import dataclass\n\n"
            "@dataclass\n"
            "class Widget:\n"
            "    id: str\n"
        )
        assert load_module(path).Widget("a").id == "a"

    def test_error_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "get.py"
        path.write_text("1 / 0\n")
        with pytest.raises(ModuleLoadFailure) as exc_info:
            load_module(path)
        assert "ZeroDivisionError" in exc_info.value.detail
        assert exc_info.value.path == str(path)

    def test_syntax_error_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "get.py"
        path.write_text("def (:\n")
        with pytest.raises(ModuleLoadFailure):
            load_module(path)


class TestExports:
    def test_load_handler(self, tmp_path: Path) -> None:
        path = tmp_path / "get.py"
        path.write_text("def handler(request):\n    return request\n")
        assert load_handler(path)("x") == "x"

    def test_missing_handler(self, tmp_path: Path) -> None:
        path = tmp_path / "get.py"
        path.write_text("handle = None\n")
        with pytest.raises(ModuleLoadFailure, match="handler"):
            load_handler(path)

    def test_non_callable_export(self) -> None:
        class Module:
            page = "not callable"

        with pytest.raises(ModuleLoadFailure):
            get_export(Module(), "page", source="pages/x.py")
