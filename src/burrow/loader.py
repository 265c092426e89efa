"""Module loading capability.

Table builders never import anything themselves; they call an injected
loader.  The default loaders here import a file with
``importlib.util.spec_from_file_location`` (no ``sys.path`` changes) and
pull out a named export.  Tests and embedders pass their own callables
instead::

    def fake_loader(path: Path) -> Handler:
        return handlers[path.name]

    table = discover_routes("routes", loader=fake_loader)
"""

import importlib.util
import re
import sys
from collections.abc import Callable
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol

from burrow.errors import ModuleLoadFailure

# Name of the export a server route module must provide
HANDLER_EXPORT = "handler"

# Name of the export a client page module must provide
PAGE_EXPORT = "page"

_UNSAFE_CHARS_RE = re.compile(r"\W")


class ModuleLoader(Protocol):
    """Load the module at *path* and return its handler.

    Must raise :class:`~burrow.errors.ModuleLoadFailure` when the module
    cannot be imported or lacks a usable export.
    """

    def __call__(self, path: Path) -> Callable[..., Any]: ...


def _module_name(path: Path) -> str:
    stem = _UNSAFE_CHARS_RE.sub("_", str(path.with_suffix("")))
    return f"burrow_modules.{stem}"


def load_module(path: str | Path) -> ModuleType:
    """Import the Python file at *path* as an isolated module.

    The module is registered in ``sys.modules`` while it executes so
    dataclasses and relative lookups inside it work.

    Raises:
        ModuleLoadFailure: If the file has no import spec or raises
            while executing.
    """
    file = Path(path)
    module_name = _module_name(file)
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        raise ModuleLoadFailure(str(file), "no import spec for file")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise ModuleLoadFailure(str(file), f"{type(exc).__name__}: {exc}") from exc
    return module


def get_export(module: Any, name: str, *, source: str | None = None) -> Callable[..., Any]:
    """Return the callable export *name* of *module*.

    Raises:
        ModuleLoadFailure: If the export is missing or not callable.
    """
    value = getattr(module, name, None)
    if value is None or not callable(value):
        where = source or getattr(module, "__file__", None) or repr(module)
        raise ModuleLoadFailure(str(where), f"module has no callable {name!r} export")
    return value


def load_handler(path: Path) -> Callable[..., Any]:
    """Default server loader: import *path* and return its ``handler``."""
    return get_export(load_module(path), HANDLER_EXPORT, source=str(path))
