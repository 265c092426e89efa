"""Locate the App named on the command line.

``burrow run`` and ``burrow routes`` both take ``module[:attribute]``.
"""

import importlib
from typing import Any

from burrow.app import App

DEFAULT_ATTRIBUTE = "app"


def _load_target(import_string: str) -> Any:
    module_name, _, attribute = import_string.partition(":")
    module = importlib.import_module(module_name)
    return getattr(module, attribute or DEFAULT_ATTRIBUTE)


def resolve_app(import_string: str) -> App:
    """Return the burrow App that *import_string* points at.

    ``"pkg.server"`` means ``pkg.server:app``.  A target that is a plain
    callable rather than an App is called once with no arguments, so
    ``"pkg.server:create_app"`` works for factories.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the module lacks the attribute.
        TypeError: If the target (or what its factory returns) is not an
            App, or the factory raises.
    """
    target = _load_target(import_string)

    if not isinstance(target, App) and callable(target):
        try:
            target = target()
        except Exception as exc:
            raise TypeError(f"App factory {import_string!r} failed: {exc}") from exc

    if not isinstance(target, App):
        kind = type(target).__name__
        raise TypeError(f"{import_string!r} is a {kind}, not a burrow.App instance")
    return target
