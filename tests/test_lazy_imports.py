"""Tests for burrow.__init__ — every public name resolves lazily."""

import pytest

import burrow


@pytest.mark.parametrize("name", burrow.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(burrow, name)
    assert obj is not None, f"burrow.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        burrow.__getattr__("ThisDoesNotExist")
