import pytest

from basecolumns.core.distribution import (
    WidthBehavior,
    apply_uniform_width,
    distribute_even,
    initial_sizes,
    resolve_default_width,
)
from basecolumns.services.config_service import DEFAULT_SETTINGS


def test_distribute_even_floors_and_drops_remainder():
    assert distribute_even(1000, ["a", "b", "c"]) == {"a": 333, "b": 333, "c": 333}
    assert distribute_even(900, ["a", "b"]) == {"a": 450, "b": 450}


def test_distribute_even_zero_columns_is_empty():
    assert distribute_even(1000, []) == {}


def test_distribute_even_negative_total_clamps_to_zero():
    assert distribute_even(-50, ["a"]) == {"a": 0}


def test_distribute_even_ignores_duplicate_keys():
    assert distribute_even(300, ["a", "a", "b"]) == {"a": 150, "b": 150}


def test_apply_uniform_width():
    assert apply_uniform_width(["a", "b"], 175) == {"a": 175, "b": 175}
    assert apply_uniform_width([], 175) == {}


def test_width_behavior_parse():
    assert WidthBehavior.parse("custom") is WidthBehavior.CUSTOM
    assert WidthBehavior.parse("MIN_WIDTH") is WidthBehavior.MIN_WIDTH
    assert WidthBehavior.parse("3") is WidthBehavior.FIT_CONTENT
    assert WidthBehavior.parse(WidthBehavior.DISABLED) is WidthBehavior.DISABLED
    with pytest.raises(ValueError):
        WidthBehavior.parse("huge")


def test_resolve_default_width():
    settings = dict(DEFAULT_SETTINGS)
    assert resolve_default_width("min-width", settings) == 100
    assert resolve_default_width("max-width", settings) == 300
    assert resolve_default_width("custom", settings) == 150
    assert resolve_default_width("fit-content", settings) is None
    assert resolve_default_width("disabled", settings) is None


def test_initial_sizes():
    settings = dict(DEFAULT_SETTINGS, custom_column_width=120)
    assert initial_sizes(["a", "b"], "custom", settings) == {"a": 120, "b": 120}
    assert initial_sizes(["a", "b"], "disabled", settings) == {}
