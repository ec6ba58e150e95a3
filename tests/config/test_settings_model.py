# topmark:header:start
#
#   project      : Whisker
#   file         : test_settings_model.py
#   file_relpath : tests/config/test_settings_model.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Tests for the settings snapshot and its mutable builder."""

from __future__ import annotations

from collections.abc import Set
from typing import Any

import pytest

from whisker.config.model import MutableRegistrySettings, RegistrySettings, RenderSettings
from whisker.loaders import DictLoader
from whisker.registry import Registry


def _getter(value: Any, key: str) -> Any:
    return key


def test_empty_builder_freezes_to_defaults() -> None:
    """An untouched builder leaves every facet as None (built-ins only)."""
    assert MutableRegistrySettings().freeze() == RegistrySettings()


def test_builder_chains_and_freezes_read_only() -> None:
    """Every builder method returns the builder; frozen tables are read-only."""
    loader = DictLoader({"p": "partial"})
    settings = (
        MutableRegistrySettings()
        .add_value_getter(int, _getter)
        .add_token_getter("%", lambda s, tags: None)  # type: ignore[arg-type, return-value]
        .add_truthy_check(lambda v: None)
        .add_enumeration_converter(set, sorted)
        .set_partial_template_loader(loader)
        .set_max_recursion_depth(5)
        .set_render_settings(RenderSettings(throw_on_data_miss=True))
        .freeze()
    )
    assert settings.value_getters is not None and settings.value_getters[int] is _getter
    assert settings.token_getters is not None and "%" in settings.token_getters
    assert settings.truthy_checks is not None and len(settings.truthy_checks) == 1
    assert settings.enumeration_converters is not None
    assert settings.partial_template_loader is loader
    assert settings.max_recursion_depth == 5
    assert settings.render_settings == RenderSettings(throw_on_data_miss=True)
    with pytest.raises(TypeError):
        settings.value_getters[str] = _getter  # type: ignore[index]


def test_remove_token_getter_records_removal() -> None:
    """Removal is recorded as a None override."""
    settings = MutableRegistrySettings().remove_token_getter(">").freeze()
    assert settings.token_getters is not None
    assert settings.token_getters[">"] is None


@pytest.mark.parametrize("depth", [0, -3])
def test_freeze_rejects_non_positive_depth(depth: int) -> None:
    """The recursion ceiling must be a positive integer."""
    with pytest.raises(ValueError, match="positive"):
        MutableRegistrySettings().set_max_recursion_depth(depth).freeze()


def test_freeze_rejects_bool_depth() -> None:
    """``True`` is an int subclass but not a valid depth."""
    with pytest.raises(ValueError, match="must be an int"):
        MutableRegistrySettings().set_max_recursion_depth(True).freeze()


def test_thaw_round_trip_is_independent() -> None:
    """Thawing yields an editable copy that does not alter the snapshot."""
    frozen = MutableRegistrySettings().add_value_getter(int, _getter).freeze()
    draft = frozen.thaw()
    draft.add_value_getter(str, _getter).add_truthy_check(lambda v: True)
    refrozen = draft.freeze()

    assert frozen.value_getters is not None and str not in frozen.value_getters
    assert frozen.truthy_checks is None
    assert refrozen.value_getters is not None and str in refrozen.value_getters
    assert refrozen.truthy_checks is not None and len(refrozen.truthy_checks) == 1


def test_render_settings_default() -> None:
    """All render flags are off by default."""
    flags = RenderSettings.default()
    assert not flags.skip_recursive_lookup
    assert not flags.throw_on_data_miss
    assert not flags.skip_html_encoding


@pytest.mark.parametrize("key", [list[int], "str", 3])
def test_freeze_rejects_non_class_value_getter_keys(key: Any) -> None:
    """Value getters must be keyed by classes usable with issubclass()."""
    draft = MutableRegistrySettings().add_value_getter(key, _getter)
    with pytest.raises(ValueError, match="value_getters keys must be classes"):
        draft.freeze()


def test_freeze_rejects_non_class_enumeration_keys() -> None:
    """Enumeration converters must be keyed by classes too."""
    draft = MutableRegistrySettings().add_enumeration_converter(dict[str, int], list)
    with pytest.raises(ValueError, match="enumeration_converters keys must be classes"):
        draft.freeze()


def test_frozen_class_keys_build_a_registry() -> None:
    """Abstract base classes are accepted as keys."""
    settings = MutableRegistrySettings().add_enumeration_converter(Set, sorted).freeze()
    registry = Registry.from_settings(settings)
    assert registry.convert_enumeration({3, 1, 2}) == (1, 2, 3)
