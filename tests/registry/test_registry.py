# topmark:header:start
#
#   project      : Whisker
#   file         : test_registry.py
#   file_relpath : tests/registry/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Tests for the frozen `Registry`."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import pytest

from whisker.config.model import MutableRegistrySettings, RegistrySettings, RenderSettings
from whisker.loaders import DictLoader, StringLoader
from whisker.registry import MISSING, Registry
from whisker.registry.defaults import DEFAULT_VALUE_GETTERS
from whisker.tokens import (
    EscapedValueToken,
    ParserOutput,
    PartialToken,
    SectionToken,
    Tags,
)


class Bag:
    """Collection-like type the engine has no native concept of."""

    def __init__(self, *items: Any) -> None:
        self._items = list(items)

    def items_view(self) -> Iterator[Any]:
        return iter(self._items)


class SortedBag(Bag):
    pass


@dataclass(frozen=True)
class CustomToken(ParserOutput):
    pass


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


def _point_getter(value: Point, key: str) -> Any:
    if key == "sum":
        return value.x + value.y
    return MISSING


def _build(builder: MutableRegistrySettings) -> Registry:
    return Registry.from_settings(builder.freeze())


# --- defaults ---


def test_defaults(default_registry: Registry) -> None:
    """Pure defaults: ceiling 256, identity template loader, no partial loader."""
    assert default_registry.max_recursion_depth == 256
    assert isinstance(default_registry.template_loader, StringLoader)
    assert default_registry.partial_template_loader is None
    assert default_registry.has_partial_loader is False
    assert default_registry.render_settings == RenderSettings.default()
    assert default_registry.truthy_checks == ()
    assert dict(default_registry.enumeration_converters) == {}
    assert list(default_registry.value_getters)[-1] is object
    assert set(default_registry.token_getters) == {"#", "^", ">", "&", "name", "text"}


def test_none_and_empty_settings_are_equivalent() -> None:
    """Absent settings behave exactly like an all-None snapshot."""
    a = Registry.from_settings(None)
    b = Registry.from_settings(RegistrySettings())
    assert list(a.value_getters) == list(b.value_getters)
    assert list(a.token_getters) == list(b.token_getters)
    assert a.token_match_regex.pattern == b.token_match_regex.pattern


def test_max_recursion_depth_override() -> None:
    """An explicit ceiling is reflected verbatim."""
    registry = _build(MutableRegistrySettings().set_max_recursion_depth(10))
    assert registry.max_recursion_depth == 10


def test_render_settings_pass_through() -> None:
    """Render settings are carried unexamined."""
    flags = RenderSettings(skip_html_encoding=True)
    registry = _build(MutableRegistrySettings().set_render_settings(flags))
    assert registry.render_settings is flags


# --- value resolution ---


def test_value_getter_merge_size_and_identity() -> None:
    """New types are added, overridden types keep the override function."""

    def _dict_getter(value: dict[str, Any], key: str) -> Any:
        return "custom"

    registry = _build(
        MutableRegistrySettings()
        .add_value_getter(Point, _point_getter)
        .add_value_getter(dict, _dict_getter)
    )
    assert len(registry.value_getters) == len(DEFAULT_VALUE_GETTERS) + 1
    assert registry.value_getters[Point] is _point_getter
    assert registry.value_getters[dict] is _dict_getter
    assert registry.resolve_value({"a": 1}, "a") == "custom"


def test_value_getters_are_ordered_by_specificity() -> None:
    """Subtypes come before supertypes and object stays last."""
    registry = _build(
        MutableRegistrySettings()
        .add_value_getter(Bag, lambda v, k: "bag")
        .add_value_getter(SortedBag, lambda v, k: "sorted")
    )
    order = list(registry.value_getters)
    assert order.index(SortedBag) < order.index(Bag)
    assert order.index(dict) < order.index(Mapping)
    assert order[-1] is object
    assert registry.resolve_value(SortedBag(), "x") == "sorted"
    assert registry.resolve_value(Bag(), "x") == "bag"


def test_resolve_builtin_shapes(default_registry: Registry) -> None:
    """Sequences, dicts, mappings and plain objects resolve with the defaults."""
    assert default_registry.resolve_value([1, 2, 3], "2") == 3
    assert default_registry.resolve_value([1, 2, 3], "5") is MISSING
    assert default_registry.resolve_value([1, 2, 3], "abc") is MISSING
    assert default_registry.resolve_value({"k": "v"}, "k") == "v"
    assert default_registry.resolve_value({"k": "v"}, "absent") is MISSING
    assert default_registry.resolve_value(Point(1, 2), "x") == 1
    assert default_registry.resolve_value(Point(1, 2), "z") is MISSING


@pytest.mark.parametrize("mapping", [{1: "a"}, MappingProxyType({1: "a"})])
def test_integer_keyed_mappings_resolve_alike(
    default_registry: Registry, mapping: Mapping[int, str]
) -> None:
    """A dict and a read-only mapping with the same integer keys answer the same."""
    assert default_registry.resolve_value(mapping, "1") == "a"
    assert default_registry.resolve_value(mapping, "2") is MISSING


def test_oversized_index_is_missing(default_registry: Registry) -> None:
    """A digit string too long to be an index resolves to MISSING instead of raising."""
    assert default_registry.resolve_value([1, 2, 3], "9" * 5000) is MISSING
    assert default_registry.resolve_value({1: "a"}, "9" * 5000) is MISSING


def test_first_matching_resolver_is_final() -> None:
    """A MISSING answer is not retried with the object fallback."""
    registry = _build(MutableRegistrySettings().add_value_getter(Point, _point_getter))
    point = Point(1, 2)
    assert registry.resolve_value(point, "sum") == 3
    # ``x`` exists as an attribute, but the Point resolver decides.
    assert registry.resolve_value(point, "x") is MISSING


def test_object_fallback_cannot_be_removed() -> None:
    """Removing the universal fallback is ignored."""
    settings = RegistrySettings(value_getters={object: None})  # type: ignore[dict-item]
    registry = Registry.from_settings(settings)
    assert object in registry.value_getters
    assert registry.resolve_value(Point(1, 2), "y") == 2


# --- prefix handlers ---


def test_override_builtin_prefix() -> None:
    """A custom factory for ``#`` replaces the section token constructor."""
    registry = _build(
        MutableRegistrySettings().add_token_getter("#", lambda s, tags: CustomToken(token_type=s))
    )
    tag_type = registry.match_tag_type("#items")
    token = registry.create_token(tag_type)
    assert tag_type == "#"
    assert isinstance(token, CustomToken)
    assert not isinstance(token, SectionToken)


def test_default_section_token_carries_tags(default_registry: Registry) -> None:
    """The built-in section factory records the active delimiters."""
    tags = Tags("<%", "%>")
    token = default_registry.create_token("#", tags)
    assert isinstance(token, SectionToken)
    assert token.tags == tags
    assert token.token_type == "#"


def test_new_prefix_is_registered_and_recognized() -> None:
    """A new prefix lands in both the table and the pattern."""
    registry = _build(
        MutableRegistrySettings().add_token_getter("%", lambda s, tags: CustomToken(token_type=s))
    )
    assert "%" in registry.token_getters
    assert registry.match_tag_type("%value") == "%"
    assert isinstance(registry.create_token("%"), CustomToken)


def test_removed_prefix_leaves_table_and_pattern() -> None:
    """Removing ``>`` turns partial tags into plain names."""
    registry = _build(MutableRegistrySettings().remove_token_getter(">"))
    assert ">" not in registry.token_getters
    assert registry.match_tag_type(">header") == "name"
    assert isinstance(registry.create_token("name"), EscapedValueToken)


def test_reserved_prefixes_cannot_be_removed() -> None:
    """``name`` and ``text`` are always present."""
    registry = _build(
        MutableRegistrySettings().remove_token_getter("name").remove_token_getter("text")
    )
    assert "name" in registry.token_getters
    assert "text" in registry.token_getters


def test_structural_markers_have_no_factory(default_registry: Registry) -> None:
    """Structural tags are recognized but left to the tokenizer."""
    assert default_registry.match_tag_type("/items") == "/"
    assert default_registry.create_token("/") is None
    assert isinstance(default_registry.create_token(">"), PartialToken)


# --- truthiness ---


def test_empty_chain_has_no_opinion(default_registry: Registry) -> None:
    """With no checks, the built-in rule decides."""
    assert default_registry.check_truthy("anything") is None
    assert default_registry.is_truthy([]) is False
    assert default_registry.is_truthy([0]) is True


def test_truthy_chain_short_circuits() -> None:
    """The first determinate answer wins; undetermined falls through."""
    registry = _build(
        MutableRegistrySettings().add_truthy_check(lambda v: True if v == "yes" else None)
    )
    consulted: list[Any] = []

    def builtin_rule(value: Any) -> bool:
        consulted.append(value)
        return bool(value)

    assert registry.is_truthy("yes", builtin_rule) is True
    assert consulted == []
    assert registry.is_truthy("no", builtin_rule) is True
    assert consulted == ["no"]


def test_truthy_chain_order_matters() -> None:
    """Checks run in registration order."""
    registry = _build(
        MutableRegistrySettings()
        .add_truthy_check(lambda v: None)
        .add_truthy_check(lambda v: False if v == 0 else None)
        .add_truthy_check(lambda v: True)
    )
    assert registry.check_truthy(0) is False
    assert registry.check_truthy(1) is True


# --- enumeration ---


def test_enumeration_converters() -> None:
    """The most specific converter wins; unmatched values yield None."""
    registry = _build(
        MutableRegistrySettings()
        .add_enumeration_converter(Bag, lambda v: v.items_view())
        .add_enumeration_converter(SortedBag, lambda v: sorted(v.items_view()))
    )
    assert list(registry.enumeration_converters) == [SortedBag, Bag]
    assert registry.convert_enumeration(Bag(3, 1, 2)) == (3, 1, 2)
    assert registry.convert_enumeration(SortedBag(3, 1, 2)) == (1, 2, 3)
    assert registry.convert_enumeration([1, 2]) is None


# --- loaders ---


def test_loaders_are_kept() -> None:
    """Configured loaders are exposed as given."""
    partials = DictLoader({"header": "<h1>{{title}}</h1>"})
    registry = _build(MutableRegistrySettings().set_partial_template_loader(partials))
    assert registry.partial_template_loader is partials
    assert registry.has_partial_loader is True
    assert registry.template_loader.load("{{x}}") == "{{x}}"


# --- immutability ---


def test_registry_is_frozen(default_registry: Registry) -> None:
    """No attribute or table can be changed after construction."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        default_registry.max_recursion_depth = 1  # type: ignore[misc]
    with pytest.raises(TypeError):
        default_registry.value_getters[Point] = _point_getter  # type: ignore[index]
    with pytest.raises(TypeError):
        default_registry.token_getters["%"] = None  # type: ignore[index]
    with pytest.raises(TypeError):
        default_registry.enumeration_converters[Bag] = list  # type: ignore[index]
    assert isinstance(default_registry.truthy_checks, tuple)


def test_later_builder_edits_do_not_leak() -> None:
    """Editing the builder after construction does not affect the registry."""
    builder = MutableRegistrySettings().add_value_getter(Point, _point_getter)
    registry = Registry.from_settings(builder.freeze())
    builder.add_value_getter(Bag, lambda v, k: "bag")
    builder.add_truthy_check(lambda v: True)
    assert Bag not in registry.value_getters
    assert registry.truthy_checks == ()


def test_describe(default_registry: Registry) -> None:
    """The summary lists every facet as plain data."""
    summary = default_registry.describe()
    assert summary["value_getters"] == [
        "collections.abc.Sequence",
        "dict",
        "collections.abc.Mapping",
        "object",
    ]
    assert summary["max_recursion_depth"] == 256
    assert summary["partial_template_loader"] is None
    assert summary["truthy_checks"] == 0
    assert "name" not in summary["token_match_regex"]


def test_sequence_getter_serves_tuples(default_registry: Registry) -> None:
    """Tuples dispatch to the sequence resolver."""
    assert isinstance((1,), Sequence)
    assert default_registry.resolve_value((1, 2), "0") == 1
