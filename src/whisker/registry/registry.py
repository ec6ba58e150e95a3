# topmark:header:start
#
#   project      : Whisker
#   file         : registry.py
#   file_relpath : src/whisker/registry/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""The frozen `Registry`.

A `Registry` bundles every pluggable decision a tokenizer and renderer need:
ordered value resolvers, tag-prefix handlers and the pattern built from them,
the truthy-check chain, enumeration converters, loaders, the recursion
ceiling and opaque render settings.

It is built once from optional `RegistrySettings` and never changes
afterwards: every collection is a ``MappingProxyType`` or ``tuple`` over
storage owned by the instance, and the dataclass is frozen. One instance can
therefore be shared by any number of concurrent renders without locking.
Recursion depth is tracked by each render call, never here.

Typical usage:
    ```python
    from whisker import MutableRegistrySettings, Registry

    registry = Registry.from_settings(
        MutableRegistrySettings().set_max_recursion_depth(32).freeze()
    )
    registry.resolve_value({"a": [1, 2, 3]}, "a")
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from whisker.config.logging import get_logger
from whisker.config.model import RegistrySettings, RenderSettings
from whisker.loaders import StringLoader
from whisker.registry.defaults import (
    DEFAULT_ENUMERATION_CONVERTERS,
    DEFAULT_MAX_RECURSION_DEPTH,
    DEFAULT_TOKEN_GETTERS,
    DEFAULT_TRUTHY_CHECKS,
    DEFAULT_VALUE_GETTERS,
    RESERVED_TOKEN_TYPES,
)
from whisker.registry.merge import freeze_mapping, merge_left
from whisker.registry.patterns import build_token_pattern, match_tag_type
from whisker.registry.resolvers import MISSING
from whisker.registry.specificity import order_table
from whisker.tokens import DEFAULT_TAGS

if TYPE_CHECKING:
    import re
    from collections.abc import Mapping

    from whisker.config.logging import WhiskerLogger
    from whisker.loaders import TemplateLoader
    from whisker.registry.defaults import EnumerationConverter, TokenGetter, TruthyCheck
    from whisker.registry.resolvers import ValueGetter
    from whisker.tokens import ParserOutput, Tags

logger: WhiskerLogger = get_logger(__name__)


@dataclass(frozen=True)
class Registry:
    """Immutable configuration shared by tokenizers and renderers.

    Prefer `Registry.from_settings` over calling the constructor directly; the
    constructor takes already merged, ordered and frozen tables.

    Attributes:
        value_getters: Value resolvers, most specific type first.
        token_getters: Token factories keyed by tag prefix.
        token_match_regex: Alternation of every tag-introducing prefix plus
            the structural markers.
        truthy_checks: Truthy-check chain in consultation order.
        enumeration_converters: Enumeration converters, most specific type first.
        template_loader: Loader for top-level templates.
        partial_template_loader: Loader for partials, or ``None`` when the
            registry has none.
        max_recursion_depth: Maximum nesting depth a render may reach.
        render_settings: Opaque render flags.
    """

    value_getters: Mapping[type, ValueGetter]
    token_getters: Mapping[str, TokenGetter]
    token_match_regex: re.Pattern[str]
    truthy_checks: tuple[TruthyCheck, ...]
    enumeration_converters: Mapping[type, EnumerationConverter]
    template_loader: TemplateLoader
    partial_template_loader: TemplateLoader | None
    max_recursion_depth: int
    render_settings: RenderSettings

    @classmethod
    def from_settings(cls, settings: RegistrySettings | None = None) -> Registry:
        """Build a registry from ``settings`` merged over the built-in defaults.

        Args:
            settings (RegistrySettings | None): Construction input; ``None``
                yields the pure defaults.

        Returns:
            Registry: The frozen registry.
        """
        settings = settings or RegistrySettings()

        value_getters: dict[type, ValueGetter] = order_table(
            merge_left(DEFAULT_VALUE_GETTERS, settings.value_getters, protected=(object,))
        )
        token_getters: dict[str, TokenGetter] = merge_left(
            DEFAULT_TOKEN_GETTERS, settings.token_getters, protected=RESERVED_TOKEN_TYPES
        )
        enumeration_converters: dict[type, EnumerationConverter] = order_table(
            merge_left(DEFAULT_ENUMERATION_CONVERTERS, settings.enumeration_converters)
        )
        truthy_checks: tuple[TruthyCheck, ...] = (
            tuple(settings.truthy_checks)
            if settings.truthy_checks is not None
            else DEFAULT_TRUTHY_CHECKS
        )

        registry = cls(
            value_getters=freeze_mapping(value_getters),
            token_getters=freeze_mapping(token_getters),
            token_match_regex=build_token_pattern(token_getters),
            truthy_checks=truthy_checks,
            enumeration_converters=freeze_mapping(enumeration_converters),
            template_loader=settings.template_loader or StringLoader(),
            partial_template_loader=settings.partial_template_loader,
            max_recursion_depth=_ceiling(settings.max_recursion_depth),
            render_settings=settings.render_settings or RenderSettings.default(),
        )
        logger.debug(
            "Built registry: %d value getters, %d token getters, %d truthy checks, "
            "%d enumeration converters, max depth %d",
            len(registry.value_getters),
            len(registry.token_getters),
            len(registry.truthy_checks),
            len(registry.enumeration_converters),
            registry.max_recursion_depth,
        )
        return registry

    @property
    def has_partial_loader(self) -> bool:
        """True if a partial template loader is configured."""
        return self.partial_template_loader is not None

    # ------------------------------ Values ------------------------------
    def resolve_value(self, value: Any, key: str) -> Any:
        """Resolve member ``key`` of ``value``.

        The resolver of the first (most specific) type ``value`` is an instance
        of decides; if it reports no such member, the result is `MISSING` and no
        less specific resolver is tried.

        Returns:
            Any: The resolved value, or `MISSING`.
        """
        for type_key, getter in self.value_getters.items():
            if isinstance(value, type_key):
                return getter(value, key)
        return MISSING

    # ----------------------------- Truthiness -----------------------------
    def check_truthy(self, value: Any) -> bool | None:
        """Consult the truthy-check chain.

        Returns:
            bool | None: The first determinate answer, or ``None`` when every
                check (or an empty chain) has no opinion.
        """
        for check in self.truthy_checks:
            answer: bool | None = check(value)
            if answer is not None:
                return answer
        return None

    def is_truthy(self, value: Any, default: Callable[[Any], bool] = bool) -> bool:
        """Decide truthiness: the chain first, then the renderer's ``default`` rule."""
        answer: bool | None = self.check_truthy(value)
        if answer is None:
            return default(value)
        return answer

    # ---------------------------- Enumeration ----------------------------
    def convert_enumeration(self, value: Any) -> tuple[Any, ...] | None:
        """Convert ``value`` with the most specific matching converter.

        Returns:
            tuple[Any, ...] | None: The elements, or ``None`` when no converter
                type matches ``value``.
        """
        for type_key, converter in self.enumeration_converters.items():
            if isinstance(value, type_key):
                return tuple(converter(value))
        return None

    # ------------------------------- Tags -------------------------------
    def match_tag_type(self, tag_body: str, pos: int = 0) -> str:
        """Return the prefix introducing ``tag_body`` at ``pos`` (``"name"`` if none)."""
        return match_tag_type(self.token_match_regex, tag_body, pos)

    def create_token(self, tag_type: str, tags: Tags = DEFAULT_TAGS) -> ParserOutput | None:
        """Build the token for ``tag_type`` with its registered factory.

        Returns:
            ParserOutput | None: The token, or ``None`` for structural markers
                (section close, delimiter change, triple mustache, comment)
                that have no factory.
        """
        factory: TokenGetter | None = self.token_getters.get(tag_type)
        if factory is None:
            return None
        return factory(tag_type, tags)

    def describe(self) -> dict[str, Any]:
        """Return a plain-data summary of this registry."""
        return {
            "value_getters": [_type_name(t) for t in self.value_getters],
            "token_getters": list(self.token_getters),
            "token_match_regex": self.token_match_regex.pattern,
            "truthy_checks": len(self.truthy_checks),
            "enumeration_converters": [_type_name(t) for t in self.enumeration_converters],
            "template_loader": repr(self.template_loader),
            "partial_template_loader": (
                repr(self.partial_template_loader) if self.has_partial_loader else None
            ),
            "max_recursion_depth": self.max_recursion_depth,
            "render_settings": {
                "skip_recursive_lookup": self.render_settings.skip_recursive_lookup,
                "throw_on_data_miss": self.render_settings.throw_on_data_miss,
                "skip_html_encoding": self.render_settings.skip_html_encoding,
            },
        }


def _ceiling(depth: int | None) -> int:
    if depth is None or depth < 1:
        return DEFAULT_MAX_RECURSION_DEPTH
    return depth


def _type_name(type_key: type) -> str:
    module: str = type_key.__module__
    if module == "builtins":
        return type_key.__qualname__
    return f"{module}.{type_key.__qualname__}"
