# topmark:header:start
#
#   project      : Whisker
#   file         : model.py
#   file_relpath : src/whisker/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Registry settings model.

This module defines:
    - `RenderSettings`: opaque render flags passed through to the renderer.
    - `RegistrySettings`: an immutable snapshot of every construction input of
      a `whisker.registry.Registry`. Every field is optional; ``None`` means
      "built-ins only" for that facet.
    - `MutableRegistrySettings`: a mutable builder that collects overrides from
      code and TOML, then `freeze`s into `RegistrySettings`.

Immutability:
    - `RegistrySettings` stores read-only mappings and tuples and is
      ``frozen=True``. Use `RegistrySettings.thaw` -> edit ->
      `MutableRegistrySettings.freeze` for updates.

Testing guidance:
    - Unit-test builder behavior without I/O.
    - Exercise TOML parsing through `MutableRegistrySettings.from_toml_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import GenericAlias, MappingProxyType
from typing import TYPE_CHECKING, Any

from whisker.config.io import (
    extract_whisker_table,
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_map,
    get_string_value_or_none,
    get_table_value,
    load_toml_dict,
)
from whisker.config.logging import get_logger
from whisker.constants import DEFAULT_PARTIAL_EXTENSION
from whisker.loaders import CompositeLoader, DictLoader, DirectoryLoader

if TYPE_CHECKING:
    from collections.abc import Mapping

    from whisker.config.io import TomlTable
    from whisker.config.logging import WhiskerLogger
    from whisker.loaders import TemplateLoader
    from whisker.registry.defaults import EnumerationConverter, TokenGetter, TruthyCheck
    from whisker.registry.resolvers import ValueGetter

logger: WhiskerLogger = get_logger(__name__)


@dataclass(frozen=True)
class RenderSettings:
    """Render-time flags, carried by the registry but never examined by it.

    Attributes:
        skip_recursive_lookup (bool): Only look up names in the innermost context.
        throw_on_data_miss (bool): Treat an unresolved name as an error.
        skip_html_encoding (bool): Render escaped interpolations without HTML escaping.
    """

    skip_recursive_lookup: bool = False
    throw_on_data_miss: bool = False
    skip_html_encoding: bool = False

    @classmethod
    def default(cls) -> RenderSettings:
        """Return the default render settings."""
        return cls()


@dataclass(frozen=True)
class RegistrySettings:
    """Immutable construction input of a `Registry`.

    Attributes:
        value_getters (Mapping[type, ValueGetter] | None): Value resolver overrides.
        token_getters (Mapping[str, TokenGetter | None] | None): Prefix handler
            overrides; a ``None`` value removes a non-reserved prefix.
        truthy_checks (tuple[TruthyCheck, ...] | None): Truthy-check chain
            (replaces the empty default wholesale).
        enumeration_converters (Mapping[type, EnumerationConverter] | None):
            Enumeration converter overrides.
        template_loader (TemplateLoader | None): Top-level template loader.
        partial_template_loader (TemplateLoader | None): Partial loader.
        max_recursion_depth (int | None): Recursion ceiling.
        render_settings (RenderSettings | None): Opaque render flags.
    """

    value_getters: Mapping[type, ValueGetter] | None = None
    token_getters: Mapping[str, TokenGetter | None] | None = None
    truthy_checks: tuple[TruthyCheck, ...] | None = None
    enumeration_converters: Mapping[type, EnumerationConverter] | None = None
    template_loader: TemplateLoader | None = None
    partial_template_loader: TemplateLoader | None = None
    max_recursion_depth: int | None = None
    render_settings: RenderSettings | None = None

    def thaw(self) -> MutableRegistrySettings:
        """Return a mutable copy of these settings."""
        return MutableRegistrySettings(
            value_getters=dict(self.value_getters) if self.value_getters is not None else None,
            token_getters=dict(self.token_getters) if self.token_getters is not None else None,
            truthy_checks=list(self.truthy_checks) if self.truthy_checks is not None else None,
            enumeration_converters=(
                dict(self.enumeration_converters)
                if self.enumeration_converters is not None
                else None
            ),
            template_loader=self.template_loader,
            partial_template_loader=self.partial_template_loader,
            max_recursion_depth=self.max_recursion_depth,
            render_settings=self.render_settings,
        )


def _frozen(table: dict[Any, Any] | None) -> Mapping[Any, Any] | None:
    return MappingProxyType(dict(table)) if table is not None else None


def _check_type_keys(facet: str, table: dict[Any, Any] | None) -> None:
    # issubclass() only accepts classes; generic aliases such as list[int] are not.
    for key in table or ():
        if not isinstance(key, type) or isinstance(key, GenericAlias):
            raise ValueError(f"{facet} keys must be classes, got {key!r}")


@dataclass
class MutableRegistrySettings:
    """Mutable builder for `RegistrySettings`.

    Each ``add_*`` / ``set_*`` method returns ``self`` so calls can be chained::

        settings = (
            MutableRegistrySettings()
            .add_value_getter(Point, lambda p, key: getattr(p, key.upper()))
            .set_max_recursion_depth(32)
            .freeze()
        )

    Collections stay ``None`` until first touched so an untouched facet keeps
    meaning "built-ins only".
    """

    value_getters: dict[type, ValueGetter] | None = None
    token_getters: dict[str, TokenGetter | None] | None = None
    truthy_checks: list[TruthyCheck] | None = None
    enumeration_converters: dict[type, EnumerationConverter] | None = None
    template_loader: TemplateLoader | None = None
    partial_template_loader: TemplateLoader | None = None
    max_recursion_depth: int | None = None
    render_settings: RenderSettings | None = None

    # Provenance
    config_files: list[Path] = field(default_factory=lambda: [])

    # ---------------------------- Builders ----------------------------
    def add_value_getter(self, type_key: type, getter: ValueGetter) -> MutableRegistrySettings:
        """Register (or replace) the value resolver for ``type_key``."""
        if self.value_getters is None:
            self.value_getters = {}
        self.value_getters[type_key] = getter
        return self

    def add_token_getter(self, prefix: str, getter: TokenGetter) -> MutableRegistrySettings:
        """Register (or replace) the token factory for tag ``prefix``."""
        if self.token_getters is None:
            self.token_getters = {}
        self.token_getters[prefix] = getter
        return self

    def remove_token_getter(self, prefix: str) -> MutableRegistrySettings:
        """Drop a built-in prefix from the merged table (reserved types are kept)."""
        if self.token_getters is None:
            self.token_getters = {}
        self.token_getters[prefix] = None
        return self

    def add_truthy_check(self, check: TruthyCheck) -> MutableRegistrySettings:
        """Append a truthy check to the chain."""
        if self.truthy_checks is None:
            self.truthy_checks = []
        self.truthy_checks.append(check)
        return self

    def add_enumeration_converter(
        self, type_key: type, converter: EnumerationConverter
    ) -> MutableRegistrySettings:
        """Register (or replace) the enumeration converter for ``type_key``."""
        if self.enumeration_converters is None:
            self.enumeration_converters = {}
        self.enumeration_converters[type_key] = converter
        return self

    def set_template_loader(self, loader: TemplateLoader) -> MutableRegistrySettings:
        """Set the top-level template loader."""
        self.template_loader = loader
        return self

    def set_partial_template_loader(self, loader: TemplateLoader) -> MutableRegistrySettings:
        """Set the partial template loader."""
        self.partial_template_loader = loader
        return self

    def set_max_recursion_depth(self, depth: int) -> MutableRegistrySettings:
        """Set the recursion ceiling (validated on `freeze`)."""
        self.max_recursion_depth = depth
        return self

    def set_render_settings(self, render_settings: RenderSettings) -> MutableRegistrySettings:
        """Set the opaque render settings."""
        self.render_settings = render_settings
        return self

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> RegistrySettings:
        """Freeze this builder into an immutable `RegistrySettings`.

        Raises:
            ValueError: If ``max_recursion_depth`` is set but not a positive integer,
                or a value getter or enumeration converter is keyed by a non-class.
        """
        _check_type_keys("value_getters", self.value_getters)
        _check_type_keys("enumeration_converters", self.enumeration_converters)
        depth: int | None = self.max_recursion_depth
        if depth is not None and (isinstance(depth, bool) or not isinstance(depth, int)):
            raise ValueError(f"max_recursion_depth must be an int, got {type(depth).__name__}")
        if depth is not None and depth < 1:
            raise ValueError(f"max_recursion_depth must be positive, got {depth}")

        return RegistrySettings(
            value_getters=_frozen(self.value_getters),
            token_getters=_frozen(self.token_getters),
            truthy_checks=tuple(self.truthy_checks) if self.truthy_checks is not None else None,
            enumeration_converters=_frozen(self.enumeration_converters),
            template_loader=self.template_loader,
            partial_template_loader=self.partial_template_loader,
            max_recursion_depth=depth,
            render_settings=self.render_settings,
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_toml_file(cls, path: Path) -> MutableRegistrySettings | None:
        """Load settings from a ``whisker.toml`` or ``pyproject.toml`` file.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableRegistrySettings | None: The builder, or ``None`` when a
                ``pyproject.toml`` has no ``[tool.whisker]`` table.

        Raises:
            ConfigLoadError: If the file cannot be read or parsed.
        """
        logger.debug("Creating MutableRegistrySettings from TOML config: %s", path)
        data: TomlTable = load_toml_dict(path)
        section: TomlTable | None = extract_whisker_table(path, data)
        if section is None:
            logger.error("[tool.whisker] section missing or malformed in %s", path)
            return None
        draft: MutableRegistrySettings = cls.from_toml_dict(section, config_file=path)
        draft.config_files = [path]
        return draft

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        *,
        config_file: Path | None = None,
    ) -> MutableRegistrySettings:
        """Build settings from a parsed TOML table.

        Recognized keys::

            max_recursion_depth = 64

            [render]
            skip_recursive_lookup = false
            throw_on_data_miss = false
            skip_html_encoding = false

            [partials]
            header = "<h1>{{title}}</h1>"

            [loaders]
            partials_dir = "templates/partials"
            partials_extension = ".mustache"

        Relative ``partials_dir`` values are resolved against the directory of
        ``config_file`` (or the current directory without one). Inline
        ``[partials]`` win over files from ``partials_dir``.
        """
        draft = cls()

        depth: int | None = get_int_value_or_none(data, "max_recursion_depth", where="whisker")
        if depth is not None and depth < 1:
            logger.warning("Ignoring non-positive max_recursion_depth: %d", depth)
            depth = None
        draft.max_recursion_depth = depth

        render_table: TomlTable = get_table_value(data, "render")
        if render_table:
            base = RenderSettings.default()
            flags: dict[str, bool] = {}
            for name in ("skip_recursive_lookup", "throw_on_data_miss", "skip_html_encoding"):
                flag: bool | None = get_bool_value_or_none(render_table, name, where="render")
                flags[name] = getattr(base, name) if flag is None else flag
            draft.render_settings = RenderSettings(**flags)

        partial_loaders: list[TemplateLoader] = []
        inline: dict[str, str] = get_string_map(data, "partials", where="whisker")
        if inline:
            partial_loaders.append(DictLoader(inline))

        loaders_table: TomlTable = get_table_value(data, "loaders")
        partials_dir: str | None = get_string_value_or_none(
            loaders_table, "partials_dir", where="loaders"
        )
        if partials_dir is not None:
            extension: str = (
                get_string_value_or_none(loaders_table, "partials_extension", where="loaders")
                or DEFAULT_PARTIAL_EXTENSION
            )
            base_dir: Path = config_file.parent if config_file is not None else Path.cwd()
            partial_loaders.append(DirectoryLoader(base_dir / partials_dir, extension=extension))

        if len(partial_loaders) == 1:
            draft.partial_template_loader = partial_loaders[0]
        elif partial_loaders:
            draft.partial_template_loader = CompositeLoader(*partial_loaders)

        logger.debug("Generated MutableRegistrySettings: %s", draft)
        return draft
