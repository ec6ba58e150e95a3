# topmark:header:start
#
#   project      : Whisker
#   file         : registry.py
#   file_relpath : src/whisker/cli/commands/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Whisker `registry` command.

Builds the effective registry (defaults merged with the discovered or given
config file) and prints a summary of every facet.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from whisker.cli.options import (
    OutputFormat,
    build_registry_from_options,
    config_option,
    format_option,
)
from whisker.constants import VALUE_NOT_SET
from whisker.utils.introspection import format_callable_pretty

if TYPE_CHECKING:
    from whisker.cli.console import ClickConsole
    from whisker.registry import Registry


def _heading(console: ClickConsole, text: str) -> None:
    console.print(console.styled(text, bold=True, underline=True))


def _render_text(console: ClickConsole, registry: Registry, vlevel: int) -> None:
    summary: dict[str, Any] = registry.describe()

    _heading(console, "Value getters (most specific first):")
    for index, (type_name, getter) in enumerate(
        zip(summary["value_getters"], registry.value_getters.values(), strict=True), start=1
    ):
        line: str = f"  {index}. {type_name}"
        if vlevel > 0:
            line += f" -> {format_callable_pretty(getter)}"
        console.print(line)

    _heading(console, "Token getters:")
    console.print("  " + "  ".join(summary["token_getters"]))
    console.print(f"  pattern: {console.styled(summary['token_match_regex'], fg='cyan')}")

    _heading(console, "Truthy checks:")
    console.print(f"  {summary['truthy_checks']}")

    _heading(console, "Enumeration converters:")
    converters: list[str] = summary["enumeration_converters"]
    console.print("  " + (", ".join(converters) if converters else VALUE_NOT_SET))

    _heading(console, "Loaders:")
    console.print(f"  template: {summary['template_loader']}")
    console.print(f"  partials: {summary['partial_template_loader'] or VALUE_NOT_SET}")

    _heading(console, "Limits:")
    console.print(f"  max_recursion_depth: {summary['max_recursion_depth']}")

    if vlevel >= 0:
        _heading(console, "Render settings:")
        for name, value in summary["render_settings"].items():
            console.print(f"  {name}: {str(value).lower()}")


@click.command(
    name="registry",
    help="Show the effective template registry (defaults merged with config).",
)
@config_option
@format_option
def registry_command(
    *,
    config_path: Path | None = None,
    no_config: bool = False,
    output_format: str = OutputFormat.TEXT.value,
) -> None:
    """Show the effective template registry."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    registry: Registry = build_registry_from_options(config_path, no_config=no_config)

    if OutputFormat(output_format) is OutputFormat.JSON:
        console.print(json.dumps(registry.describe(), indent=2))
    else:
        _render_text(console, registry, vlevel)
