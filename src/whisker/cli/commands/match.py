# topmark:header:start
#
#   project      : Whisker
#   file         : match.py
#   file_relpath : src/whisker/cli/commands/match.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Whisker `match` command.

Reports which tag type the effective registry's pattern assigns to a tag body
(the text between the delimiters), and which token it would build.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from whisker.cli.options import (
    OutputFormat,
    build_registry_from_options,
    config_option,
    format_option,
)

if TYPE_CHECKING:
    from whisker.cli.console import ClickConsole
    from whisker.registry import Registry
    from whisker.tokens import ParserOutput


@click.command(
    name="match",
    help="Show which tag type a tag body (e.g. '#items') is recognized as.",
)
@click.argument("tag_body")
@config_option
@format_option
def match_command(
    *,
    tag_body: str,
    config_path: Path | None = None,
    no_config: bool = False,
    output_format: str = OutputFormat.TEXT.value,
) -> None:
    """Show the tag type and token kind for ``tag_body``."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    registry: Registry = build_registry_from_options(config_path, no_config=no_config)
    tag_type: str = registry.match_tag_type(tag_body)
    token: ParserOutput | None = registry.create_token(tag_type)
    token_kind: str | None = type(token).__name__ if token is not None else None

    if OutputFormat(output_format) is OutputFormat.JSON:
        console.print(json.dumps({"tag_type": tag_type, "token": token_kind}))
        return
    kind: str = token_kind or "structural"
    console.print(f"{console.styled(tag_type, bold=True)} -> {kind}")
