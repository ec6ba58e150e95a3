# topmark:header:start
#
#   project      : Whisker
#   file         : version.py
#   file_relpath : src/whisker/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Whisker `version` command.

Prints the Whisker version as installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from whisker.cli.console import ClickConsole
from whisker.cli.options import OutputFormat, format_option
from whisker.constants import WHISKER_VERSION


@click.command(
    name="version",
    help="Show the current version of Whisker.",
)
@format_option
def version_command(*, output_format: str = OutputFormat.TEXT.value) -> None:
    """Show the current version of Whisker."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    if OutputFormat(output_format) is OutputFormat.JSON:
        console.print(json.dumps({"version": WHISKER_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("Whisker version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(WHISKER_VERSION, bold=True)}")
    else:
        console.print(console.styled(WHISKER_VERSION, bold=True))
