# topmark:header:start
#
#   project      : Whisker
#   file         : main.py
#   file_relpath : src/whisker/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Click entry point for the Whisker CLI.

Group-level options are initialized once and placed into ``ctx.obj``;
subcommands read the console and verbosity from there.
"""

from __future__ import annotations

import click

from whisker.cli.commands.match import match_command
from whisker.cli.commands.registry import registry_command
from whisker.cli.commands.version import version_command
from whisker.cli.console import ClickConsole
from whisker.cli.options import common_color_options, common_verbose_options, resolve_verbosity
from whisker.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` will be populated.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured from the environment, not from -v/-q.
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    ctx.color = not no_color
    ctx.obj["console"] = ClickConsole(enable_color=not no_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Whisker CLI: inspect template registry configuration.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Entry point for the Whisker CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'whisker registry' to inspect the effective registry.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(registry_command)

cli.add_command(match_command)

if __name__ == "__main__":
    cli()
