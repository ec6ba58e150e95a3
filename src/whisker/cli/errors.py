# topmark:header:start
#
#   project      : Whisker
#   file         : errors.py
#   file_relpath : src/whisker/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Exceptions for the Whisker CLI.

Raise these in CLI commands to signal errors with standardized messages and
exit codes. They prefer the project console if one is present in the Click
context, and fall back to Click's default styling otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from whisker.cli.exit_codes import ExitCode


class WhiskerError(click.ClickException):
    """Base class for all Whisker CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class WhiskerUsageError(WhiskerError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class WhiskerConfigError(WhiskerError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class WhiskerFileNotFoundError(WhiskerError):
    """Error when a config path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND
