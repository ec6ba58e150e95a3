# topmark:header:start
#
#   project      : Whisker
#   file         : __main__.py
#   file_relpath : src/whisker/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Module entry point for running Whisker via ``python -m whisker``.

It delegates directly to :func:`whisker.cli.main.cli`, so there is a single
CLI entry point regardless of how Whisker is launched.

Examples:
    Show the default registry::

        python -m whisker registry
"""

from __future__ import annotations

from whisker.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
