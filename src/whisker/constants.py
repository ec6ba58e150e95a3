# topmark:header:start
#
#   project      : Whisker
#   file         : constants.py
#   file_relpath : src/whisker/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Whisker Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

WHISKER_VERSION: str = get_version("whisker")

# Config file names searched by the CLI (first match wins).
WHISKER_TOML_NAME: str = "whisker.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"

# Environment variable consulted by `whisker.config.logging.resolve_env_log_level`.
LOG_LEVEL_ENV_VAR: str = "WHISKER_LOG_LEVEL"

DEFAULT_PARTIAL_EXTENSION: str = ".mustache"

VALUE_NOT_SET: str = "<not set>"
