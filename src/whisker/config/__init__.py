# topmark:header:start
#
#   project      : Whisker
#   file         : __init__.py
#   file_relpath : src/whisker/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Whisker configuration layer.

Exports the settings snapshot (`RegistrySettings`), its mutable builder
(`MutableRegistrySettings`), the opaque `RenderSettings` and the logging
helpers.
"""

from __future__ import annotations

from whisker.config.model import MutableRegistrySettings, RegistrySettings, RenderSettings

__all__ = [
    "MutableRegistrySettings",
    "RegistrySettings",
    "RenderSettings",
]
