# topmark:header:start
#
#   project      : Whisker
#   file         : __init__.py
#   file_relpath : src/whisker/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Whisker package.

Whisker is the configuration core of a Mustache-style template engine. It
builds a frozen `Registry` of value resolvers, tag-prefix handlers, truthy
checks, enumeration converters and loaders that tokenizers and renderers
read concurrently.
"""

from __future__ import annotations

from whisker.config.model import MutableRegistrySettings, RegistrySettings, RenderSettings
from whisker.registry import MISSING, Registry

__all__ = [
    "MISSING",
    "MutableRegistrySettings",
    "Registry",
    "RegistrySettings",
    "RenderSettings",
]
