# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-project preferences for script definition resolution."""

from __future__ import annotations

from importlib import metadata

from .models import DEFAULT_VALUE, MAX_ORDER, MIN_ORDER, DefinitionKey, DefinitionValue
from .store import ScriptingSettings

__all__ = [
    "DEFAULT_VALUE",
    "MAX_ORDER",
    "MIN_ORDER",
    "DefinitionKey",
    "DefinitionValue",
    "ScriptingSettings",
    "__version__",
]

try:
    __version__ = metadata.version("scripting-settings")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
