# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tag and attribute names of the persisted settings document.

The names below are the wire format. They are declared once here so that
renaming a Python attribute never changes what lands on disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

ROOT_TAG: Final[str] = "KotlinScriptingSettings"
OPTION_TAG: Final[str] = "option"
OPTION_NAME_ATTR: Final[str] = "name"
OPTION_VALUE_ATTR: Final[str] = "value"
SUPPRESS_DEFINITIONS_CHECK_OPTION: Final[str] = "suppressDefinitionsCheck"

SCRIPT_DEFINITION_TAG: Final[str] = "scriptDefinition"
CLASS_NAME_ATTR: Final[str] = "className"
DEFINITION_NAME_ATTR: Final[str] = "definitionName"

ORDER_TAG: Final[str] = "order"
IS_ENABLED_TAG: Final[str] = "isEnabled"
AUTO_RELOAD_TAG: Final[str] = "autoReloadConfigurations"

FlagField = Literal["is_enabled", "auto_reload_configurations"]


@dataclass(frozen=True, slots=True)
class FlagFieldSpec:
    """Describe how a boolean ``DefinitionValue`` field maps onto a child tag.

    Attributes:
        field: Attribute name on :class:`~scripting_settings.models.DefinitionValue`.
        tag: Child element tag used in the document.
        default: Value implied when the child element is absent. The element is
            only written when the field differs from this default.
    """

    field: FlagField
    tag: str
    default: bool


FLAG_FIELDS: Final[tuple[FlagFieldSpec, ...]] = (
    FlagFieldSpec(field="is_enabled", tag=IS_ENABLED_TAG, default=True),
    FlagFieldSpec(field="auto_reload_configurations", tag=AUTO_RELOAD_TAG, default=False),
)

__all__ = [
    "AUTO_RELOAD_TAG",
    "CLASS_NAME_ATTR",
    "DEFINITION_NAME_ATTR",
    "FLAG_FIELDS",
    "FlagField",
    "FlagFieldSpec",
    "IS_ENABLED_TAG",
    "OPTION_NAME_ATTR",
    "OPTION_TAG",
    "OPTION_VALUE_ATTR",
    "ORDER_TAG",
    "ROOT_TAG",
    "SCRIPT_DEFINITION_TAG",
    "SUPPRESS_DEFINITIONS_CHECK_OPTION",
]
