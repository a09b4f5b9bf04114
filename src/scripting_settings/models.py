# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Key and value records stored per script definition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Final

from pydantic import BaseModel, ConfigDict, Field

from .interfaces import ScriptDefinition

MAX_ORDER: Final[int] = 2**31 - 1
MIN_ORDER: Final[int] = -(2**31)

Order = Annotated[int, Field(ge=MIN_ORDER, le=MAX_ORDER)]


class DefinitionKey(BaseModel):
    """Identity of a script definition within the settings table."""

    model_config = ConfigDict(frozen=True)

    definition_name: str
    class_name: str


class DefinitionValue(BaseModel):
    """Preferences recorded for a single script definition.

    Attributes:
        order: Priority used to break ties between definitions matching the
            same file. Lower values sort first. Limited to the signed 32-bit
            range so other readers of the document can parse it.
        is_enabled: Whether the definition takes part in resolution at all.
        auto_reload_configurations: Whether resolved dependency configurations
            refresh without a manual trigger.
    """

    model_config = ConfigDict(frozen=True)

    order: Order
    is_enabled: bool = True
    auto_reload_configurations: bool = False

    def with_order(self, order: int) -> DefinitionValue:
        """Return a copy of the value carrying ``order``."""
        return self._replace(order=order)

    def with_enabled(self, is_enabled: bool) -> DefinitionValue:
        """Return a copy of the value carrying ``is_enabled``."""
        return self._replace(is_enabled=is_enabled)

    def with_auto_reload(self, auto_reload_configurations: bool) -> DefinitionValue:
        """Return a copy of the value carrying ``auto_reload_configurations``."""
        return self._replace(auto_reload_configurations=auto_reload_configurations)

    def _replace(self, **changes: Any) -> DefinitionValue:
        # model_copy(update=...) skips validation; rebuild so the order range holds.
        return DefinitionValue.model_validate({**self.model_dump(), **changes})


DEFAULT_VALUE: Final[DefinitionValue] = DefinitionValue(order=MAX_ORDER)


@dataclass(frozen=True, slots=True)
class DefinitionRef:
    """Stand-alone :class:`ScriptDefinition` used when no catalog is at hand."""

    name: str
    definition_id: str


def key_for(definition: ScriptDefinition) -> DefinitionKey:
    """Return the settings key identifying ``definition``.

    Args:
        definition: Definition object supplied by the definition catalog.

    Returns:
        DefinitionKey: Key built from the display name and implementation id.
    """

    return DefinitionKey(definition_name=definition.name, class_name=definition.definition_id)


__all__ = [
    "DEFAULT_VALUE",
    "MAX_ORDER",
    "MIN_ORDER",
    "DefinitionKey",
    "DefinitionRef",
    "DefinitionValue",
    "Order",
    "key_for",
]
