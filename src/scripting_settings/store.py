# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""In-memory store of per-definition script preferences.

One :class:`ScriptingSettings` instance exists per workspace. The host fills it
with :meth:`ScriptingSettings.load_state` at startup and captures it with
:meth:`ScriptingSettings.get_state` whenever settings are saved. Reads and
writes of the definition table are serialised with a lock so background
resolution workers can query preferences while the UI thread edits them.
"""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock
from xml.etree.ElementTree import Element

from .interfaces import ScriptDefinition
from .models import DEFAULT_VALUE, DefinitionKey, DefinitionValue, key_for
from .serialization import decode_settings, encode_settings


class ScriptingSettings:
    """Persist ordering, enablement and auto-reload preferences per definition.

    Attributes:
        suppress_definitions_check: ``True`` when the warning about several
            definitions matching one script file is silenced.
    """

    def __init__(self) -> None:
        """Initialise an empty store with every preference at its default."""

        self.suppress_definitions_check = False
        self._definitions: dict[DefinitionKey, DefinitionValue] = {}
        self._lock = Lock()

    def get_state(self) -> Element:
        """Capture the store as a settings document.

        Returns:
            Element: Freshly built root element. Entries appear in the order
            they were first stored; default flag values are omitted.
        """

        with self._lock:
            entries = list(self._definitions.items())
        return encode_settings(self.suppress_definitions_check, entries)

    def load_state(self, state: Element) -> None:
        """Merge a persisted settings document into the store.

        Entries found in ``state`` overwrite stored entries with the same key;
        stored entries absent from ``state`` are kept. Malformed fields fall back
        to their defaults instead of raising.

        Args:
            state: Root element previously produced by :meth:`get_state`.
        """

        decoded = decode_settings(state)
        if decoded.suppress_definitions_check is not None:
            self.suppress_definitions_check = decoded.suppress_definitions_check
        with self._lock:
            for key, value in decoded.entries:
                self._definitions[key] = value

    def set_order(self, definition: ScriptDefinition, order: int) -> None:
        """Record ``order`` for ``definition`` keeping its other preferences.

        Raises:
            pydantic.ValidationError: If ``order`` is outside the signed 32-bit range.
        """

        self._upsert(definition, DefinitionValue(order=order), lambda value: value.with_order(order))

    def set_enabled(self, order: int, definition: ScriptDefinition, is_enabled: bool) -> None:
        """Record whether ``definition`` is enabled.

        Args:
            order: Order assigned when ``definition`` has no stored entry yet.
            definition: Definition whose preference changes.
            is_enabled: New enablement state.

        Raises:
            pydantic.ValidationError: If ``order`` is outside the signed 32-bit range.
        """

        self._upsert(
            definition,
            DefinitionValue(order=order, is_enabled=is_enabled),
            lambda value: value.with_enabled(is_enabled),
        )

    def set_auto_reload_configurations(self, order: int, definition: ScriptDefinition, auto_reload: bool) -> None:
        """Record whether configurations of ``definition`` reload automatically.

        Args:
            order: Order assigned when ``definition`` has no stored entry yet.
            definition: Definition whose preference changes.
            auto_reload: New auto-reload state.

        Raises:
            pydantic.ValidationError: If ``order`` is outside the signed 32-bit range.
        """

        self._upsert(
            definition,
            DefinitionValue(order=order, auto_reload_configurations=auto_reload),
            lambda value: value.with_auto_reload(auto_reload),
        )

    def get_order(self, definition: ScriptDefinition) -> int | None:
        """Return the stored order, or ``None`` when no preference exists."""

        stored = self._lookup(definition)
        return None if stored is None else stored.order

    def is_enabled(self, definition: ScriptDefinition) -> bool:
        """Return whether ``definition`` is enabled, ``True`` by default."""

        return self.value_for(definition).is_enabled

    def auto_reload_configurations(self, definition: ScriptDefinition) -> bool:
        """Return whether configurations auto-reload, ``False`` by default."""

        return self.value_for(definition).auto_reload_configurations

    def value_for(self, definition: ScriptDefinition) -> DefinitionValue:
        """Return the stored value for ``definition`` or :data:`DEFAULT_VALUE`."""

        stored = self._lookup(definition)
        return DEFAULT_VALUE if stored is None else stored

    def entries(self) -> list[tuple[DefinitionKey, DefinitionValue]]:
        """Return a snapshot of the stored entries in insertion order."""

        with self._lock:
            return list(self._definitions.items())

    def __len__(self) -> int:
        """Return the number of definitions with stored preferences."""

        with self._lock:
            return len(self._definitions)

    def _lookup(self, definition: ScriptDefinition) -> DefinitionValue | None:
        key = key_for(definition)
        with self._lock:
            return self._definitions.get(key)

    def _upsert(
        self,
        definition: ScriptDefinition,
        fresh: DefinitionValue,
        update: Callable[[DefinitionValue], DefinitionValue],
    ) -> None:
        key = key_for(definition)
        with self._lock:
            current = self._definitions.get(key)
            self._definitions[key] = fresh if current is None else update(current)


__all__ = ["ScriptingSettings"]
