# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Collaborator contracts consumed by the settings store."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from typing import Protocol, runtime_checkable
from xml.etree.ElementTree import Element


@runtime_checkable
class ScriptDefinition(Protocol):
    """Script definition supplied by the external definition catalog.

    Attributes:
        name: Human-readable definition name shown to the user.
        definition_id: Fully-qualified identifier of the implementation.
    """

    @property
    def name(self) -> str:
        """Return the display name of the definition."""

        raise NotImplementedError

    @property
    def definition_id(self) -> str:
        """Return the unique implementation identifier of the definition."""

        raise NotImplementedError


@runtime_checkable
class SettingsDocumentStorage(Protocol):
    """Durable medium holding the serialized settings document."""

    def read(self) -> Element | None:
        """Return the stored document root, or ``None`` when nothing is stored."""

        raise NotImplementedError

    def write(self, element: Element) -> None:
        """Persist ``element`` as the new settings document."""

        raise NotImplementedError


__all__ = ["ScriptDefinition", "SettingsDocumentStorage"]
