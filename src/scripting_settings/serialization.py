# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for converting settings state to and from XML elements."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Final
from xml.etree.ElementTree import Element, SubElement, indent, tostring

from defusedxml.ElementTree import fromstring

from .models import DEFAULT_VALUE, MAX_ORDER, MIN_ORDER, DefinitionKey, DefinitionValue
from .schema import (
    CLASS_NAME_ATTR,
    DEFINITION_NAME_ATTR,
    FLAG_FIELDS,
    OPTION_NAME_ATTR,
    OPTION_TAG,
    OPTION_VALUE_ATTR,
    ORDER_TAG,
    ROOT_TAG,
    SCRIPT_DEFINITION_TAG,
    SUPPRESS_DEFINITIONS_CHECK_OPTION,
)

LOGGER = logging.getLogger(__name__)

_OPTION_TRUE: Final[frozenset[str]] = frozenset({"true", "yes", "on", "1"})
_OPTION_FALSE: Final[frozenset[str]] = frozenset({"false", "no", "off", "0"})
_ORDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]{1,10}")


@dataclass(slots=True)
class DecodedSettings:
    """Settings recovered from a document.

    Attributes:
        suppress_definitions_check: Flag value, ``None`` when the document does
            not carry a usable option.
        entries: Definition entries in document order.
    """

    suppress_definitions_check: bool | None = None
    entries: list[tuple[DefinitionKey, DefinitionValue]] = field(default_factory=list)


def format_bool(value: bool) -> str:
    """Return ``value`` in the lower-case form used by the document."""

    return "true" if value else "false"


def parse_bool(text: str | None) -> bool | None:
    """Return ``True``/``False`` for ``true``/``false`` text, otherwise ``None``."""

    if text is None:
        return None
    token = text.strip().lower()
    if token == "true":
        return True
    if token == "false":
        return False
    return None


def parse_option_bool(text: str | None) -> bool | None:
    """Return the boolean carried by an ``option`` value attribute.

    Option values accept the wider set of spellings other writers of the same
    file produce (``yes``/``no``, ``on``/``off``, ``1``/``0``).
    """

    if text is None:
        return None
    token = text.strip().lower()
    if token in _OPTION_TRUE:
        return True
    if token in _OPTION_FALSE:
        return False
    return None


def parse_order(text: str | None) -> int | None:
    """Return ``text`` as an ``int`` when it holds a plain base-10 integer.

    Surrounding whitespace is ignored. Digit separators, non-ASCII digits and
    values outside the signed 32-bit range are rejected.
    """

    if text is None:
        return None
    token = text.strip()
    if not _ORDER_PATTERN.fullmatch(token):
        return None
    value = int(token)
    if not MIN_ORDER <= value <= MAX_ORDER:
        return None
    return value


def encode_settings(
    suppress_definitions_check: bool,
    entries: Iterable[tuple[DefinitionKey, DefinitionValue]],
) -> Element:
    """Build the settings document for the supplied state.

    Args:
        suppress_definitions_check: Global flag silencing the ambiguity warning.
            Written only when ``True``.
        entries: Definition entries, emitted in iteration order.

    Returns:
        Element: Root element of the settings document.
    """

    root = Element(ROOT_TAG)
    if suppress_definitions_check:
        SubElement(
            root,
            OPTION_TAG,
            {
                OPTION_NAME_ATTR: SUPPRESS_DEFINITIONS_CHECK_OPTION,
                OPTION_VALUE_ATTR: format_bool(suppress_definitions_check),
            },
        )
    for key, value in entries:
        _append_definition(root, key, value)
    return root


def _append_definition(root: Element, key: DefinitionKey, value: DefinitionValue) -> None:
    node = SubElement(
        root,
        SCRIPT_DEFINITION_TAG,
        {CLASS_NAME_ATTR: key.class_name, DEFINITION_NAME_ATTR: key.definition_name},
    )
    SubElement(node, ORDER_TAG).text = str(value.order)
    for spec in FLAG_FIELDS:
        current = getattr(value, spec.field)
        if current != spec.default:
            SubElement(node, spec.tag).text = format_bool(current)


def decode_settings(element: Element) -> DecodedSettings:
    """Recover settings from ``element`` without raising on malformed content.

    Args:
        element: Root element produced by :func:`encode_settings` or by another
            writer of the same format.

    Returns:
        DecodedSettings: Flag and entries found in the document. Fields that are
        missing or cannot be parsed fall back to :data:`DEFAULT_VALUE`.
    """

    decoded = DecodedSettings(suppress_definitions_check=_decode_suppress_option(element))
    for node in element.iterfind(SCRIPT_DEFINITION_TAG):
        key = _decode_key(node)
        if key is None:
            LOGGER.debug("skipping %s without identity attributes: %s", SCRIPT_DEFINITION_TAG, node.attrib)
            continue
        decoded.entries.append((key, _decode_value(node)))
    return decoded


def _decode_suppress_option(element: Element) -> bool | None:
    for option in element.iterfind(OPTION_TAG):
        if option.get(OPTION_NAME_ATTR) != SUPPRESS_DEFINITIONS_CHECK_OPTION:
            continue
        value = parse_option_bool(option.get(OPTION_VALUE_ATTR))
        if value is None:
            LOGGER.debug("ignoring unparseable %s option value", SUPPRESS_DEFINITIONS_CHECK_OPTION)
        return value
    return None


def _decode_key(node: Element) -> DefinitionKey | None:
    definition_name = node.get(DEFINITION_NAME_ATTR)
    class_name = node.get(CLASS_NAME_ATTR)
    if definition_name is None or class_name is None:
        return None
    return DefinitionKey(definition_name=definition_name, class_name=class_name)


def _decode_value(node: Element) -> DefinitionValue:
    order = parse_order(node.findtext(ORDER_TAG))
    if order is None:
        order = DEFAULT_VALUE.order
    flags: dict[str, bool] = {}
    for spec in FLAG_FIELDS:
        parsed = parse_bool(node.findtext(spec.tag))
        flags[spec.field] = spec.default if parsed is None else parsed
    return DefinitionValue(order=order, **flags)


def to_xml_string(element: Element) -> str:
    """Render ``element`` as indented XML text without a declaration."""

    # indent() mutates in place; render a private copy so callers' trees stay untouched.
    clone = deepcopy(element)
    indent(clone, space="  ")
    return tostring(clone, encoding="unicode")


def from_xml_string(text: str) -> Element:
    """Parse ``text`` into an element, rejecting entity-expansion payloads."""

    return fromstring(text)


__all__ = [
    "DecodedSettings",
    "decode_settings",
    "encode_settings",
    "format_bool",
    "from_xml_string",
    "parse_bool",
    "parse_option_bool",
    "parse_order",
    "to_xml_string",
]
