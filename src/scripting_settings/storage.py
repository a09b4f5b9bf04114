# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File-backed storage for the settings document."""

from __future__ import annotations

import contextlib
import logging
import tempfile
from pathlib import Path
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException

from .errors import SettingsStorageError
from .schema import ROOT_TAG
from .serialization import from_xml_string, to_xml_string

LOGGER = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


class XmlFileStorage:
    """Read and write the settings document as a UTF-8 XML file."""

    def __init__(self, path: Path) -> None:
        """Bind the storage to ``path``.

        Args:
            path: Location of the settings document. The file and its parent
                directories are created on the first write.
        """

        self.path = path

    def read(self) -> Element | None:
        """Return the stored document root.

        Returns:
            Element | None: Parsed root element, ``None`` when the file is absent.

        Raises:
            SettingsStorageError: If the file cannot be read, is not well-formed
                XML, or its root element is not a settings document.
        """

        if not self.path.is_file():
            LOGGER.debug("no settings document at %s", self.path)
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SettingsStorageError(self.path, f"cannot read settings document: {exc}") from exc
        if not text.strip():
            return None
        try:
            root = from_xml_string(text)
        except (ParseError, DefusedXmlException) as exc:
            raise SettingsStorageError(self.path, f"malformed settings document: {exc}") from exc
        if root.tag != ROOT_TAG:
            raise SettingsStorageError(self.path, f"expected <{ROOT_TAG}> root element, found <{root.tag}>")
        return root

    def write(self, element: Element) -> None:
        """Replace the stored document with ``element``.

        The document is written to a sibling temporary file first so readers
        never observe a partially written file.

        Raises:
            SettingsStorageError: If the directory or file cannot be written.
        """

        payload = XML_DECLARATION + to_xml_string(element) + "\n"
        temp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_path = Path(handle.name)
                handle.write(payload)
            temp_path.replace(self.path)
        except OSError as exc:
            if temp_path is not None:
                with contextlib.suppress(OSError):
                    temp_path.unlink(missing_ok=True)
            raise SettingsStorageError(self.path, f"cannot write settings document: {exc}") from exc
        LOGGER.debug("wrote settings document to %s", self.path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"


__all__ = ["XML_DECLARATION", "XmlFileStorage"]
