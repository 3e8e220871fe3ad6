# Copyright 2025 KTTC AI (https://github.com/kttc-ai)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Parser for TBX-style terminology exchange files.

Expected document shape::

    <martif>
      <text>
        <body>
          <termEntry id="1">
            <langSet xml:lang="en">
              <ntig>
                <termGrp>
                  <term>house</term>
                  <termNote type="termType">fullForm</termNote>
                  <date type="origination">20240131T154500Z</date>
                  <descrip type="definition">A building for living in</descrip>
                </termGrp>
              </ntig>
            </langSet>
          </termEntry>
        </body>
      </text>
    </martif>

Element names are matched on their local name, so namespaced exports
parse the same way as plain ones.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import defusedxml.ElementTree as ET  # noqa: N817
from defusedxml import DefusedXmlException

from termsquire.core.errors import ParseError
from termsquire.core.models import Dictionary, DictionaryEntry, TermLanguageSet
from termsquire.utils.timestamps import parse_timestamp

logger = logging.getLogger(__name__)

XML_LANG_ATTR = "{http://www.w3.org/XML/1998/namespace}lang"

# termNote type -> variant field
NOTE_TYPE_FIELDS: dict[str, str] = {
    "termType": "term_type",
    "TS_CreateId": "creator_id",
    "TS_UpdateId": "updater_id",
    "TS_Subject": "subject",
    "TS_Source": "source",
    "TS_User1": "user",
    "TS_Attributes": "attributes",
    "TS_Remark": "remark",
    "TS_Hyperlink": "url",
}

# date type -> variant timestamp field
DATE_TYPE_FIELDS: dict[str, str] = {
    "origination": "creation_timestamp",
    "modification": "update_timestamp",
}

# descrip type -> variant field
DESCRIP_TYPE_FIELDS: dict[str, str] = {
    "context": "context",
    "definition": "definition",
}


def _local_name(tag: Any) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _find(parent: Any, name: str) -> Any | None:
    for child in parent:
        if _local_name(child.tag) == name:
            return child
    return None


def _find_all(parent: Any, name: str) -> list[Any]:
    return [child for child in parent if _local_name(child.tag) == name]


def _text(element: Any) -> str | None:
    text = "".join(element.itertext()).strip()
    return text or None


class DictionaryParser:
    """Turn a terminology exchange file into a :class:`Dictionary`.

    Example:
        >>> dictionary = DictionaryParser.parse_file(Path("export.tbx"))
        >>> len(dictionary)
        3
    """

    @staticmethod
    def parse_file(file_path: str | Path) -> Dictionary:
        """Parse a dictionary file from disk.

        Args:
            file_path: Path to the XML file

        Returns:
            Parsed dictionary with entries in document order

        Raises:
            ParseError: If the file cannot be read or has an unexpected structure
        """
        path = Path(file_path)
        if not path.is_file():
            raise ParseError(f"File not found: {path}")

        try:
            tree = ET.parse(str(path))
        except (ET.ParseError, DefusedXmlException) as e:
            raise ParseError(f"Malformed XML in {path}: {e}") from e
        except OSError as e:
            raise ParseError(f"Cannot read {path}: {e}") from e

        dictionary = DictionaryParser.parse_root(tree.getroot())
        logger.info(
            f"Parsed {len(dictionary)} entries ({dictionary.variant_count()} variants) from {path}"
        )
        return dictionary

    @staticmethod
    def parse_string(content: str) -> Dictionary:
        """Parse a dictionary held in memory.

        Raises:
            ParseError: If the content is malformed
        """
        try:
            root = ET.fromstring(content)
        except (ET.ParseError, DefusedXmlException) as e:
            raise ParseError(f"Malformed XML: {e}") from e
        return DictionaryParser.parse_root(root)

    @staticmethod
    def parse_root(root: Any) -> Dictionary:
        """Walk the ``text/body/termEntry`` tree below the document root."""
        text = _find(root, "text")
        if text is None:
            raise ParseError("Missing <text> element")
        body = _find(text, "body")
        if body is None:
            raise ParseError("Missing <body> element")

        dictionary = Dictionary()
        for element in body:
            if _local_name(element.tag) != "termEntry":
                continue
            dictionary.add_entry(DictionaryParser._parse_entry(element))
        return dictionary

    @staticmethod
    def _parse_entry(element: Any) -> DictionaryEntry:
        raw_id = element.get("id")
        if raw_id is None:
            raise ParseError("termEntry without id attribute")
        try:
            entry_id = int(raw_id.strip())
        except ValueError as e:
            raise ParseError(f"termEntry id is not an integer: {raw_id!r}") from e

        lang_sets = _find_all(element, "langSet")
        if not lang_sets:
            raise ParseError("termEntry has no langSet", entry_id=entry_id)

        entry = DictionaryEntry(id=entry_id)
        for lang_set in lang_sets:
            entry.language_sets.append(DictionaryParser._parse_lang_set(lang_set, entry_id))
        return entry

    @staticmethod
    def _parse_lang_set(element: Any, entry_id: int) -> TermLanguageSet:
        language = element.get(XML_LANG_ATTR) or element.get("lang")
        if not language:
            raise ParseError("langSet without language attribute", entry_id=entry_id)

        ntig = _find(element, "ntig")
        if ntig is None:
            raise ParseError(f"langSet '{language}' has no <ntig>", entry_id=entry_id)
        term_group = _find(ntig, "termGrp")
        if term_group is None:
            raise ParseError(f"langSet '{language}' has no <termGrp>", entry_id=entry_id)

        values: dict[str, Any] = {"language": language.strip()}

        term_element = _find(term_group, "term")
        if term_element is not None:
            values["term"] = _text(term_element)

        for note in _find_all(term_group, "termNote"):
            note_type = note.get("type")
            field = NOTE_TYPE_FIELDS.get(note_type) if note_type else None
            if field is None:
                logger.debug(f"Entry {entry_id}: ignoring termNote type {note_type!r}")
                continue
            values[field] = _text(note)

        for date in _find_all(term_group, "date"):
            date_type = date.get("type")
            field = DATE_TYPE_FIELDS.get(date_type) if date_type else None
            if field is None:
                logger.debug(f"Entry {entry_id}: ignoring date type {date_type!r}")
                continue
            values[field] = parse_timestamp(_text(date))

        for descrip in _find_all(term_group, "descrip"):
            descrip_type = descrip.get("type")
            field = DESCRIP_TYPE_FIELDS.get(descrip_type) if descrip_type else None
            if field is None:
                logger.debug(f"Entry {entry_id}: ignoring descrip type {descrip_type!r}")
                continue
            values[field] = _text(descrip)

        return TermLanguageSet(**values)
