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

"""Data models for dictionary import and stored terms.

A dictionary file is parsed into a :class:`Dictionary` of
:class:`DictionaryEntry` objects (concepts), each holding one
:class:`TermLanguageSet` per language. Rows written to the store come
back as :class:`StoredTerm`.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field

from termsquire.utils.timestamps import format_timestamp

# Column order used by the store for the variant fields
VARIANT_FIELDS: tuple[str, ...] = (
    "term",
    "language",
    "term_type",
    "creator_id",
    "creation_timestamp",
    "updater_id",
    "update_timestamp",
    "subject",
    "source",
    "user",
    "attributes",
    "remark",
    "url",
    "context",
    "definition",
)

TIMESTAMP_FIELDS = frozenset({"creation_timestamp", "update_timestamp"})

# Placeholders shown when a stored field is empty
DISPLAY_DEFAULTS: dict[str, str] = {
    "term": "No Term",
    "language": "No Language",
    "term_type": "No Term Type",
    "creator_id": "No Creator",
    "creation_timestamp": "No Date",
    "updater_id": "No Updater",
    "update_timestamp": "No Date",
    "subject": "No Subject",
    "source": "No Source",
    "user": "No User",
    "attributes": "No Attributes",
    "remark": "No Remark",
    "url": "No URL",
    "context": "No Context",
    "definition": "No Definition",
}


class TermLanguageSet(BaseModel):
    """One language variant of a dictionary entry.

    Every field is optional. When used as an update payload, a None field
    means "leave the stored value unchanged".
    """

    term: str | None = Field(default=None, description="Term text")
    language: str | None = Field(default=None, description="Language code")
    term_type: str | None = Field(default=None, description="Term type (e.g. fullForm)")
    creator_id: str | None = Field(default=None, description="Creator id")
    creation_timestamp: int | None = Field(default=None, description="Creation time (epoch s)")
    updater_id: str | None = Field(default=None, description="Last updater id")
    update_timestamp: int | None = Field(default=None, description="Update time (epoch s)")
    subject: str | None = Field(default=None, description="Subject area")
    source: str | None = Field(default=None, description="Source of the term")
    user: str | None = Field(default=None, description="Free user field")
    attributes: str | None = Field(default=None, description="Free-form attributes")
    remark: str | None = Field(default=None, description="Remark")
    url: str | None = Field(default=None, description="Hyperlink")
    context: str | None = Field(default=None, description="Usage context")
    definition: str | None = Field(default=None, description="Definition")

    @property
    def has_term(self) -> bool:
        """Whether the variant carries a non-empty term."""
        return bool(self.term)

    def identity(self) -> tuple[str | None, str | None]:
        """Return the (term, language) pair identifying this variant."""
        return (self.term, self.language)

    def as_row(self) -> tuple[str | int | None, ...]:
        """Return field values in store column order."""
        return tuple(getattr(self, name) for name in VARIANT_FIELDS)

    def supplied_fields(self) -> dict[str, str | int]:
        """Return only the fields that carry a value."""
        return {
            name: value for name in VARIANT_FIELDS if (value := getattr(self, name)) is not None
        }


class DictionaryEntry(BaseModel):
    """A concept: one source-file id and its language variants."""

    id: int = Field(..., description="Entry id from the source file")
    language_sets: list[TermLanguageSet] = Field(default_factory=list)


class StoredTerm(BaseModel):
    """A persisted variant with its row id and shared term set id."""

    term_id: int = Field(..., description="Unique row id")
    term_set_id: int = Field(..., description="Id shared by all variants of one concept")
    term_language_set: TermLanguageSet = Field(default_factory=TermLanguageSet)

    @property
    def term(self) -> str | None:
        return self.term_language_set.term

    @property
    def language(self) -> str | None:
        return self.term_language_set.language

    def display(self, field: str) -> str:
        """Return a field formatted for display, or its placeholder if empty.

        Args:
            field: One of the variant field names

        Raises:
            KeyError: If the field name is unknown
        """
        default = DISPLAY_DEFAULTS[field]
        value = getattr(self.term_language_set, field)
        if value is None:
            return default
        if field in TIMESTAMP_FIELDS:
            return format_timestamp(value)
        return str(value)


class Dictionary(BaseModel):
    """Ordered list of dictionary entries parsed from one file."""

    entries: list[DictionaryEntry] = Field(default_factory=list)

    def add_entry(self, entry: DictionaryEntry) -> None:
        self.entries.append(entry)

    def __len__(self) -> int:
        return len(self.entries)

    def variant_count(self) -> int:
        return sum(len(entry.language_sets) for entry in self.entries)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    def serialize_to_json(self, file_path: str | Path) -> None:
        """Write the dictionary as pretty JSON.

        Raises:
            OSError: If the file cannot be written
        """
        Path(file_path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def from_json(cls, file_path: str | Path) -> Dictionary:
        data = json.loads(Path(file_path).read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def __str__(self) -> str:
        lines: list[str] = []
        labels = (
            ("Language", "language"),
            ("Term", "term"),
            ("Term Type", "term_type"),
            ("Creator ID", "creator_id"),
            ("Creation Date", "creation_timestamp"),
            ("Updater ID", "updater_id"),
            ("Update Date", "update_timestamp"),
            ("Subject", "subject"),
            ("Source", "source"),
            ("User", "user"),
            ("Attributes", "attributes"),
            ("Remark", "remark"),
            ("URL", "url"),
            ("Context", "context"),
            ("Definition", "definition"),
        )
        for entry in self.entries:
            lines.append(f"ID: {entry.id}")
            lines.append("Language Sets:")
            for lang_set in entry.language_sets:
                for label, name in labels:
                    value = getattr(lang_set, name)
                    if name in TIMESTAMP_FIELDS:
                        text = format_timestamp(value)
                    else:
                        text = value or ""
                    lines.append(f"\t{label}: {text}")
                lines.append("")
            lines.append("")
        return "\n".join(lines)


class ImportReport(BaseModel):
    """Outcome of a dictionary import."""

    source: str = Field(..., description="Imported file path")
    entry_count: int = Field(default=0, description="Entries parsed from the file")
    rows_written: int = Field(default=0, description="Term rows inserted")
    term_set_ids: list[int] = Field(default_factory=list, description="Term set ids assigned")
    unique_values_rebuilt: bool = Field(default=False)
    cache_refreshed: bool = Field(default=False)
