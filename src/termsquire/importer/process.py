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

"""Dictionary import pipeline.

file -> parse -> debug JSON -> per-entry grouped writes.

The whole file is parsed before anything is written, so a parse error
leaves the store untouched. Writes are not wrapped in one transaction:
if an entry fails, entries written before it stay in the store and the
import stops at the failing entry.
"""

from __future__ import annotations

import logging
from pathlib import Path

from termsquire.core.errors import TermSquireError
from termsquire.core.models import Dictionary, ImportReport
from termsquire.importer.grouping import ConceptGrouper
from termsquire.importer.parser import DictionaryParser

logger = logging.getLogger(__name__)


class DictionaryImporter:
    """Parse a dictionary file and write its entries through a grouper.

    Args:
        grouper: Grouping engine bound to the target store
        debug_json_path: Where to write the parsed dictionary as JSON (None to skip)
    """

    def __init__(self, grouper: ConceptGrouper, debug_json_path: str | Path | None = None):
        self.grouper = grouper
        self.debug_json_path = Path(debug_json_path) if debug_json_path else None

    def parse(self, file_path: str | Path) -> Dictionary:
        """Parse the file and write the debug artifact.

        Raises:
            ParseError: If the file is malformed
        """
        dictionary = DictionaryParser.parse_file(file_path)
        if self.debug_json_path is not None:
            try:
                dictionary.serialize_to_json(self.debug_json_path)
                logger.debug(f"Parsed dictionary written to {self.debug_json_path}")
            except OSError as e:
                logger.warning(f"Could not write {self.debug_json_path}: {e}")
        return dictionary

    def write(self, dictionary: Dictionary, report: ImportReport) -> ImportReport:
        """Write every entry, updating ``report`` as rows land.

        Raises:
            GroupingError: If an entry cannot be grouped
            StoreError: If a write fails
        """
        for entry in dictionary.entries:
            try:
                term_set_id, term_ids = self.grouper.write_entry(entry)
            except TermSquireError as e:
                logger.error(
                    f"Error processing term set {entry.id}: {e.message} "
                    f"({report.rows_written} rows already written)"
                )
                raise
            report.rows_written += len(term_ids)
            report.term_set_ids.append(term_set_id)
        return report

    def run(self, file_path: str | Path) -> ImportReport:
        """Import a dictionary file.

        Returns:
            Report with entry and row counts

        Raises:
            ParseError: If the file is malformed (nothing written)
            GroupingError: If an entry cannot be grouped (earlier entries kept)
            StoreError: If a write fails (earlier entries kept)
        """
        logger.info(f"Importing dictionary from file: {file_path}")
        dictionary = self.parse(file_path)
        report = ImportReport(source=str(file_path), entry_count=len(dictionary))
        self.write(dictionary, report)
        logger.info(
            f"Dictionary import completed: {report.entry_count} entries, "
            f"{report.rows_written} rows"
        )
        return report
