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

"""Distinct-value tables used to populate filter lists.

Each table holds the distinct non-null values of one term column.
They are derived data: :meth:`UniqueValueIndex.rebuild` clears and
repopulates all of them from the term table in a single transaction.
"""

from __future__ import annotations

import logging

from termsquire.memory.termbase import TermStore

logger = logging.getLogger(__name__)

# unique-value table -> source column in the term table
UNIQUE_VALUE_TABLES: dict[str, str] = {
    "unique_languages": "language",
    "unique_term_types": "term_type",
    "unique_creator_ids": "creator_id",
    "unique_updater_ids": "updater_id",
    "unique_subjects": "subject",
    "unique_sources": "source",
    "unique_users": "user",
    "unique_attributes": "attributes",
}

_TABLE_BY_COLUMN = {column: table for table, column in UNIQUE_VALUE_TABLES.items()}


class UniqueValueIndex:
    """Maintains the eight distinct-value tables for a :class:`TermStore`."""

    def __init__(self, store: TermStore):
        self.store = store

    def create_tables(self) -> None:
        """Create the distinct-value tables if missing."""
        with self.store.transaction() as conn:
            for table, column in UNIQUE_VALUE_TABLES.items():
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        {column} TEXT UNIQUE
                    )
                    """
                )

    def rebuild(self) -> None:
        """Clear and repopulate every distinct-value table.

        Raises:
            StoreError: If the rebuild fails; no table is left half-built
        """
        source = self.store.table_name
        with self.store.transaction() as conn:
            for table, column in UNIQUE_VALUE_TABLES.items():
                conn.execute(f"DELETE FROM {table}")
                conn.execute(
                    f"INSERT OR IGNORE INTO {table} ({column}) "
                    f"SELECT DISTINCT {column} FROM {source} "
                    f"WHERE {column} IS NOT NULL ORDER BY {column}"
                )
        logger.debug("Unique value tables rebuilt")

    def values(self, column: str) -> list[str]:
        """Return the distinct values recorded for a term column.

        Args:
            column: Term column name, e.g. ``language`` or ``subject``

        Raises:
            KeyError: If the column has no distinct-value table
        """
        table = _TABLE_BY_COLUMN[column]
        with self.store.connect() as conn:
            cursor = conn.execute(f"SELECT {column} FROM {table} ORDER BY {column}")
            return [row[column] for row in cursor]

    @staticmethod
    def columns() -> list[str]:
        return list(_TABLE_BY_COLUMN)
