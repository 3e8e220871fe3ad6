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

"""SQLite storage for dictionary term rows.

Owns the ``terms`` table (row id, term set id and the fifteen variant
fields) and exposes insert, update, delete, search and id lookups.
A connection is opened per operation; multi-statement work runs inside
one transaction so readers never see a half-applied change.
"""

from __future__ import annotations

import logging
import re
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from termsquire.core.errors import StoreError, TermNotFoundError
from termsquire.core.models import VARIANT_FIELDS, StoredTerm, TermLanguageSet

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_COLUMN_TYPES: dict[str, str] = {
    "creation_timestamp": "INTEGER",
    "update_timestamp": "INTEGER",
}

# Columns searched by the broad (fuzzy) search
FUZZY_SEARCH_COLUMNS: tuple[str, ...] = ("term", "subject", "remark", "context", "definition")

SELECT_COLUMNS = ", ".join(("term_id", "term_set_id", *VARIANT_FIELDS))


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def row_to_term(row: sqlite3.Row) -> StoredTerm:
    """Build a StoredTerm from a ``SELECT_COLUMNS`` row."""
    return StoredTerm(
        term_id=row["term_id"],
        term_set_id=row["term_set_id"],
        term_language_set=TermLanguageSet(**{name: row[name] for name in VARIANT_FIELDS}),
    )


class TermStore:
    """Storage gateway for term rows.

    Example:
        >>> store = TermStore("term-squire.sqlite")
        >>> store.create_terms_table()
        >>> term_id, term_set_id = store.add_term(TermLanguageSet(term="house", language="en"))
        >>> store.get_term_set_id("house", "en") == term_set_id
        True
    """

    def __init__(
        self,
        db_path: str | Path,
        table_name: str = "terms",
        busy_timeout: float = 5.0,
    ):
        """Initialize store.

        Args:
            db_path: Path to SQLite database file
            table_name: Name of the term table
            busy_timeout: Seconds to wait for a locked database

        Raises:
            ValueError: If table_name is not a plain SQL identifier
        """
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Invalid table name: {table_name!r}")
        self.db_path = Path(db_path)
        self.table_name = table_name
        self.busy_timeout = busy_timeout
        # Serializes term set id allocation within this process
        self._allocation_lock = threading.Lock()

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation and close it afterwards.

        Raises:
            StoreError: If the database cannot be opened or a statement fails
        """
        try:
            conn = sqlite3.connect(
                str(self.db_path), timeout=self.busy_timeout, isolation_level=None
            )
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    @contextmanager
    def transaction(self, immediate: bool = False) -> Iterator[sqlite3.Connection]:
        """Run the block in one transaction, rolling back on any error."""
        with self.connect() as conn:
            conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
            try:
                yield conn
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def create_terms_table(self) -> None:
        """Create the term table and its lookup indexes if missing."""
        columns = ",\n".join(
            f"    {name} {_COLUMN_TYPES.get(name, 'TEXT')}" for name in VARIANT_FIELDS
        )
        with self.transaction() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.table_name} (
                    term_id INTEGER PRIMARY KEY,
                    term_set_id INTEGER,
                {columns}
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{self.table_name}_term_set "
                f"ON {self.table_name}(term_set_id)"
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{self.table_name}_term_lang "
                f"ON {self.table_name}(term, language)"
            )
        logger.debug(f"Term table ready: {self.table_name} in {self.db_path}")

    def table_exists(self, name: str | None = None) -> bool:
        with self.connect() as conn:
            row = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name = ?",
                (name or self.table_name,),
            ).fetchone()
        return row is not None

    def _insert(self, conn: sqlite3.Connection, term_set_id: int, variant: TermLanguageSet) -> int:
        placeholders = ", ".join("?" for _ in range(len(VARIANT_FIELDS) + 1))
        cursor = conn.execute(
            f"INSERT INTO {self.table_name} (term_set_id, {', '.join(VARIANT_FIELDS)}) "
            f"VALUES ({placeholders})",
            (term_set_id, *variant.as_row()),
        )
        if cursor.lastrowid is None:
            raise StoreError("Insert did not return a row id")
        return int(cursor.lastrowid)

    def add_term(self, variant: TermLanguageSet) -> tuple[int, int]:
        """Insert a variant as the first member of a new term set.

        The new term set id is ``MAX(term_set_id) + 1``, read and used inside
        one ``BEGIN IMMEDIATE`` transaction so concurrent writers cannot be
        handed the same id.

        Returns:
            Tuple of (term_id, term_set_id) produced by the insert
        """
        logger.debug(f"Add term: {variant.identity()}")
        with self._allocation_lock, self.transaction(immediate=True) as conn:
            row = conn.execute(
                f"SELECT COALESCE(MAX(term_set_id), 0) AS max_id FROM {self.table_name}"
            ).fetchone()
            term_set_id = int(row["max_id"]) + 1
            term_id = self._insert(conn, term_set_id, variant)
        return term_id, term_set_id

    def add_term_to_term_set(self, term_set_id: int, variant: TermLanguageSet) -> int:
        """Insert a variant into an existing term set.

        Returns:
            The new term_id
        """
        logger.debug(f"Add term {variant.identity()} to term set {term_set_id}")
        with self.transaction() as conn:
            return self._insert(conn, term_set_id, variant)

    def update_term(self, term_id: int, update: TermLanguageSet) -> None:
        """Apply a partial update to one row.

        Fields set on ``update`` overwrite the stored value; None fields keep
        the stored value.

        Raises:
            TermNotFoundError: If no row has this term_id
        """
        logger.debug(f"Update term {term_id}: {sorted(update.supplied_fields())}")
        assignments = ",\n".join(f"{name} = COALESCE(?, {name})" for name in VARIANT_FIELDS)
        with self.transaction() as conn:
            cursor = conn.execute(
                f"UPDATE {self.table_name} SET {assignments} WHERE term_id = ?",
                (*update.as_row(), term_id),
            )
            if cursor.rowcount == 0:
                raise TermNotFoundError(f"Term {term_id} not found")

    def delete_term(self, term_id: int) -> None:
        """Delete one row.

        Raises:
            TermNotFoundError: If no row has this term_id
        """
        logger.debug(f"Delete term: {term_id}")
        with self.transaction() as conn:
            cursor = conn.execute(
                f"DELETE FROM {self.table_name} WHERE term_id = ?", (term_id,)
            )
            if cursor.rowcount == 0:
                raise TermNotFoundError(f"Term {term_id} not found")

    def delete_termset(self, term_set_id: int) -> int:
        """Delete every row of a term set.

        Returns:
            Number of rows deleted

        Raises:
            TermNotFoundError: If the term set has no rows
        """
        logger.debug(f"Delete term set: {term_set_id}")
        with self.transaction() as conn:
            cursor = conn.execute(
                f"DELETE FROM {self.table_name} WHERE term_set_id = ?", (term_set_id,)
            )
            if cursor.rowcount == 0:
                raise TermNotFoundError(f"Term set {term_set_id} not found")
            return int(cursor.rowcount)

    def _select(self, where: str = "", params: tuple[Any, ...] = ()) -> list[StoredTerm]:
        sql = f"SELECT {SELECT_COLUMNS} FROM {self.table_name}"
        if where:
            sql += f" WHERE {where}"
        sql += " ORDER BY term_id"
        with self.connect() as conn:
            return [row_to_term(row) for row in conn.execute(sql, params)]

    def get_all_terms(self) -> list[StoredTerm]:
        return self._select()

    def get_term_by_id(self, term_id: int) -> StoredTerm | None:
        rows = self._select("term_id = ?", (term_id,))
        return rows[0] if rows else None

    def search_terms(self, term: str, language: str) -> list[StoredTerm]:
        """Find rows whose term contains ``term`` in ``language``.

        Matching is a case-sensitive substring test; a missing term counts as
        an empty string. An empty ``language`` matches every language.
        """
        return self._select(
            "(? = '' OR instr(COALESCE(term, ''), ?) > 0) AND (? = '' OR language = ?)",
            (term, term, language, language),
        )

    def search_terms_fuzzy(self, query: str, language: str = "") -> list[StoredTerm]:
        """Case-insensitive substring search across the descriptive columns.

        ``language`` is matched as a substring too; empty matches all.
        """
        pattern = f"%{_escape_like(query)}%"
        any_column = " OR ".join(f"{name} LIKE ? ESCAPE '\\'" for name in FUZZY_SEARCH_COLUMNS)
        return self._select(
            f"({any_column}) AND COALESCE(language, '') LIKE ? ESCAPE '\\'",
            (*([pattern] * len(FUZZY_SEARCH_COLUMNS)), f"%{_escape_like(language)}%"),
        )

    def search_terms_by_term_set_id(self, term_set_id: int) -> list[StoredTerm]:
        return self._select("term_set_id = ?", (term_set_id,))

    def get_term_set_id(self, term: str, language: str) -> int | None:
        """Look up the term set id of the first row with this (term, language).

        Not unique when the same pair occurs in several term sets; prefer the
        ids returned by :meth:`add_term`.
        """
        with self.connect() as conn:
            row = conn.execute(
                f"SELECT term_set_id FROM {self.table_name} "
                "WHERE term = ? AND language = ? ORDER BY term_id LIMIT 1",
                (term, language),
            ).fetchone()
        return int(row["term_set_id"]) if row else None

    def get_term_set_id_by_term_id(self, term_id: int) -> int | None:
        with self.connect() as conn:
            row = conn.execute(
                f"SELECT term_set_id FROM {self.table_name} WHERE term_id = ? LIMIT 1",
                (term_id,),
            ).fetchone()
        return int(row["term_set_id"]) if row else None

    def check_termset_count(self, term_set_id: int) -> int:
        """Return how many rows belong to a term set."""
        with self.connect() as conn:
            row = conn.execute(
                f"SELECT COUNT(*) AS count FROM {self.table_name} WHERE term_set_id = ?",
                (term_set_id,),
            ).fetchone()
        return int(row["count"])

    def _max(self, column: str) -> int:
        with self.connect() as conn:
            row = conn.execute(
                f"SELECT COALESCE(MAX({column}), 0) AS max_id FROM {self.table_name}"
            ).fetchone()
        return int(row["max_id"])

    def get_max_term_id(self) -> int:
        return self._max("term_id")

    def get_max_term_set_id(self) -> int:
        return self._max("term_set_id")

    def get_statistics(self) -> dict[str, Any]:
        """Get term store statistics.

        Returns:
            Dictionary with row count, term set count and rows per language
        """
        stats: dict[str, Any] = {}
        with self.connect() as conn:
            row = conn.execute(
                f"SELECT COUNT(*) AS count, COUNT(DISTINCT term_set_id) AS sets "
                f"FROM {self.table_name}"
            ).fetchone()
            stats["total_terms"] = row["count"]
            stats["total_term_sets"] = row["sets"]

            cursor = conn.execute(
                f"SELECT language, COUNT(*) AS count FROM {self.table_name} "
                "WHERE language IS NOT NULL GROUP BY language ORDER BY language"
            )
            stats["languages"] = {r["language"]: r["count"] for r in cursor}
        return stats
