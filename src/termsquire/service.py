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

"""Term service: the operations offered to presentation layers.

Wraps the store, distinct-value index and cache so every successful
mutation is followed by a distinct-value rebuild and a cache refresh.
Neither follow-up can fail the mutation: the store write is the source
of truth, and follow-up failures are logged and reflected in
:attr:`TermCache.is_stale`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from termsquire.core.errors import CacheRefreshError, ParseError, StoreError, TermNotFoundError
from termsquire.core.models import ImportReport, StoredTerm, TermLanguageSet
from termsquire.importer.grouping import ConceptGrouper
from termsquire.importer.process import DictionaryImporter
from termsquire.memory.cache import WILDCARD_KEY, TermCache, search_key
from termsquire.memory.termbase import TermStore
from termsquire.memory.unique_values import UniqueValueIndex
from termsquire.utils.config import Settings
from termsquire.utils.timestamps import current_epoch

logger = logging.getLogger(__name__)


class TermService:
    """Collaborator-facing term operations.

    Example:
        >>> service = TermService(TermStore("term-squire.sqlite"))
        >>> service.initialize()
        >>> report = service.import_dictionary("export.tbx")
        >>> service.search_terms("house", "en")
        [StoredTerm(term_id=1, term_set_id=1, ...)]
    """

    def __init__(
        self,
        store: TermStore,
        cache: TermCache | None = None,
        clock: Callable[[], int] = current_epoch,
        debug_json_path: str | Path | None = None,
    ):
        """Initialize service.

        Args:
            store: Term store
            cache: Shared cache handle (a new empty cache if None)
            clock: Returns the current time in epoch seconds
            debug_json_path: Where imports write the parsed dictionary JSON
        """
        self.store = store
        self.cache = cache if cache is not None else TermCache()
        self.unique_values_index = UniqueValueIndex(store)
        self.clock = clock
        self.debug_json_path = debug_json_path
        # Single writer for dictionary imports
        self._import_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, cache: TermCache | None = None) -> TermService:
        """Build a service for the configured data directory.

        Raises:
            ValueError: If the data directory is missing
        """
        settings.validate_data_dir()
        store = TermStore(
            settings.db_path, table_name=settings.table_name, busy_timeout=settings.busy_timeout
        )
        return cls(store, cache=cache, debug_json_path=settings.debug_json_path)

    def initialize(self) -> None:
        """Create tables if missing and warm the cache.

        Raises:
            StoreError: If the schema cannot be created
        """
        logger.debug(f"Initializing database for {self.store.table_name}")
        self.store.create_terms_table()
        self.unique_values_index.create_tables()
        self._refresh_cache()

    def _rebuild_unique_values(self) -> bool:
        try:
            self.unique_values_index.rebuild()
        except StoreError as e:
            logger.error(f"Error inserting unique values: {e}")
            return False
        return True

    def _refresh_cache(self) -> bool:
        try:
            self.cache.refresh(self.store.get_all_terms)
        except CacheRefreshError as e:
            logger.warning(f"Term cache is stale: {e}")
            return False
        return True

    def _after_mutation(self) -> tuple[bool, bool]:
        return self._rebuild_unique_values(), self._refresh_cache()

    def import_dictionary(self, file_path: str | Path) -> ImportReport:
        """Import a dictionary file.

        Imports are serialized. Entries written before a failing entry stay
        in the store; the cache and distinct values are refreshed either way.

        Returns:
            Import report

        Raises:
            ParseError: If the file is malformed (nothing written)
            GroupingError: If an entry cannot be grouped
            StoreError: If a write fails
        """
        with self._import_lock:
            self.store.create_terms_table()
            self.unique_values_index.create_tables()
            importer = DictionaryImporter(ConceptGrouper(self.store), self.debug_json_path)
            try:
                report = importer.run(file_path)
            except ParseError:
                raise
            except Exception:
                self._after_mutation()
                raise
            report.unique_values_rebuilt, report.cache_refreshed = self._after_mutation()
            return report

    def _require(self, term_id: int) -> StoredTerm:
        term = self.store.get_term_by_id(term_id)
        if term is None:
            raise TermNotFoundError(f"Term {term_id} not found")
        return term

    def _stamped(self, variant: TermLanguageSet) -> TermLanguageSet:
        now = self.clock()
        return variant.model_copy(update={"creation_timestamp": now, "update_timestamp": now})

    def insert_term(self, variant: TermLanguageSet) -> StoredTerm:
        """Insert a variant as a new term set.

        Returns:
            The stored row
        """
        term_id, term_set_id = self.store.add_term(self._stamped(variant))
        logger.info(f"Inserted term {term_id} in new term set {term_set_id}")
        self._after_mutation()
        return self._require(term_id)

    def add_term_to_term_set(self, term_set_id: int, variant: TermLanguageSet) -> StoredTerm:
        """Insert a variant into an existing term set.

        Raises:
            TermNotFoundError: If the term set has no rows
        """
        if self.store.check_termset_count(term_set_id) == 0:
            raise TermNotFoundError(f"Term set {term_set_id} not found")
        term_id = self.store.add_term_to_term_set(term_set_id, self._stamped(variant))
        logger.info(f"Added term {term_id} to term set {term_set_id}")
        self._after_mutation()
        return self._require(term_id)

    def update_term(
        self, term_id: int, update: TermLanguageSet, touch: bool = True
    ) -> StoredTerm:
        """Apply a partial update.

        Args:
            term_id: Row to update
            update: Fields to overwrite; None fields keep their stored value
            touch: Stamp the update timestamp unless ``update`` carries one

        Raises:
            TermNotFoundError: If the row does not exist
        """
        if touch and update.update_timestamp is None:
            update = update.model_copy(update={"update_timestamp": self.clock()})
        self.store.update_term(term_id, update)
        logger.info(f"Updated term {term_id}")
        self._after_mutation()
        return self._require(term_id)

    def delete_term(self, term_id: int) -> None:
        """Delete one row.

        Raises:
            TermNotFoundError: If the row does not exist
        """
        self.store.delete_term(term_id)
        logger.info(f"Deleted term {term_id}")
        self._after_mutation()

    def delete_termset(self, term_set_id: int) -> int:
        """Delete every row of a term set and return how many were removed."""
        deleted = self.store.delete_termset(term_set_id)
        logger.info(f"Deleted term set {term_set_id} ({deleted} rows)")
        self._after_mutation()
        return deleted

    def get_term_by_id(self, term_id: int) -> StoredTerm | None:
        return self.store.get_term_by_id(term_id)

    def get_all_terms(self) -> list[StoredTerm]:
        """Return every stored row, from the cache when it is loaded."""
        cached = self.cache.snapshot()
        if cached is not None:
            return cached
        generation = self.cache.generation
        terms = self.store.get_all_terms()
        self.cache.install(terms, generation)
        return terms

    def search_terms(self, term: str, language: str) -> list[StoredTerm]:
        """Substring search on term with an exact (or empty = any) language.

        Cached results are served by key. A miss with an empty term or empty
        language is answered by filtering the wildcard entry in memory;
        anything else goes to the store and is cached under its key.
        """
        term, language = term.strip(), language.strip()
        key = search_key(term, language)
        if key != WILDCARD_KEY:
            cached = self.cache.get_query(key)
            if cached is not None:
                logger.debug(f"Cache hit for search term: {term!r} and language: {language!r}")
                return cached

            if not term or not language:
                filtered = self.cache.filter_snapshot(term, language)
                if filtered is not None:
                    logger.debug(f"Search {key!r} answered from the wildcard entry")
                    return filtered

        logger.debug(f"Cache miss for search term: {term!r} and language: {language!r}")
        generation = self.cache.generation
        terms = self.store.search_terms(term, language)
        if key != WILDCARD_KEY:
            self.cache.put_query(key, terms, generation)
        return terms

    def search_terms_fuzzy(self, query: str, language: str = "") -> list[StoredTerm]:
        return self.store.search_terms_fuzzy(query.strip(), language.strip())

    def search_terms_by_term_set_id(self, term_set_id: int) -> list[StoredTerm]:
        return self.store.search_terms_by_term_set_id(term_set_id)

    def unique_values(self, column: str) -> list[str]:
        """Distinct values of a filterable column (see ``UniqueValueIndex.columns``)."""
        return self.unique_values_index.values(column)

    def statistics(self) -> dict[str, Any]:
        stats = self.store.get_statistics()
        stats["max_term_id"] = self.store.get_max_term_id()
        stats["max_term_set_id"] = self.store.get_max_term_set_id()
        stats["cache_stale"] = self.cache.is_stale
        return stats
