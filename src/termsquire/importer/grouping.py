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

"""Write dictionary entries to the store as linked term sets.

All variants of one entry end up sharing one term set id. The id is
allocated when the primary variant is inserted and then reused for the
entry's other variants.

Primary selection is the first variant, in document order, whose term
is non-empty. There is no language preference.
"""

from __future__ import annotations

import logging

from termsquire.core.errors import GroupingError, StoreError
from termsquire.core.models import DictionaryEntry, TermLanguageSet
from termsquire.memory.termbase import TermStore

logger = logging.getLogger(__name__)


def select_primary(variants: list[TermLanguageSet]) -> int | None:
    """Return the index of the first variant with a term, or None."""
    for index, variant in enumerate(variants):
        if variant.has_term:
            return index
    return None


class ConceptGrouper:
    """Insert dictionary entries into a :class:`TermStore`.

    Policies by number of variants:

    - one: insert it as a new term set
    - two: insert the primary as a new term set, then the other variant
      into that set (even if it has no term)
    - three or more: insert the primary as a new term set, then every other
      variant that has a term and differs from the primary by (term, language)
    """

    def __init__(self, store: TermStore):
        self.store = store

    def write_entry(self, entry: DictionaryEntry) -> tuple[int, list[int]]:
        """Write one entry.

        Args:
            entry: Parsed dictionary entry

        Returns:
            Tuple of (term_set_id, term_ids of the inserted rows, primary first)

        Raises:
            GroupingError: If the entry has no variants, or several variants none of
                which carries a term (nothing is written)
            StoreError: If an insert fails (rows already inserted stay)
        """
        variants = entry.language_sets
        logger.info(f"Processing term set: {entry.id} ({len(variants)} variants)")

        try:
            if not variants:
                raise GroupingError("Entry has no language sets", entry_id=entry.id)
            if len(variants) == 1:
                term_id, term_set_id = self.store.add_term(variants[0])
                logger.debug(f"Inserted single term {term_id} in term set {term_set_id}")
                return term_set_id, [term_id]
            return self._write_group(entry.id, variants)
        except StoreError as e:
            if e.entry_id is None:
                e.entry_id = entry.id
            raise

    def _write_group(
        self, entry_id: int, variants: list[TermLanguageSet]
    ) -> tuple[int, list[int]]:
        primary_index = select_primary(variants)
        if primary_index is None:
            raise GroupingError(
                f"None of the {len(variants)} language sets has a term", entry_id=entry_id
            )
        primary = variants[primary_index]

        primary_id, term_set_id = self.store.add_term(primary)
        term_ids = [primary_id]
        logger.debug(f"Inserted primary {primary.identity()} as term set {term_set_id}")

        for index, variant in enumerate(variants):
            if index == primary_index:
                continue
            if len(variants) > 2:
                if not variant.has_term:
                    logger.debug(f"Entry {entry_id}: skipping language set without term")
                    continue
                if variant.identity() == primary.identity():
                    logger.debug(f"Entry {entry_id}: skipping duplicate of primary")
                    continue
            term_ids.append(self.store.add_term_to_term_set(term_set_id, variant))

        logger.debug(f"Entry {entry_id}: wrote {len(term_ids)} rows in term set {term_set_id}")
        return term_set_id, term_ids
