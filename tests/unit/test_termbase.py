"""Unit tests for the SQLite term store.

Tests storage operations against a temporary database.
"""

import sqlite3
from pathlib import Path

import pytest

from termsquire.core.errors import StoreError, TermNotFoundError
from termsquire.core.models import TermLanguageSet
from termsquire.memory.termbase import TermStore


@pytest.mark.unit
class TestTermStoreSchema:
    """Test table creation and configuration."""

    def test_create_tables(self, store: TermStore) -> None:
        assert store.table_exists() is True

    def test_create_tables_is_idempotent(self, store: TermStore) -> None:
        store.create_terms_table()

        assert store.get_all_terms() == []

    def test_custom_table_name(self, tmp_path: Path) -> None:
        custom = TermStore(tmp_path / "custom.sqlite", table_name="glossary_terms")
        custom.create_terms_table()

        assert custom.table_exists("glossary_terms") is True

    def test_invalid_table_name(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Invalid table name"):
            TermStore(tmp_path / "x.sqlite", table_name="terms; DROP TABLE x")

    def test_unopenable_database(self, tmp_path: Path) -> None:
        broken = TermStore(tmp_path / "missing-dir" / "db.sqlite")

        with pytest.raises(StoreError):
            broken.create_terms_table()


@pytest.mark.unit
class TestTermStoreWrites:
    """Test inserts, updates and deletes."""

    def test_insert_and_retrieve(self, store: TermStore, english_term: TermLanguageSet) -> None:
        # Act
        term_id, term_set_id = store.add_term(english_term)

        # Assert
        stored = store.get_term_by_id(term_id)
        assert stored is not None
        assert stored.term_set_id == term_set_id
        assert stored.term_language_set == english_term

    def test_add_term_allocates_new_term_sets(
        self, store: TermStore, english_term: TermLanguageSet, dutch_term: TermLanguageSet
    ) -> None:
        _, first_set = store.add_term(english_term)
        _, second_set = store.add_term(dutch_term)

        assert (first_set, second_set) == (1, 2)
        assert store.get_max_term_set_id() == 2
        assert store.get_max_term_id() == 2

    def test_add_term_to_term_set(
        self, store: TermStore, english_term: TermLanguageSet, dutch_term: TermLanguageSet
    ) -> None:
        _, term_set_id = store.add_term(english_term)

        term_id = store.add_term_to_term_set(term_set_id, dutch_term)

        assert store.get_term_set_id_by_term_id(term_id) == term_set_id
        assert store.check_termset_count(term_set_id) == 2
        # Adding to an existing set does not allocate a new id
        assert store.get_max_term_set_id() == term_set_id

    def test_update_is_partial(self, store: TermStore, english_term: TermLanguageSet) -> None:
        term_id, _ = store.add_term(english_term)

        store.update_term(term_id, TermLanguageSet(definition="A word"))

        stored = store.get_term_by_id(term_id)
        assert stored is not None
        assert stored.term_language_set.definition == "A word"
        assert stored.term_language_set.term == "term_1"
        assert stored.term_language_set.creator_id == "user_1"

    def test_update_replaces_term_and_language(
        self, store: TermStore, english_term: TermLanguageSet, dutch_term: TermLanguageSet
    ) -> None:
        term_id, _ = store.add_term(english_term)

        store.update_term(term_id, dutch_term)

        found = store.search_terms("term_2", "nl")
        assert len(found) == 1
        assert found[0].term_id == term_id

    def test_update_missing_row(self, store: TermStore) -> None:
        with pytest.raises(TermNotFoundError):
            store.update_term(99, TermLanguageSet(definition="x"))

    def test_delete(self, store: TermStore, english_term: TermLanguageSet) -> None:
        term_id, _ = store.add_term(english_term)

        store.delete_term(term_id)

        assert store.search_terms("term_1", "en") == []
        assert store.get_term_by_id(term_id) is None

    def test_delete_missing_row_is_not_found(self, store: TermStore) -> None:
        """Test deleting an unknown id is reported distinctly."""
        with pytest.raises(TermNotFoundError) as exc_info:
            store.delete_term(42)

        assert isinstance(exc_info.value, StoreError)

    def test_delete_termset(
        self, store: TermStore, english_term: TermLanguageSet, dutch_term: TermLanguageSet
    ) -> None:
        _, term_set_id = store.add_term(english_term)
        store.add_term_to_term_set(term_set_id, dutch_term)

        assert store.delete_termset(term_set_id) == 2
        assert store.get_all_terms() == []

        with pytest.raises(TermNotFoundError):
            store.delete_termset(term_set_id)

    def test_sqlite_errors_are_wrapped(self, store: TermStore) -> None:
        with store.connect() as conn:
            conn.execute(f"DROP TABLE {store.table_name}")

        with pytest.raises(StoreError) as exc_info:
            store.add_term(TermLanguageSet(term="x", language="en"))

        assert isinstance(exc_info.value.__cause__, sqlite3.Error)


@pytest.mark.unit
class TestTermStoreReads:
    """Test lookups and searches."""

    @pytest.fixture
    def filled(
        self, store: TermStore, english_term: TermLanguageSet, dutch_term: TermLanguageSet
    ) -> TermStore:
        _, term_set_id = store.add_term(english_term)
        store.add_term_to_term_set(term_set_id, dutch_term)
        store.add_term(
            TermLanguageSet(
                term="Building",
                language="en-GB",
                subject="architecture",
                definition="A structure with walls",
            )
        )
        store.add_term(TermLanguageSet(language="en", remark="term pending"))
        return store

    def test_get_all_terms(self, filled: TermStore) -> None:
        terms = filled.get_all_terms()

        assert len(terms) == 4
        assert [t.term_id for t in terms] == sorted(t.term_id for t in terms)

    def test_get_term_set_id(self, filled: TermStore) -> None:
        assert filled.get_term_set_id("term_1", "en") == 1
        assert filled.get_term_set_id("term_2", "nl") == 1
        assert filled.get_term_set_id("term_1", "nl") is None

    def test_get_term_set_id_by_term_id(self, filled: TermStore) -> None:
        assert filled.get_term_set_id_by_term_id(1) == 1
        assert filled.get_term_set_id_by_term_id(99) is None

    def test_search_substring_with_language(self, filled: TermStore) -> None:
        terms = filled.search_terms("erm", "nl")

        assert len(terms) == 1
        assert terms[0].term == "term_2"

    def test_search_empty_language_matches_all(self, filled: TermStore) -> None:
        terms = filled.search_terms("term_", "")

        assert {t.term for t in terms} == {"term_1", "term_2"}

    def test_search_is_case_sensitive(self, filled: TermStore) -> None:
        assert filled.search_terms("building", "") == []
        assert len(filled.search_terms("Build", "")) == 1

    def test_search_language_is_exact(self, filled: TermStore) -> None:
        assert [t.term for t in filled.search_terms("", "en")] == ["term_1", None]

    def test_search_empty_query_returns_everything(self, filled: TermStore) -> None:
        assert len(filled.search_terms("", "")) == 4

    def test_fuzzy_search_other_columns(self, filled: TermStore) -> None:
        assert [t.term for t in filled.search_terms_fuzzy("walls")] == ["Building"]
        assert [t.term for t in filled.search_terms_fuzzy("ARCHITECT")] == ["Building"]
        assert [t.term_language_set.remark for t in filled.search_terms_fuzzy("pending")] == [
            "term pending"
        ]

    def test_fuzzy_search_language_substring(self, filled: TermStore) -> None:
        terms = filled.search_terms_fuzzy("", "en")

        assert {t.language for t in terms} == {"en", "en-GB"}

    def test_fuzzy_search_escapes_wildcards(self, filled: TermStore) -> None:
        assert filled.search_terms_fuzzy("%") == []
        assert len(filled.search_terms_fuzzy("term_")) == 2

    def test_search_by_term_set_id(self, filled: TermStore) -> None:
        terms = filled.search_terms_by_term_set_id(1)

        assert [t.language for t in terms] == ["en", "nl"]

    def test_statistics(self, filled: TermStore) -> None:
        stats = filled.get_statistics()

        assert stats["total_terms"] == 4
        assert stats["total_term_sets"] == 3
        assert stats["languages"] == {"en": 2, "en-GB": 1, "nl": 1}

    def test_empty_store_max_ids(self, store: TermStore) -> None:
        assert store.get_max_term_id() == 0
        assert store.get_max_term_set_id() == 0
