"""Unit tests for data models and timestamp helpers."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from termsquire.core.models import (
    VARIANT_FIELDS,
    Dictionary,
    DictionaryEntry,
    StoredTerm,
    TermLanguageSet,
)
from termsquire.utils.timestamps import (
    format_timestamp,
    parse_timestamp,
    timestamp_for_human_readable,
)


@pytest.mark.unit
class TestTimestamps:
    """Test compact timestamp helpers."""

    def test_parse_timestamp(self) -> None:
        expected = int(datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc).timestamp())

        assert parse_timestamp("20231114T221320Z") == expected

    @pytest.mark.parametrize("value", ["", None, "2023-11-14", "20231314T000000Z", "garbage"])
    def test_parse_timestamp_invalid(self, value: str | None) -> None:
        assert parse_timestamp(value) is None

    def test_format_timestamp(self) -> None:
        assert format_timestamp(1_700_000_000) == "2023-11-14 22:13:20"
        assert format_timestamp(None) == ""

    def test_human_readable(self) -> None:
        assert timestamp_for_human_readable("20231114T221320Z") == "2023-11-14 22:13:20"
        assert timestamp_for_human_readable("nope") == "error"


@pytest.mark.unit
class TestTermLanguageSet:
    """Test variant helpers."""

    def test_as_row_follows_column_order(self) -> None:
        variant = TermLanguageSet(term="huis", language="nl", definition="woning")

        row = variant.as_row()

        assert len(row) == len(VARIANT_FIELDS)
        assert row[VARIANT_FIELDS.index("term")] == "huis"
        assert row[VARIANT_FIELDS.index("definition")] == "woning"

    def test_supplied_fields(self) -> None:
        variant = TermLanguageSet(definition="only this")

        assert variant.supplied_fields() == {"definition": "only this"}

    def test_identity_and_has_term(self) -> None:
        assert TermLanguageSet(term="a", language="en").identity() == ("a", "en")
        assert TermLanguageSet(term="", language="en").has_term is False


@pytest.mark.unit
class TestStoredTerm:
    """Test display helpers."""

    def test_display_placeholders(self) -> None:
        stored = StoredTerm(term_id=1, term_set_id=1)

        assert stored.display("term") == "No Term"
        assert stored.display("language") == "No Language"
        assert stored.display("creation_timestamp") == "No Date"

    def test_display_values(self) -> None:
        stored = StoredTerm(
            term_id=1,
            term_set_id=2,
            term_language_set=TermLanguageSet(term="house", update_timestamp=1_700_000_000),
        )

        assert stored.display("term") == "house"
        assert stored.display("update_timestamp") == "2023-11-14 22:13:20"
        assert stored.term == "house"

    def test_display_unknown_field(self) -> None:
        with pytest.raises(KeyError):
            StoredTerm(term_id=1, term_set_id=1).display("colour")


@pytest.mark.unit
class TestDictionary:
    """Test dictionary rendering and JSON artifact."""

    @pytest.fixture
    def dictionary(self) -> Dictionary:
        dictionary = Dictionary()
        dictionary.add_entry(
            DictionaryEntry(
                id=12,
                language_sets=[
                    TermLanguageSet(term="house", language="en", creation_timestamp=1_700_000_000),
                    TermLanguageSet(term="huis", language="nl"),
                ],
            )
        )
        return dictionary

    def test_str(self, dictionary: Dictionary) -> None:
        text = str(dictionary)

        assert "ID: 12" in text
        assert "\tTerm: house" in text
        assert "\tLanguage: nl" in text
        assert "\tCreation Date: 2023-11-14 22:13:20" in text

    def test_serialize_to_json(self, dictionary: Dictionary, tmp_path: Path) -> None:
        path = tmp_path / "processed.json"

        dictionary.serialize_to_json(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["entries"][0]["id"] == 12
        assert data["entries"][0]["language_sets"][1]["term"] == "huis"
        assert Dictionary.from_json(path) == dictionary
