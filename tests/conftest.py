"""Shared pytest fixtures for termsquire tests.

Provides temporary stores, services with a fixed clock, and sample
dictionary files.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from termsquire.core.models import TermLanguageSet
from termsquire.memory.cache import TermCache
from termsquire.memory.termbase import TermStore
from termsquire.service import TermService

FIXED_EPOCH = 1_700_000_000

SAMPLE_TBX = """<?xml version="1.0" encoding="UTF-8"?>
<martif type="TBX" xml:lang="en">
  <martifHeader/>
  <text>
    <body>
      <termEntry id="1">
        <langSet xml:lang="en">
          <ntig>
            <termGrp>
              <term>apple</term>
              <termNote type="termType">fullForm</termNote>
              <termNote type="TS_CreateId">jdoe</termNote>
              <termNote type="TS_Subject">food</termNote>
              <date type="origination">20240131T154500Z</date>
              <descrip type="definition">A round fruit</descrip>
            </termGrp>
          </ntig>
        </langSet>
      </termEntry>
      <termEntry id="2">
        <langSet xml:lang="en">
          <ntig>
            <termGrp>
              <term>house</term>
              <termNote type="TS_Hyperlink">https://example.org/house</termNote>
            </termGrp>
          </ntig>
        </langSet>
        <langSet xml:lang="nl">
          <ntig>
            <termGrp>
              <term>huis</term>
              <descrip type="context">Het huis staat aan de gracht.</descrip>
            </termGrp>
          </ntig>
        </langSet>
      </termEntry>
      <termEntry id="3">
        <langSet xml:lang="en">
          <ntig>
            <termGrp>
              <term>car</term>
              <date type="modification">20240202T080000Z</date>
            </termGrp>
          </ntig>
        </langSet>
        <langSet xml:lang="nl">
          <ntig>
            <termGrp>
              <term>auto</term>
            </termGrp>
          </ntig>
        </langSet>
        <langSet xml:lang="de">
          <ntig>
            <termGrp>
              <term>Auto</term>
              <termNote type="TS_Subject">vehicles</termNote>
              <termNote type="TS_Unknown">ignored</termNote>
              <date type="origination">not-a-date</date>
            </termGrp>
          </ntig>
        </langSet>
      </termEntry>
    </body>
  </text>
</martif>
"""


@pytest.fixture
def sample_tbx() -> str:
    """Dictionary with entries of one, two and three variants."""
    return SAMPLE_TBX


@pytest.fixture
def write_tbx(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write dictionary content to a file under tmp_path."""

    def _write(content: str, name: str = "dictionary.tbx") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_tbx_file(write_tbx: Callable[[str, str], Path], sample_tbx: str) -> Path:
    return write_tbx(sample_tbx, "sample.tbx")


@pytest.fixture
def store(tmp_path: Path) -> TermStore:
    """Term store on a fresh database with the term table created."""
    term_store = TermStore(tmp_path / "test.sqlite")
    term_store.create_terms_table()
    return term_store


@pytest.fixture
def service(store: TermStore, tmp_path: Path) -> TermService:
    """Initialized service with a fixed clock."""
    term_service = TermService(
        store,
        cache=TermCache(),
        clock=lambda: FIXED_EPOCH,
        debug_json_path=tmp_path / "processed_dictionary.json",
    )
    term_service.initialize()
    return term_service


@pytest.fixture
def english_term() -> TermLanguageSet:
    return TermLanguageSet(
        term="term_1",
        language="en",
        term_type="noun",
        creator_id="user_1",
        creation_timestamp=FIXED_EPOCH,
    )


@pytest.fixture
def dutch_term() -> TermLanguageSet:
    return TermLanguageSet(
        term="term_2",
        language="nl",
        term_type="noun",
        creator_id="user_2",
        creation_timestamp=FIXED_EPOCH,
    )
