"""Tests for the termsquire CLI commands.

Runs the real commands against a database in a temporary data directory.
"""

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from termsquire import __version__
from termsquire.cli.main import app


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """The CLI callback reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, tmp_path: Path) -> Callable[..., object]:
    """Invoke the app with the data directory pointed at tmp_path."""

    def _invoke(*args: str):
        return runner.invoke(app, ["--data-dir", str(tmp_path), "--log-level", "error", *args])

    return _invoke


@pytest.fixture
def imported(invoke: Callable[..., object], sample_tbx_file: Path) -> Callable[..., object]:
    result = invoke("import", str(sample_tbx_file))
    assert result.exit_code == 0
    return invoke


@pytest.mark.unit
class TestAppCommands:
    """Tests for application-level options and dictionary commands."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_init(self, invoke: Callable[..., object], tmp_path: Path) -> None:
        result = invoke("init")

        assert result.exit_code == 0
        assert "Database ready" in result.stdout
        assert (tmp_path / "term-squire.sqlite").exists()

    def test_missing_data_dir(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--data-dir", str(tmp_path / "missing"), "init"])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_import(self, invoke: Callable[..., object], sample_tbx_file: Path) -> None:
        # Act
        result = invoke("import", str(sample_tbx_file))

        # Assert
        assert result.exit_code == 0
        assert "Imported 3 entries as 6 terms in 3 term sets" in result.stdout

    def test_import_dry_run_writes_nothing(
        self, invoke: Callable[..., object], sample_tbx_file: Path, tmp_path: Path
    ) -> None:
        result = invoke("import", str(sample_tbx_file), "--dry-run")

        assert result.exit_code == 0
        assert "ID: 1" in result.stdout
        assert "Parsed 3 entries (6 variants)" in result.stdout
        assert not (tmp_path / "term-squire.sqlite").exists()

    def test_import_malformed_file(
        self, invoke: Callable[..., object], write_tbx: Callable[..., Path]
    ) -> None:
        path = write_tbx("<martif>", "bad.tbx")

        result = invoke("import", str(path))

        assert result.exit_code == 1
        assert "Failed to import dictionary" in result.stdout

    def test_stats(self, imported: Callable[..., object]) -> None:
        result = imported("stats")

        assert result.exit_code == 0
        assert "Terms: 6" in result.stdout
        assert "Term sets: 3" in result.stdout

    def test_values(self, imported: Callable[..., object]) -> None:
        result = imported("values", "language")

        assert result.exit_code == 0
        assert result.stdout.split() == ["de", "en", "nl"]

    def test_values_unknown_column(self, invoke: Callable[..., object]) -> None:
        result = invoke("values", "definition")

        assert result.exit_code == 1
        assert "Unknown column" in result.stdout


@pytest.mark.unit
class TestTermCommands:
    """Tests for term listing, search and editing commands."""

    def test_list(self, imported: Callable[..., object]) -> None:
        result = imported("list")

        assert result.exit_code == 0
        assert "Total: 6 terms" in result.stdout

    def test_list_empty(self, invoke: Callable[..., object]) -> None:
        result = invoke("list")

        assert result.exit_code == 0
        assert "No terms found" in result.stdout

    def test_list_unknown_column(self, imported: Callable[..., object]) -> None:
        result = imported("list", "--columns", "term,colour")

        assert result.exit_code != 0

    def test_search(self, imported: Callable[..., object]) -> None:
        result = imported("search", "hu", "--lang", "nl")

        assert result.exit_code == 0
        assert "huis" in result.stdout
        assert "Total: 1 terms" in result.stdout

    def test_search_fuzzy(self, imported: Callable[..., object]) -> None:
        result = imported("search", "fruit", "--fuzzy")

        assert result.exit_code == 0
        assert "apple" in result.stdout

    def test_show(self, imported: Callable[..., object]) -> None:
        result = imported("show", "1")

        assert result.exit_code == 0
        assert "apple" in result.stdout
        assert "jdoe" in result.stdout

    def test_show_missing(self, imported: Callable[..., object]) -> None:
        result = imported("show", "99")

        assert result.exit_code == 1
        assert "Term not found" in result.stdout

    def test_group(self, imported: Callable[..., object]) -> None:
        result = imported("group", "3")

        assert result.exit_code == 0
        assert "Total: 3 terms" in result.stdout

    def test_add_and_update(self, invoke: Callable[..., object]) -> None:
        # Arrange
        added = invoke("add", "--term", "house", "--lang", "en")
        assert added.exit_code == 0
        assert "Inserted term 1 in term set 1" in added.stdout

        # Act
        updated = invoke("update", "1", "--definition", "A building")
        shown = invoke("show", "1")

        # Assert
        assert updated.exit_code == 0
        assert "house" in shown.stdout
        assert "A building" in shown.stdout

    def test_add_to_set(self, invoke: Callable[..., object]) -> None:
        invoke("add", "--term", "house", "--lang", "en")

        result = invoke("add", "--term", "huis", "--lang", "nl", "--to-set", "1")

        assert result.exit_code == 0
        assert "Inserted term 2 in term set 1" in result.stdout

    def test_add_to_missing_set(self, invoke: Callable[..., object]) -> None:
        result = invoke("add", "--term", "huis", "--lang", "nl", "--to-set", "7")

        assert result.exit_code == 1
        assert "Failed to insert term" in result.stdout

    def test_update_missing(self, invoke: Callable[..., object]) -> None:
        result = invoke("update", "5", "--remark", "x")

        assert result.exit_code == 1
        assert "Term not found" in result.stdout

    def test_delete(self, imported: Callable[..., object]) -> None:
        result = imported("delete", "1")

        assert result.exit_code == 0
        assert "Term 1 deleted" in result.stdout

    def test_delete_set(self, imported: Callable[..., object]) -> None:
        result = imported("delete", "3", "--set")

        assert result.exit_code == 0
        assert "Term set 3 deleted (3 terms)" in result.stdout

    def test_delete_missing(self, invoke: Callable[..., object]) -> None:
        result = invoke("delete", "42")

        assert result.exit_code == 1
        assert "Term not found or not deleted" in result.stdout
