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

"""Dictionary-level commands: init, import, stats and filter values."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from termsquire.cli.utils import open_service
from termsquire.core.errors import TermSquireError
from termsquire.importer.parser import DictionaryParser
from termsquire.memory.unique_values import UniqueValueIndex
from termsquire.utils.console import console, print_error, print_success, print_warning


def init(ctx: typer.Context) -> None:
    """Create the database tables in the data directory.

    Example:
        termsquire --data-dir ./data init
    """
    try:
        service = open_service(ctx)
        print_success(f"Database ready: {service.store.db_path}")
    except (TermSquireError, ValueError) as e:
        print_error(f"Error: {e}")
        raise typer.Exit(code=1)


def import_dictionary(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Terminology exchange file to import"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Parse and print the dictionary without writing"
    ),
) -> None:
    """Import a terminology exchange file.

    Example:
        termsquire import export.tbx
        termsquire import export.tbx --dry-run
    """
    try:
        if dry_run:
            dictionary = DictionaryParser.parse_file(file)
            console.print(str(dictionary), markup=False, highlight=False)
            print_success(
                f"Parsed {len(dictionary)} entries ({dictionary.variant_count()} variants)"
            )
            return

        service = open_service(ctx)
        report = service.import_dictionary(file)
    except (TermSquireError, ValueError) as e:
        print_error(f"Failed to import dictionary: {e}")
        raise typer.Exit(code=1)

    print_success(
        f"Imported {report.entry_count} entries as {report.rows_written} terms "
        f"in {len(report.term_set_ids)} term sets"
    )
    if not report.unique_values_rebuilt:
        print_warning("Filter values could not be rebuilt, see log")
    if not report.cache_refreshed:
        print_warning("Term cache could not be refreshed, see log")


def stats(ctx: typer.Context) -> None:
    """Show term store statistics."""
    try:
        service = open_service(ctx)
        statistics = service.statistics()
    except (TermSquireError, ValueError) as e:
        print_error(f"Error: {e}")
        raise typer.Exit(code=1)

    console.print(f"[bold]Terms:[/bold] {statistics['total_terms']}")
    console.print(f"[bold]Term sets:[/bold] {statistics['total_term_sets']}")
    console.print(f"[bold]Highest term id:[/bold] {statistics['max_term_id']}")
    console.print(f"[bold]Highest term set id:[/bold] {statistics['max_term_set_id']}")

    if statistics["languages"]:
        table = Table(title="Languages")
        table.add_column("Language", style="cyan")
        table.add_column("Terms", justify="right")
        for language, count in statistics["languages"].items():
            table.add_row(language, str(count))
        console.print(table)


def values(
    ctx: typer.Context,
    column: str = typer.Argument(
        ..., help=f"Column ({', '.join(UniqueValueIndex.columns())})"
    ),
) -> None:
    """List the distinct values of a filterable column.

    Example:
        termsquire values language
    """
    if column not in UniqueValueIndex.columns():
        print_error(f"Unknown column: {column}")
        raise typer.Exit(code=1)
    try:
        service = open_service(ctx)
        found = service.unique_values(column)
    except (TermSquireError, ValueError) as e:
        print_error(f"Error: {e}")
        raise typer.Exit(code=1)

    if not found:
        console.print("[yellow]No values found[/yellow]")
        return
    for value in found:
        console.print(value, markup=False)
