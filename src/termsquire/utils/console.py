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

"""Console output shared by the CLI.

Status lines and term tables rendered with rich.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.table import Table

from termsquire.core.models import StoredTerm

console = Console()

# Columns shown by default in term listings
DEFAULT_COLUMNS: tuple[str, ...] = ("term", "language", "term_type", "subject", "definition")


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    console.print(f"[cyan]ℹ[/cyan] {message}")


def build_terms_table(
    terms: Iterable[StoredTerm],
    columns: Iterable[str] = DEFAULT_COLUMNS,
    title: str = "Terms",
) -> Table:
    """Build a table with one row per stored term.

    Args:
        terms: Rows to show
        columns: Variant field names to include after the ids
        title: Table title

    Returns:
        Rich table ready to print
    """
    columns = list(columns)
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Set", style="magenta", justify="right")
    for column in columns:
        table.add_column(column.replace("_", " ").title())

    for entry in terms:
        table.add_row(
            str(entry.term_id),
            str(entry.term_set_id),
            *(entry.display(column) for column in columns),
        )
    return table


__all__ = [
    "DEFAULT_COLUMNS",
    "build_terms_table",
    "console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
