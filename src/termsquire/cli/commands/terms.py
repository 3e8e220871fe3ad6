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

"""Term-level commands: list, search, show, group, add, update, delete."""

from __future__ import annotations

import typer
from rich.table import Table

from termsquire.cli.utils import open_service
from termsquire.core.errors import TermNotFoundError, TermSquireError
from termsquire.core.models import VARIANT_FIELDS, StoredTerm, TermLanguageSet
from termsquire.utils.console import (
    DEFAULT_COLUMNS,
    build_terms_table,
    console,
    print_error,
    print_success,
)

TERM_ID_HELP = "Term id"


def _parse_columns(columns: str | None) -> list[str]:
    if not columns:
        return list(DEFAULT_COLUMNS)
    selected = [name.strip() for name in columns.split(",") if name.strip()]
    unknown = [name for name in selected if name not in VARIANT_FIELDS]
    if unknown:
        raise typer.BadParameter(f"Unknown column(s): {', '.join(unknown)}")
    return selected


def _print_terms(terms: list[StoredTerm], title: str, columns: list[str]) -> None:
    if not terms:
        console.print("[yellow]No terms found[/yellow]")
        return
    console.print(build_terms_table(terms, columns, title=title))
    console.print(f"\n[dim]Total: {len(terms)} terms[/dim]")


def list_terms(
    ctx: typer.Context,
    columns: str | None = typer.Option(
        None, "--columns", "-c", help="Comma-separated columns to show"
    ),
) -> None:
    """List all stored terms."""
    selected = _parse_columns(columns)
    try:
        terms = open_service(ctx).get_all_terms()
    except (TermSquireError, ValueError) as e:
        print_error(f"Failed to get data: {e}")
        raise typer.Exit(code=1)
    _print_terms(terms, "Terms", selected)


def search(
    ctx: typer.Context,
    term: str = typer.Argument("", help="Text contained in the term"),
    language: str = typer.Option("", "--lang", "-l", help="Language code (empty = all)"),
    fuzzy: bool = typer.Option(
        False, "--fuzzy", "-f", help="Also match subject, remark, context and definition"
    ),
    columns: str | None = typer.Option(
        None, "--columns", "-c", help="Comma-separated columns to show"
    ),
) -> None:
    """Search terms by text and language.

    Example:
        termsquire search huis --lang nl
        termsquire search building --fuzzy
    """
    selected = _parse_columns(columns)
    try:
        service = open_service(ctx)
        if fuzzy:
            terms = service.search_terms_fuzzy(term, language)
        else:
            terms = service.search_terms(term, language)
    except (TermSquireError, ValueError) as e:
        print_error(f"Failed to search terms: {e}")
        raise typer.Exit(code=1)
    _print_terms(terms, f"Search: {term!r}", selected)


def show(
    ctx: typer.Context,
    term_id: int = typer.Argument(..., help=TERM_ID_HELP),
) -> None:
    """Show every field of one term."""
    try:
        term = open_service(ctx).get_term_by_id(term_id)
    except (TermSquireError, ValueError) as e:
        print_error(f"Failed to get term details: {e}")
        raise typer.Exit(code=1)

    if term is None:
        print_error(f"Term not found: {term_id}")
        raise typer.Exit(code=1)

    table = Table(title=f"Term {term.term_id} (set {term.term_set_id})", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for name in VARIANT_FIELDS:
        table.add_row(name.replace("_", " ").title(), term.display(name))
    console.print(table)


def group(
    ctx: typer.Context,
    term_set_id: int = typer.Argument(..., help="Term set id"),
) -> None:
    """Show all language variants of a term set."""
    try:
        terms = open_service(ctx).search_terms_by_term_set_id(term_set_id)
    except (TermSquireError, ValueError) as e:
        print_error(f"Failed to search terms: {e}")
        raise typer.Exit(code=1)
    _print_terms(terms, f"Term set {term_set_id}", list(DEFAULT_COLUMNS))


def _variant_from_options(**fields: str | None) -> TermLanguageSet:
    return TermLanguageSet(**{name: value for name, value in fields.items() if value})


def add(
    ctx: typer.Context,
    term: str = typer.Option(..., "--term", "-t", help="Term text"),
    language: str = typer.Option(..., "--lang", "-l", help="Language code"),
    term_type: str | None = typer.Option(None, "--type", help="Term type"),
    subject: str | None = typer.Option(None, "--subject", help="Subject"),
    definition: str | None = typer.Option(None, "--definition", help="Definition"),
    context: str | None = typer.Option(None, "--context", help="Usage context"),
    remark: str | None = typer.Option(None, "--remark", help="Remark"),
    to_set: int | None = typer.Option(
        None, "--to-set", help="Add to an existing term set instead of a new one"
    ),
) -> None:
    """Insert a term, as a new term set or into an existing one.

    Example:
        termsquire add --term house --lang en
        termsquire add --term huis --lang nl --to-set 1
    """
    variant = _variant_from_options(
        term=term,
        language=language,
        term_type=term_type,
        subject=subject,
        definition=definition,
        context=context,
        remark=remark,
    )
    try:
        service = open_service(ctx)
        if to_set is None:
            stored = service.insert_term(variant)
        else:
            stored = service.add_term_to_term_set(to_set, variant)
    except (TermSquireError, ValueError) as e:
        print_error(f"Failed to insert term: {e}")
        raise typer.Exit(code=1)
    print_success(f"Inserted term {stored.term_id} in term set {stored.term_set_id}")


def update(
    ctx: typer.Context,
    term_id: int = typer.Argument(..., help=TERM_ID_HELP),
    term: str | None = typer.Option(None, "--term", "-t", help="Term text"),
    language: str | None = typer.Option(None, "--lang", "-l", help="Language code"),
    term_type: str | None = typer.Option(None, "--type", help="Term type"),
    subject: str | None = typer.Option(None, "--subject", help="Subject"),
    definition: str | None = typer.Option(None, "--definition", help="Definition"),
    context: str | None = typer.Option(None, "--context", help="Usage context"),
    remark: str | None = typer.Option(None, "--remark", help="Remark"),
) -> None:
    """Update the given fields of a term; other fields keep their values.

    Example:
        termsquire update 3 --definition "A building for living in"
    """
    variant = _variant_from_options(
        term=term,
        language=language,
        term_type=term_type,
        subject=subject,
        definition=definition,
        context=context,
        remark=remark,
    )
    try:
        open_service(ctx).update_term(term_id, variant)
    except TermNotFoundError:
        print_error(f"Term not found: {term_id}")
        raise typer.Exit(code=1)
    except (TermSquireError, ValueError) as e:
        print_error(f"Failed to update term: {e}")
        raise typer.Exit(code=1)
    print_success(f"Term {term_id} updated")


def delete(
    ctx: typer.Context,
    identifier: int = typer.Argument(..., help="Term id (or term set id with --set)"),
    whole_set: bool = typer.Option(False, "--set", help="Delete a whole term set"),
) -> None:
    """Delete a term or a whole term set."""
    try:
        service = open_service(ctx)
        if whole_set:
            deleted = service.delete_termset(identifier)
            print_success(f"Term set {identifier} deleted ({deleted} terms)")
        else:
            service.delete_term(identifier)
            print_success(f"Term {identifier} deleted")
    except TermNotFoundError:
        print_error("Term not found or not deleted")
        raise typer.Exit(code=1)
    except (TermSquireError, ValueError) as e:
        print_error(f"Failed to delete term: {e}")
        raise typer.Exit(code=1)
