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

"""Main CLI application entry point for termsquire.

All commands are organized in separate modules under `termsquire.cli.commands/`.
"""

from __future__ import annotations

from pathlib import Path

import typer

from termsquire import __version__
from termsquire.cli.commands import (
    add,
    delete,
    group,
    import_dictionary,
    init,
    list_terms,
    search,
    show,
    stats,
    update,
    values,
)
from termsquire.utils.config import get_settings
from termsquire.utils.console import console
from termsquire.utils.log import setup_logging

# Create main app
app = typer.Typer(
    name="termsquire",
    help="termsquire - terminology dictionary store\n\nImport, search and edit multilingual term sets.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

# Register commands
app.command()(init)
app.command("import")(import_dictionary)
app.command("list")(list_terms)
app.command()(search)
app.command()(show)
app.command()(group)
app.command()(add)
app.command()(update)
app.command()(delete)
app.command()(values)
app.command()(stats)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"termsquire version: [bold cyan]{__version__}[/bold cyan]")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Path | None = typer.Option(
        None, "--data-dir", "-d", help="Directory holding the database"
    ),
    table_name: str | None = typer.Option(None, "--table", help="Term table name"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (error, warn, info, debug, trace)"
    ),
    version: bool = typer.Option(  # noqa: ARG001 - Used by Typer callback
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    termsquire - terminology dictionary store.
    """
    setup_logging(log_level or get_settings().log_level)
    ctx.obj = {"data_dir": data_dir, "table_name": table_name}


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
