"""idfparse CLI - Command Line Interface.

This module provides the command-line interface for idfparse, allowing users
to parse IDF 3.0 board, panel and library files, inspect their section
structure and check them for syntax errors.

The CLI is built using Typer and uses Rich for formatted output.

Typical usage example:

  $ idfparse parse board.emn
  $ idfparse parse board.emn --output board.json
  $ idfparse check board.emn parts.emp
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .exceptions import IDFSyntaxError
from .log_utils import setup_logging
from .parsers.idf30 import IDF30Parser

app = typer.Typer(
    name="idfparse",
    help="idfparse: IDF 3.0 board exchange format parser",
    no_args_is_help=True,
)
console = Console()


@app.callback(invoke_without_command=False)
def main(
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress debug logs (show warnings/errors only)"
    ),
):
    """idfparse: IDF 3.0 board exchange format parser."""
    setup_logging(quiet=quiet)


@app.command()
def parse(
    file: Path = typer.Argument(..., help="Path to IDF file (.emn, .emp, .idf, optionally .gz)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
):
    """Parses an IDF file and displays a summary.

    Prints the header section name, the number of header records, data
    sections and data records, and optionally saves the document tree as JSON.

    Args:
        file: The path to the IDF file to parse.
        output: Optional. Path to save the parsed document as a JSON file.

    Raises:
        typer.Exit: If the file is not found or does not parse.
    """
    if not file.exists():
        console.print(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)

    logger = logging.getLogger("idfparse.cli")
    logger.info(f"Starting parse for {file}")

    try:
        doc = IDF30Parser().parse(file)
    except IDFSyntaxError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    console.print(
        Panel.fit(
            f"[bold green]IDF File:[/] {file.name}\n"
            f"[bold]Header:[/] {doc.header.name}\n"
            f"[bold]Header Records:[/] {len(doc.header.records)}\n"
            f"[bold]Sections:[/] {len(doc.sections)}\n"
            f"[bold]Records:[/] {doc.record_count()}",
            title="IDF Summary",
        )
    )

    if logging.getLogger().isEnabledFor(logging.DEBUG):
        table = Table(title="Sections")
        table.add_column("Name")
        table.add_column("Attributes")
        table.add_column("Line", justify="right")
        table.add_column("Records", justify="right")

        for section in doc.sections:
            table.add_row(
                section.name,
                " ".join(section.attributes) or "-",
                str(section.header.line),
                str(len(section.records)),
            )

        console.print(table)

    if output:
        data = doc.model_dump(mode="json")
        output.write_text(json.dumps(data, indent=2))
        console.print(f"[green]Saved to:[/green] {output}")


@app.command()
def check(
    files: list[Path] = typer.Argument(..., help="IDF files to check"),
):
    """Checks IDF files for syntax errors.

    Every file is parsed independently; the command exits with status 1 if
    any of them is missing or fails to parse.

    Args:
        files: The IDF files to check.

    Raises:
        typer.Exit: If at least one file fails.
    """
    table = Table(title="IDF Check")
    table.add_column("File")
    table.add_column("Status")
    table.add_column("Details")

    failures = 0
    for path in files:
        if not path.exists():
            failures += 1
            table.add_row(str(path), "[red]MISSING[/red]", "File not found")
            continue
        try:
            doc = IDF30Parser().parse(path)
        except IDFSyntaxError as e:
            failures += 1
            diag = e.diagnostic
            table.add_row(
                str(path),
                "[red]FAIL[/red]",
                escape(f"{diag.position}: {diag.kind.value}: {diag.message}"),
            )
            continue
        table.add_row(
            str(path),
            "[green]OK[/green]",
            f"{len(doc.sections)} sections, {doc.record_count()} records",
        )

    console.print(table)
    if failures:
        console.print(f"[red]{failures} of {len(files)} file(s) failed[/red]")
        raise typer.Exit(1)
