#!/usr/bin/env python3
"""
Export and import journal data.

Exports entries to CSV, JSON or PDF; imports entries from a JSON export.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

import typer
from dotenv import load_dotenv
from rich.console import Console

from daybook.core.config import Config
from daybook.core.db import StorageHandle
from daybook.export import JournalExporter

app = typer.Typer(help="Export and import journal data")
console = Console()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _exporter() -> JournalExporter:
    load_dotenv()
    return JournalExporter(StorageHandle(Config.from_env()))


def _export(kind: str, output: str) -> None:
    path = _exporter().write_export(kind, output)
    console.print(f"[green]Exported journal to {path}[/green]")


@app.command()
def csv(
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Export all entries to CSV.
    """
    _export("csv", output)


@app.command()
def json(
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Export all entries to JSON (tags are not included).
    """
    _export("json", output)


@app.command()
def pdf(
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Export all entries as a PDF report.
    """
    _export("pdf", output)


@app.command("import")
def import_json(
    source: Path = typer.Argument(..., help="JSON file produced by the json export"),
):
    """
    Import entries from a JSON export.

    Entries are matched by date: existing days are updated, new days created.
    """
    if not source.exists():
        console.print(f"[red]File not found: {source}[/red]")
        raise typer.Exit(1)

    imported = _exporter().import_from_json(source.read_text(encoding="utf-8"))

    if imported == 0:
        console.print("[yellow]Nothing imported (empty or malformed file).[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]Imported {imported} entries from {source}[/green]")


if __name__ == "__main__":
    app()
