#!/usr/bin/env python3
"""
Browse journal entries.

Page through the history, search it, or filter by category, mood and tag.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from typing import List

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daybook.core.config import Config
from daybook.core.db import StorageHandle
from daybook.core.models import JournalEntry
from daybook.review.filters import EntryFilter
from daybook.store import EntryStore, TagStore

app = typer.Typer(help="Browse journal entries")
console = Console()


def _open() -> StorageHandle:
    load_dotenv()
    return StorageHandle(Config.from_env())


def _print_entries(entries: List[JournalEntry], title: str) -> None:
    if not entries:
        console.print("[yellow]No entries match.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Mood")
    table.add_column("Category")
    table.add_column("Words", justify="right")

    for entry in entries:
        table.add_row(
            entry.entry_date.isoformat(),
            escape(entry.title or ""),
            escape(entry.primary_mood or ""),
            escape(entry.category or ""),
            str(entry.word_count),
        )

    console.print(table)


@app.command("list")
def list_entries(
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    page_size: int = typer.Option(None, "--page-size", "-n", help="Entries per page"),
):
    """
    List entries, newest first.
    """
    query = EntryFilter(_open())
    entries = query.page(page, page_size)

    _print_entries(entries, f"Journal - page {max(page, 1)}")


@app.command()
def search(
    text: str = typer.Argument(..., help="Text to look for in titles and content"),
):
    """
    Search titles and content (case-insensitive).
    """
    entries = EntryFilter(_open()).search(text)

    _print_entries(entries, f"Search: {text}")


@app.command("filter")
def filter_entries(
    category: str = typer.Option(None, "--category", "-c", help="Category"),
    mood: str = typer.Option(None, "--mood", "-m", help="Primary mood"),
    tag: str = typer.Option(None, "--tag", "-t", help="Tag"),
):
    """
    Filter by category, mood and tag. All given criteria must match.

    Example:
        python scripts/browse.py filter --mood happy --tag travel
    """
    entries = EntryFilter(_open()).filter(category=category, mood=mood, tag=tag)

    criteria = ", ".join(
        f"{name}={value}"
        for name, value in (("category", category), ("mood", mood), ("tag", tag))
        if value
    )
    _print_entries(entries, f"Filter: {criteria or 'none'}")


@app.command()
def options():
    """
    Show the categories, moods and tags in use.
    """
    handle = _open()
    entries = EntryStore(handle)

    console.print(f"[bold]Categories:[/bold] {', '.join(entries.list_categories()) or '-'}")
    console.print(f"[bold]Moods:[/bold] {', '.join(entries.list_moods()) or '-'}")
    console.print(f"[bold]Tags:[/bold] {', '.join(TagStore(handle).list_all_tag_names()) or '-'}")


if __name__ == "__main__":
    app()
