#!/usr/bin/env python3
"""
Write today's journal entry.

One entry per day. Writing again for the same day updates it.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging
from datetime import date
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt, Confirm

from daybook.core.config import Config
from daybook.core.db import StorageHandle
from daybook.core.models import JournalEntry
from daybook.core.moods import MOODS_BY_CATEGORY
from daybook.core.utils import local_today, parse_date
from daybook.store import EntryStore, TagStore

app = typer.Typer(help="Write, show or delete a journal entry")
console = Console()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _resolve_day(day: Optional[str], config: Config) -> date:
    if not day:
        return local_today(config.timezone)
    try:
        return parse_date(day)
    except ValueError:
        console.print(f"[red]Invalid date: {day} (expected YYYY-MM-DD)[/red]")
        raise typer.Exit(1)


def _open() -> StorageHandle:
    load_dotenv()
    return StorageHandle(Config.from_env())


@app.command()
def main(
    day: str = typer.Option(None, "--date", "-d", help="Entry date YYYY-MM-DD (default: today)"),
    title: str = typer.Option(None, "--title", "-t", help="Entry title"),
    mood: str = typer.Option(None, "--mood", "-m", help="Primary mood"),
    mood2: str = typer.Option(None, "--mood2", help="First secondary mood"),
    mood3: str = typer.Option(None, "--mood3", help="Second secondary mood"),
    category: str = typer.Option(None, "--category", "-c", help="Category"),
    tags: str = typer.Option(None, "--tags", help="Comma-separated tags"),
    content: str = typer.Option(None, "--content", help="Entry text (prompted if omitted)"),
):
    """
    Write or update the entry for a day.

    Prompts for anything not given on the command line.
    """
    handle = _open()
    entries = EntryStore(handle)
    tag_store = TagStore(handle)

    target_day = _resolve_day(day, handle.config)
    existing = entries.get_by_date(target_day)

    if existing:
        console.print(f"[yellow]Updating the entry for {target_day}[/yellow]\n")
    else:
        console.print(f"[bold]New entry for {target_day}[/bold]\n")

    if title is None:
        title = Prompt.ask("Title", default=existing.title if existing else "", console=console)

    if mood is None:
        console.print("[bold]Moods:[/bold]")
        for family, moods in MOODS_BY_CATEGORY.items():
            console.print(f"  {family}: {', '.join(moods)}")
        mood = Prompt.ask(
            "Primary mood", default=existing.primary_mood if existing else "", console=console
        )

    if category is None:
        category = Prompt.ask(
            "Category",
            default=existing.category if existing else handle.config.default_category,
            console=console,
        )

    if tags is None:
        current_tags = tag_store.get_tags(existing.id) if existing else []
        tags = Prompt.ask("Tags (comma-separated)", default=", ".join(current_tags), console=console)

    if content is None:
        content = Prompt.ask("What happened today?", default=existing.content if existing else "", console=console)

    saved = entries.upsert(JournalEntry(
        entry_date=target_day,
        title=title,
        content=content,
        primary_mood=mood,
        category=category,
        secondary_mood1=mood2 if mood2 is not None else (existing.secondary_mood1 if existing else None),
        secondary_mood2=mood3 if mood3 is not None else (existing.secondary_mood2 if existing else None),
    ))
    tag_store.set_tags(saved.id, tags.split(","))

    console.print(
        f"\n[green]Entry #{saved.id} for {saved.entry_date} saved "
        f"({saved.word_count} words).[/green]\n"
    )


@app.command()
def show(
    day: str = typer.Argument(None, help="Entry date YYYY-MM-DD (default: today)"),
):
    """
    Show the entry for a day.
    """
    handle = _open()
    target_day = _resolve_day(day, handle.config)

    entry = EntryStore(handle).get_by_date(target_day)
    if not entry:
        console.print(f"[yellow]No entry for {target_day}.[/yellow]")
        raise typer.Exit(1)

    tags = TagStore(handle).get_tags(entry.id)
    moods = ", ".join(m for m in (entry.primary_mood, entry.secondary_mood1, entry.secondary_mood2) if m)

    console.print(Panel(
        f"{escape(entry.content)}\n\n"
        f"[dim]Mood: {moods or '-'} | Category: {entry.category} | "
        f"Tags: {', '.join(tags) or '-'} | Words: {entry.word_count}[/dim]",
        title=escape(f"{entry.entry_date} | {entry.title}"),
        border_style="cyan",
    ))


@app.command()
def delete(
    day: str = typer.Argument(..., help="Entry date YYYY-MM-DD"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """
    Delete the entry for a day.
    """
    handle = _open()
    target_day = _resolve_day(day, handle.config)

    if not yes and not Confirm.ask(f"Delete the entry for {target_day}?", console=console):
        raise typer.Exit(0)

    if EntryStore(handle).delete_by_date(target_day) == 0:
        console.print(f"[yellow]No entry for {target_day}.[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]Entry for {target_day} deleted.[/green]")


if __name__ == "__main__":
    app()
