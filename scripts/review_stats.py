#!/usr/bin/env python3
"""
Journal review script.

Shows streaks, mood and category breakdowns, and suggests ONE focus.
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
from daybook.review.stats import JournalStats
from daybook.review.summary import format_summary, export_summary

app = typer.Typer(help="Journal review")
console = Console()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@app.command()
def main(
    export: bool = typer.Option(False, "--export", "-e", help="Export to file"),
    output: str = typer.Option(None, "--output", "-o", help="Export file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """
    Generate the journal review.

    Shows totals, streaks, missed days and the most common moods, categories and tags.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    load_dotenv()
    config = Config.from_env()

    stats = JournalStats(StorageHandle(config)).get_summary()

    if export:
        filepath = export_summary(stats, output)
        console.print(f"[green]Review exported to {filepath}[/green]")
    else:
        print(format_summary(stats))


if __name__ == "__main__":
    app()
