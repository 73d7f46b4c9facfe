#!/usr/bin/env python3
"""
Interactive setup wizard for Daybook.

Guides users through initial configuration with validation.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt, Confirm
from rich import print as rprint

from daybook.core.config import Config
from daybook.core.db import init_db

app = typer.Typer(help="Interactive setup wizard")
console = Console()


def check_timezone(name: str) -> bool:
    """Check that a timezone name is known."""
    if not name:
        return True
    try:
        ZoneInfo(name)
        return True
    except (ZoneInfoNotFoundError, ValueError):
        return False


@app.command()
def main(
    db_path: str = typer.Option("", "--db-path", help="Database file path"),
    timezone: str = typer.Option("", "--timezone", help="Timezone, e.g. Europe/London"),
    category: str = typer.Option("", "--category", help="Default category"),
):
    """
    Run interactive setup wizard.

    Prompts for configuration if values not provided via CLI.
    """
    console.print(Panel.fit(
        "[bold cyan]Daybook Setup Wizard[/bold cyan]\n\n"
        "This wizard will guide you through configuration.\n"
        "Press Ctrl+C at any time to cancel.",
        border_style="cyan"
    ))

    rprint("")

    # Database
    console.print("[bold yellow]Step 1/3: Database[/bold yellow]\n")

    if not db_path:
        db_path = Prompt.ask("Database file", default="data/daybook.db", console=console)

    # Timezone
    console.print("\n[bold yellow]Step 2/3: Timezone[/bold yellow]\n")

    if not timezone:
        console.print("Streaks are counted against today's date in this timezone.")
        console.print("Leave blank to use the system timezone.\n")
        timezone = Prompt.ask("Timezone", default="", console=console)

    if not check_timezone(timezone):
        console.print(f"[red]✗ Unknown timezone: {timezone}[/red]")
        if not Confirm.ask("Use the system timezone instead?", console=console, default=True):
            raise typer.Exit(1)
        timezone = ""

    # Defaults
    console.print("\n[bold yellow]Step 3/3: Entries[/bold yellow]\n")

    if not category:
        category = Prompt.ask("Default category", default="General", console=console)

    # Initialize database
    config = Config(database_path=db_path, timezone=timezone or None, default_category=category)
    init_db(config)
    console.print(f"\n[green]✓ Database ready at {db_path}[/green]")

    # Write to .env
    console.print("\n")
    if Confirm.ask("Save configuration to .env file?", console=console, default=True):
        env_path = Path(__file__).parent.parent / ".env"

        env_content = f"""# Daybook Configuration
# Generated by setup wizard

# Database
DAYBOOK_DB_PATH={db_path}

# Timezone (blank = system)
TIMEZONE={timezone}

# Entries
DAYBOOK_DEFAULT_CATEGORY={category}
DAYBOOK_PAGE_SIZE=10

# Export
DAYBOOK_EXPORT_DIR=data/exports
DAYBOOK_PDF_TITLE=Journal Export
"""

        env_path.write_text(env_content)
        console.print(f"\n[green]✓ Configuration saved to {env_path}[/green]")

    console.print("\n")
    console.print(Panel.fit(
        "[bold green]Setup Complete![/bold green]\n\n"
        "Next steps:\n"
        "1. Write today's entry:\n"
        "   [dim]python scripts/write_entry.py[/dim]\n\n"
        "2. Browse the journal:\n"
        "   [dim]python scripts/browse.py list[/dim]\n\n"
        "3. Review streaks:\n"
        "   [dim]python scripts/review_stats.py[/dim]",
        border_style="green"
    ))


@app.command()
def validate():
    """Validate existing configuration."""
    from dotenv import load_dotenv

    load_dotenv()

    console.print("[bold]Validating Configuration...[/bold]\n")

    try:
        config = Config.from_env()
    except (FileNotFoundError, ValueError) as e:
        console.print(f"Settings: [red]✗ {e}[/red]")
        raise typer.Exit(1)

    # Check timezone
    if check_timezone(config.timezone):
        console.print(f"Timezone: [green]✓ {config.timezone or 'system'}[/green]")
    else:
        console.print(f"Timezone: [red]✗ Unknown: {config.timezone}[/red]")

    # Check database
    if Path(config.database_path).exists():
        console.print("Database: [green]✓ Exists[/green]")
    else:
        console.print("Database: [yellow]Not initialized[/yellow]")
        console.print("  Run: [dim]python scripts/setup.py main[/dim]")

    console.print("")
    console.print(config.summary())


if __name__ == "__main__":
    app()
