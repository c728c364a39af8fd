"""Admin commands for init and listing categories."""

import sqlite3
import sys
from pathlib import Path

from rich.table import Table

from cashboard.commands.common import console, open_service, render_failure
from cashboard.config import create_default_config, get_config_path, load_settings, resolve_db_path
from cashboard.service import QueryError
from cashboard.store.schema import init_database, seed_default_categories


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize database, default categories and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    seeded = seed_default_categories(db_path)
    if seeded:
        console.print(f"[green]✓[/green] Added {seeded} default categories")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize cashboard database and configuration."""
    config_path = get_config_path()
    db_path = resolve_db_path(load_settings(config_path))

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'cashboard init --force' to overwrite[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def categories_command() -> None:
    """List categories with the ids the new-transaction form expects."""
    service, _ = open_service()

    try:
        categories = service.fetch_categories()
    except QueryError:
        render_failure("categories")

    if not categories:
        console.print("[yellow]No categories found[/yellow]")
        return

    table = Table(title="Categories")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Type")

    for category in categories:
        colour = "green" if category.category_type == "income" else "red"
        table.add_row(str(category.id), category.name, f"[{colour}]{category.category_type}[/{colour}]")

    console.print(table)
