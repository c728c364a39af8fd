"""Helpers shared by the view commands."""

import sys
from typing import Any, NoReturn

from rich.console import Console

from cashboard.config import load_settings, resolve_db_path
from cashboard.service import TransactionQueryService
from cashboard.store.schema import database_exists

console = Console()


def open_service() -> tuple[TransactionQueryService, dict[str, Any]]:
    """Load settings and open the query service, exiting if there is no database.

    Returns:
        Tuple of (service, settings).
    """
    settings = load_settings()
    db_path = resolve_db_path(settings)

    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'cashboard init' first.[/red]", style="bold")
        sys.exit(1)

    return TransactionQueryService(db_path), settings


def render_failure(what: str) -> NoReturn:
    """Render the generic failure state for a view and exit."""
    console.print(f"[red]Something went wrong loading {what}. Please try again.[/red]", style="bold")
    sys.exit(1)
