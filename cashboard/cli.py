"""CLI entry point for cashboard."""

import typer

from cashboard.commands.admin import categories_command, init_command
from cashboard.commands.cashflow import cashflow_command
from cashboard.commands.transactions import new_command, transactions_command
from cashboard.config import load_settings
from cashboard.log import configure_logging

app = typer.Typer(
    name="cashboard",
    help="cashboard - A personal finance dashboard for your transactions and cashflow",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    """cashboard - A personal finance dashboard for your transactions and cashflow."""
    configure_logging("DEBUG" if verbose else load_settings().get("log_level", "WARNING"))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config and re-run database setup"),
) -> None:
    """Initialize cashboard database, default categories and configuration."""
    init_command(force)


@app.command()
def categories() -> None:
    """List your categories and their ids."""
    categories_command()


@app.command()
def transactions(
    year: str = typer.Option(None, "--year", help="Year to show (default: current year)"),
    month: str = typer.Option(None, "--month", help="Month to show, 1-12 (default: current month)"),
) -> None:
    """List your transactions for a month."""
    transactions_command(year, month)


@app.command()
def cashflow(
    year: str = typer.Option(None, "--year", help="Year to show (default: current year)"),
) -> None:
    """Show your monthly income and expenses for a year."""
    cashflow_command(year)


@app.command(name="new")
def new(
    amount: str = typer.Option(None, "--amount", help="Amount in £, e.g. 12.50"),
    date: str = typer.Option(None, "--date", help="Transaction date (YYYY-MM-DD or DD/MM/YYYY)"),
    category: str = typer.Option(None, "--category", help="Category id (see 'cashboard categories')"),
    description: str = typer.Option(None, "--description", help="Optional description"),
) -> None:
    """Create a new transaction. Missing fields are prompted for."""
    new_command(amount, date, category, description)


if __name__ == "__main__":
    app()
