"""Transaction views: monthly listing and the new-transaction form."""

import sys
from datetime import date
from typing import Any

import typer
from rich.columns import Columns
from rich.markup import escape
from rich.table import Table

from cashboard.commands.common import console, open_service, render_failure
from cashboard.dates import format_month_label, format_ordinal_date, normalize_period
from cashboard.domain.formatting import DEFAULT_CURRENCY_SYMBOL, format_money
from cashboard.domain.models import Category, Period, Transaction, YearsRange
from cashboard.domain.submission import (
    SubmissionFlow,
    SubmissionState,
    listing_location,
    validate_transaction_form,
)
from cashboard.service import QueryError, TransactionQueryService, fetch_concurrently

FORM_LABELS = {
    "amount": "Amount",
    "transaction_date": "Date",
    "category_id": "Category",
    "description": "Description",
}


def render_filters(period: Period, years_range: YearsRange) -> None:
    """Render the current filter values and the years available to pick from."""
    years = ", ".join(str(y) for y in years_range.years)
    month = f"  --month {period.month}" if period.month is not None else ""
    console.print(f"[dim]Filters: --year {period.year}{month}  (years: {years})[/dim]")


def build_transactions_table(transactions: list[Transaction], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> Table:
    """Build the transaction listing table.

    Args:
        transactions: Transactions in display order.
        symbol: Currency symbol for amounts.

    Returns:
        Rich table with one row per transaction.
    """
    table = Table()
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Type")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("ID", style="dim", justify="right")

    for txn in transactions:
        colour = "green" if txn.transaction_type == "income" else "red"
        table.add_row(
            format_ordinal_date(txn.transaction_date),
            escape(txn.description),
            f"[{colour}]{txn.transaction_type.capitalize()}[/{colour}]",
            escape(txn.category),
            format_money(txn.amount, symbol),
            str(txn.id),
        )

    return table


def render_transactions_page(
    period: Period,
    transactions: list[Transaction],
    years_range: YearsRange,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> None:
    """Render the monthly transactions page.

    Args:
        period: Month being shown.
        transactions: That month's transactions, newest first.
        years_range: Years available in the filters.
        symbol: Currency symbol for amounts.
    """
    assert period.month is not None
    console.print(f"[bold cyan]{format_month_label(period.year, period.month)} Transactions[/bold cyan]")
    render_filters(period, years_range)
    console.print("[dim]New transaction: cashboard new[/dim]")

    if not transactions:
        console.print("\n[yellow]There are no transactions for this month[/yellow]")
        return

    console.print(build_transactions_table(transactions, symbol))


def show_transactions(service: TransactionQueryService, period: Period, symbol: str) -> None:
    """Fetch and render one month of transactions, or the failure state."""
    try:
        transactions, years_range = fetch_concurrently(
            lambda: service.fetch_transactions_for_month(period),
            service.fetch_years_range,
        )
    except QueryError:
        render_failure("transactions")

    render_transactions_page(period, transactions, years_range, symbol)


def transactions_command(year: str | None = None, month: str | None = None) -> None:
    """List transactions for a month. Malformed year/month fall back to the current month."""
    service, settings = open_service()
    period = normalize_period(year, month)
    show_transactions(service, period, settings["currency_symbol"])


def render_form_errors(errors: dict[str, str]) -> None:
    """Render validation errors, one per field."""
    console.print("[red]Please fix the following:[/red]")
    for field, message in errors.items():
        console.print(f"  [red]•[/red] {FORM_LABELS.get(field, field)}: {message}")


def prompt_transaction_form(categories: list[Category], form: dict[str, Any]) -> dict[str, Any]:
    """Prompt for each form field, offering previous values as defaults.

    Args:
        categories: Categories to choose from.
        form: Current form values; None means not yet entered.

    Returns:
        New form values.
    """
    category_items = [f"{c.id}. {c.name} ({c.category_type})" for c in categories]
    console.print("[cyan]Categories:[/cyan]")
    console.print(Columns(category_items, equal=True, expand=False, column_first=True))

    def default(field: str, fallback: Any = None) -> Any:
        value = form.get(field)
        return fallback if value is None else str(value)

    return {
        "amount": typer.prompt("Amount", default=default("amount")),
        "transaction_date": typer.prompt(
            "Date (YYYY-MM-DD)", default=default("transaction_date", date.today().isoformat())
        ),
        "category_id": typer.prompt("Category", default=default("category_id")),
        "description": typer.prompt("Description", default=default("description", ""), show_default=False),
    }


def new_command(
    amount: str | None = None,
    transaction_date: str | None = None,
    category: str | None = None,
    description: str | None = None,
) -> None:
    """Create a transaction, then show the listing for its month.

    Missing required fields are prompted for. When prompting, validation
    errors and failed submissions return to the form; otherwise they exit
    with status 1.
    """
    service, settings = open_service()
    symbol = settings["currency_symbol"]

    try:
        categories = service.fetch_categories()
    except QueryError:
        render_failure("categories")

    if not categories:
        console.print("[yellow]No categories yet. Run 'cashboard init' to add the defaults.[/yellow]")
        sys.exit(1)

    interactive = amount is None or transaction_date is None or category is None
    form: dict[str, Any] = {
        "amount": amount,
        "transaction_date": transaction_date,
        "category_id": category,
        "description": description,
    }
    flow = SubmissionFlow(service.create_transaction)

    while True:
        if interactive:
            form = prompt_transaction_form(categories, form)

        payload, errors = validate_transaction_form(**form, categories=categories)
        if payload is None:
            render_form_errors(errors)
            if interactive:
                continue
            sys.exit(1)

        outcome = flow.submit(payload)
        if outcome.state is SubmissionState.SUCCESS:
            break

        console.print(f"[red]Error: {outcome.message}[/red]")
        if not interactive or not typer.confirm("Edit and try again?", default=True):
            sys.exit(1)

    assert outcome.redirect is not None
    console.print(f"[green]✓[/green] {outcome.message}")
    console.print(f"[dim]→ {listing_location(outcome.redirect)}[/dim]\n")
    show_transactions(service, outcome.redirect, symbol)
