"""Annual cashflow view."""

from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table

from cashboard.commands.common import console, open_service, render_failure
from cashboard.dates import format_month_label, normalize_year
from cashboard.domain.cashflow import (
    CashflowSummary,
    MonthlyCashflow,
    calculate_bar_length,
    summarize_cashflow,
)
from cashboard.domain.formatting import DEFAULT_CURRENCY_SYMBOL, format_money
from cashboard.domain.models import Money, YearsRange
from cashboard.service import QueryError, fetch_concurrently

BAR_WIDTH = 20


def build_cashflow_table(year: int, cashflow: list[MonthlyCashflow], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> Table:
    """Build the month-by-month income/expense table with histogram bars.

    Args:
        year: Year being shown.
        cashflow: Twelve monthly records, January first.
        symbol: Currency symbol for amounts.

    Returns:
        Rich table with one row per month.
    """
    max_amount = Money(max([m.total_income for m in cashflow] + [m.total_expense for m in cashflow] + [0]))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")
    table.add_column("", no_wrap=True)

    for month in cashflow:
        income_bar = "█" * calculate_bar_length(month.total_income, max_amount, BAR_WIDTH)
        expense_bar = "█" * calculate_bar_length(month.total_expense, max_amount, BAR_WIDTH)
        table.add_row(
            format_month_label(year, month.month),
            format_money(month.total_income, symbol),
            format_money(month.total_expense, symbol),
            f"[green]{income_bar}[/green]\n[red]{expense_bar}[/red]",
        )

    return table


def build_summary_panel(summary: CashflowSummary, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> Panel:
    """Build the annual totals side panel."""
    balance_colour = "green" if summary.balance >= 0 else "red"
    body = (
        f"[bold]Income[/bold]\n[green]{format_money(summary.total_income, symbol)}[/green]\n\n"
        f"[bold]Expenses[/bold]\n[red]{format_money(summary.total_expense, symbol)}[/red]\n\n"
        f"[bold]Balance[/bold]\n[{balance_colour}]{format_money(summary.balance, symbol)}[/{balance_colour}]"
    )
    return Panel(body, title="Totals", width=28)


def render_cashflow_page(
    year: int,
    cashflow: list[MonthlyCashflow],
    years_range: YearsRange,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> None:
    """Render the cashflow page for a year.

    Args:
        year: Year being shown.
        cashflow: Twelve monthly records, January first.
        years_range: Years available in the filters.
        symbol: Currency symbol for amounts.
    """
    years = ", ".join(str(y) for y in years_range.years)
    console.print(f"[bold cyan]Cashflow {year}[/bold cyan]")
    console.print(f"[dim]Filters: --year {year}  (years: {years})[/dim]\n")

    summary = summarize_cashflow(cashflow)
    if summary.total_income == 0 and summary.total_expense == 0:
        console.print(f"[yellow]There are no transactions for {year}[/yellow]\n")

    console.print(Columns([build_cashflow_table(year, cashflow, symbol), build_summary_panel(summary, symbol)]))


def cashflow_command(year: str | None = None) -> None:
    """Show monthly income and expenses for a year. A malformed year falls back to the current year."""
    service, settings = open_service()
    period = normalize_year(year)

    try:
        cashflow, years_range = fetch_concurrently(
            lambda: service.fetch_annual_cashflow(period.year),
            service.fetch_years_range,
        )
    except QueryError:
        render_failure("cashflow")

    render_cashflow_page(period.year, cashflow, years_range, settings["currency_symbol"])
