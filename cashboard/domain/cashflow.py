"""Pure functions for annual cashflow aggregation.

This module contains the functional core for the cashflow view:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in pence (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass

from cashboard.domain.models import Money, Transaction


@dataclass(frozen=True)
class MonthlyCashflow:
    """Immutable income/expense totals for one calendar month."""

    month: int
    total_income: Money
    total_expense: Money


@dataclass(frozen=True)
class CashflowSummary:
    """Immutable annual totals shown beside the monthly breakdown."""

    total_income: Money
    total_expense: Money
    balance: Money


def aggregate_annual_cashflow(transactions: Iterable[Transaction], year: int) -> list[MonthlyCashflow]:
    """Bucket a year's transactions into twelve monthly totals.

    Income and expense are summed separately using each transaction's
    transaction_type; the sign of the amount is not consulted.

    Args:
        transactions: Transactions to aggregate. Those outside `year` are ignored.
        year: Target calendar year.

    Returns:
        Twelve MonthlyCashflow records, January through December.
    """
    income = [0] * 12
    expense = [0] * 12

    for txn in transactions:
        if txn.transaction_date.year != year:
            continue
        idx = txn.transaction_date.month - 1
        if txn.transaction_type == "income":
            income[idx] += txn.amount
        elif txn.transaction_type == "expense":
            expense[idx] += txn.amount

    return [
        MonthlyCashflow(month=idx + 1, total_income=Money(income[idx]), total_expense=Money(expense[idx]))
        for idx in range(12)
    ]


def summarize_cashflow(cashflow: Iterable[MonthlyCashflow]) -> CashflowSummary:
    """Total up a year of monthly cashflow.

    Args:
        cashflow: Monthly cashflow records.

    Returns:
        CashflowSummary with annual income, expense and balance (income - expense).
    """
    months = list(cashflow)
    total_income = Money(sum(m.total_income for m in months))
    total_expense = Money(sum(m.total_expense for m in months))
    return CashflowSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=Money(total_income - total_expense),
    )


def calculate_bar_length(amount: Money, max_amount: Money, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
