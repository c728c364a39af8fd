"""Transaction query service.

The seam between the views and the store. Views only talk to
TransactionQueryService; rows come back as immutable domain records.
Store failures are logged and raised as QueryError so the views can show
a single failure state.
"""

import logging
import sqlite3
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path
from typing import Any, TypeVar

from cashboard.dates import month_range, year_bounds, year_range
from cashboard.domain.cashflow import MonthlyCashflow, aggregate_annual_cashflow
from cashboard.domain.models import (
    Category,
    CreateResult,
    Money,
    NewTransaction,
    Period,
    Transaction,
    YearsRange,
)
from cashboard.domain.submission import MAX_AMOUNT_PENCE, MAX_DESCRIPTION_LENGTH
from cashboard.store.queries import (
    get_all_categories,
    get_category,
    get_transactions_between,
    get_year_span,
    insert_transaction,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryError(Exception):
    """Raised when the store cannot answer a query."""


def fetch_concurrently(*calls: Callable[[], Any]) -> list[Any]:
    """Run independent fetches on a thread pool and wait for all of them.

    Args:
        calls: Zero-argument callables.

    Returns:
        Results in the same order as `calls`.

    Raises:
        Exception: The first failing call's exception, once all calls have finished.
    """
    if not calls:
        return []
    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        futures = [executor.submit(call) for call in calls]
        return [future.result() for future in futures]


def _to_transaction(row: dict[str, Any]) -> Transaction:
    return Transaction(
        id=row["id"],
        amount=Money(row["amount"]),
        transaction_date=date.fromisoformat(row["transaction_date"]),
        description=row["description"],
        category=row["category"],
        transaction_type=row["transaction_type"],
    )


def _to_category(row: dict[str, Any]) -> Category:
    return Category(id=row["id"], name=row["name"], category_type=row["type"])


class TransactionQueryService:
    """Read and create transactions in one database."""

    def __init__(self, db_path: Path | None = None, today: date | None = None) -> None:
        self.db_path = db_path
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _query(self, what: str, fn: Callable[..., T], *args: Any) -> T:
        try:
            return fn(*args, self.db_path)
        except sqlite3.Error as e:
            logger.exception("Failed to fetch %s", what)
            raise QueryError(f"Failed to fetch {what}: {e}") from e

    def fetch_transactions_for_month(self, period: Period) -> list[Transaction]:
        """Get all transactions dated within a month, newest first."""
        since, until, _ = month_range(period)
        rows = self._query("transactions", get_transactions_between, since, until)
        logger.debug("Fetched %d transactions for %s", len(rows), since[:7])
        return [_to_transaction(row) for row in rows]

    def fetch_transactions_for_year(self, year: int) -> list[Transaction]:
        """Get all transactions dated within a calendar year, newest first."""
        since, until = year_range(year)
        rows = self._query("transactions", get_transactions_between, since, until)
        logger.debug("Fetched %d transactions for %d", len(rows), year)
        return [_to_transaction(row) for row in rows]

    def fetch_annual_cashflow(self, year: int) -> list[MonthlyCashflow]:
        """Get twelve months of income/expense totals for a year."""
        return aggregate_annual_cashflow(self.fetch_transactions_for_year(year), year)

    def fetch_years_range(self) -> YearsRange:
        """Get the span of years to offer in filters.

        The range always includes the current year, so an empty database
        still offers one year to pick.
        """
        min_year, max_year = self._query("years range", get_year_span)
        current = self.today.year
        return YearsRange(
            min_year=min(min_year, current) if min_year is not None else current,
            max_year=max(max_year, current) if max_year is not None else current,
        )

    def fetch_categories(self) -> list[Category]:
        """Get all categories, income first."""
        return [_to_category(row) for row in self._query("categories", get_all_categories)]

    def create_transaction(self, payload: NewTransaction) -> CreateResult:
        """Create a transaction.

        Invalid payloads and store failures are reported in the result,
        never raised.

        Args:
            payload: Normalized creation payload.

        Returns:
            CreateResult with error=True and a message, or the new transaction id.
        """
        if payload.amount == 0:
            return CreateResult(error=True, message="Amount must not be zero")
        if abs(payload.amount) > MAX_AMOUNT_PENCE:
            return CreateResult(error=True, message="Amount is too large")
        if len(payload.description) > MAX_DESCRIPTION_LENGTH:
            return CreateResult(error=True, message="Description is too long")
        try:
            txn_date = date.fromisoformat(payload.transaction_date)
        except ValueError:
            return CreateResult(error=True, message="Invalid transaction date")
        min_year, max_year = year_bounds(self.today)
        if not min_year <= txn_date.year <= max_year:
            return CreateResult(error=True, message="Invalid transaction date")

        try:
            category = get_category(payload.category_id, self.db_path)
            if category is None:
                return CreateResult(error=True, message="Invalid category")

            new_id = insert_transaction(
                payload.transaction_date,
                payload.description,
                payload.amount,
                payload.category_id,
                self.db_path,
            )
        except (sqlite3.Error, OverflowError):
            logger.exception("Failed to create transaction dated %s", payload.transaction_date)
            return CreateResult(error=True, message="An error occurred while creating the transaction")

        logger.info("Created transaction %d dated %s", new_id, payload.transaction_date)
        return CreateResult(error=False, message="Transaction created", id=new_id)
