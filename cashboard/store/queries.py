"""Database query functions."""

import sqlite3
from pathlib import Path
from typing import Any

from cashboard.domain.models import Money
from cashboard.store.schema import get_db_path

TRANSACTION_COLUMNS = """
    t.id, t.transaction_date, t.description, t.amount,
    c.name AS category, c.type AS transaction_type
"""


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def get_transactions_between(
    since_date: str, until_date: str, db_path: Path | None = None
) -> list[dict[str, Any]]:
    """Get transactions dated in [since_date, until_date).

    Args:
        since_date: Start date (YYYY-MM-DD), inclusive.
        until_date: End date (YYYY-MM-DD), exclusive.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of transaction dictionaries ordered by date descending, newest entries first.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"""
            SELECT {TRANSACTION_COLUMNS}
            FROM transactions t
            JOIN categories c ON c.id = t.category_id
            WHERE t.transaction_date >= ? AND t.transaction_date < ?
            ORDER BY t.transaction_date DESC, t.id DESC
            """,
            (since_date, until_date),
        )
        rows = cursor.fetchall()
        return [dict(row) for row in rows]


def get_year_span(db_path: Path | None = None) -> tuple[int | None, int | None]:
    """Get the earliest and latest years with transactions.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Tuple of (min_year, max_year), both None when there are no transactions.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT CAST(strftime('%Y', MIN(transaction_date)) AS INTEGER),
                   CAST(strftime('%Y', MAX(transaction_date)) AS INTEGER)
            FROM transactions
            """
        )
        row = cursor.fetchone()
        if row is None:
            return None, None
        return row[0], row[1]


def get_all_categories(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all categories.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of category dictionaries (id, name, type) sorted by type then name.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, name, type FROM categories ORDER BY type DESC, name")
        return [dict(row) for row in cursor.fetchall()]


def get_category(category_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a single category by id.

    Returns:
        Category dictionary, or None if no category has that id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, name, type FROM categories WHERE id = ?", (category_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def insert_transaction(
    transaction_date: str,
    description: str,
    amount: Money,
    category_id: int,
    db_path: Path | None = None,
) -> int:
    """Insert a transaction.

    No duplicate check is made: submitting the same transaction twice stores it twice.

    Args:
        transaction_date: Transaction date (YYYY-MM-DD).
        description: Transaction description.
        amount: Transaction amount in pence.
        category_id: Id of an existing category.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Id of the new transaction.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO transactions (transaction_date, description, amount, category_id) VALUES (?, ?, ?, ?)",
                (transaction_date, description, amount, category_id),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise
