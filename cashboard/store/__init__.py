"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from cashboard.store.queries import (
    get_all_categories,
    get_category,
    get_transactions_between,
    get_year_span,
    insert_transaction,
)
from cashboard.store.schema import database_exists, get_db_path, init_database, seed_default_categories

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    "seed_default_categories",
    # Queries
    "get_all_categories",
    "get_category",
    "get_transactions_between",
    "get_year_span",
    "insert_transaction",
]
