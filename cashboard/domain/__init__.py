"""Domain models and pure logic for cashboard.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from cashboard.domain.models import (
    Category,
    CreateResult,
    Money,
    NewTransaction,
    Period,
    Transaction,
    TransactionType,
    YearsRange,
)

__all__ = [
    "Category",
    "CreateResult",
    "Money",
    "NewTransaction",
    "Period",
    "Transaction",
    "TransactionType",
    "YearsRange",
]
