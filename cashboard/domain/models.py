"""Domain types for cashboard.

These types are the vocabulary shared by the functional core:
- Money: Amount in pence (minor units)
- TransactionType: "income" or "expense", taken from the category
- Transaction, Category: immutable records fetched from the store
- Period, YearsRange: reporting windows and filter bounds
"""

from dataclasses import dataclass
from datetime import date
from typing import Literal, NewType

# Money amounts are stored as pence (minor units) to avoid floating point errors
Money = NewType("Money", int)

TransactionType = Literal["income", "expense"]

TRANSACTION_TYPES: tuple[TransactionType, ...] = ("income", "expense")


@dataclass(frozen=True)
class Period:
    """A reporting window: a year, optionally narrowed to one month (1-12)."""

    year: int
    month: int | None = None


@dataclass(frozen=True)
class YearsRange:
    """Span of years for which transactions exist."""

    min_year: int
    max_year: int

    @property
    def years(self) -> list[int]:
        """Years in the range, newest first (the order filter controls list them)."""
        return list(range(self.max_year, self.min_year - 1, -1))


@dataclass(frozen=True)
class Category:
    """Immutable transaction category."""

    id: int
    name: str
    category_type: TransactionType


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record as fetched from the store."""

    id: int
    amount: Money
    transaction_date: date
    description: str
    category: str
    transaction_type: TransactionType


@dataclass(frozen=True)
class NewTransaction:
    """Normalized payload for creating a transaction.

    transaction_date is always formatted as YYYY-MM-DD.
    """

    amount: Money
    transaction_date: str
    category_id: int
    description: str = ""


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a create call: either an error message or the new id."""

    error: bool
    message: str = ""
    id: int | None = None
