"""New-transaction form validation and the submission state machine.

Validation is pure. SubmissionFlow performs exactly one side effect per
submit: the injected create call. Navigation is returned to the caller as
a Period rather than performed here.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum

import pandas as pd

from cashboard.dates import year_bounds
from cashboard.domain.models import Category, CreateResult, Money, NewTransaction, Period

MAX_DESCRIPTION_LENGTH = 300

# Largest amount the form accepts, in pounds
MAX_AMOUNT = Decimal("1000000000")
MAX_AMOUNT_PENCE = Money(int(MAX_AMOUNT * 100))

TRANSACTIONS_ROUTE = "/dashboard/transactions"

SUCCESS_MESSAGE = "Transaction created"


class SubmissionState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class InvalidTransitionError(RuntimeError):
    """Raised when submit is called from a state that does not allow it."""


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of one submit: the new state, a user-facing message and where to go next."""

    state: SubmissionState
    message: str
    redirect: Period | None = None
    transaction_id: int | None = None


def parse_amount(value: str | int | float | Decimal | None) -> tuple[Money | None, str | None]:
    """Parse a user-entered amount into pence.

    Args:
        value: Amount in pounds, e.g. "12.50".

    Returns:
        Tuple of (amount_in_pence, error). Exactly one is None.
    """
    if value is None or str(value).strip() == "":
        return None, "Amount is required"

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None, "Amount must be a number"

    if not amount.is_finite():
        return None, "Amount must be a number"
    if amount == 0:
        return None, "Amount must not be zero"
    if abs(amount) > MAX_AMOUNT:
        return None, f"Amount must be at most {MAX_AMOUNT:,}"
    if amount != amount.quantize(Decimal("0.01")):
        return None, "Amount can have at most two decimal places"

    return Money(int(amount * 100)), None


def parse_transaction_date(
    value: str | date | None, today: date | None = None
) -> tuple[date | None, str | None]:
    """Parse a user-entered date.

    ISO dates (YYYY-MM-DD) are read as-is; anything else is handed to
    pandas with day-first precedence (15/07/2024). The year must fall in
    the same window the listing filters accept.

    Returns:
        Tuple of (date, error). Exactly one is None.
    """
    if isinstance(value, date):
        parsed_date = value
    elif value is None or value.strip() == "":
        return None, "Date is required"
    else:
        parsed_date = _parse_date_text(value.strip())
        if parsed_date is None:
            return None, "Date must be a valid calendar date"

    min_year, max_year = year_bounds(today)
    if not min_year <= parsed_date.year <= max_year:
        return None, f"Date must be between {min_year} and {max_year}"
    return parsed_date, None


def _parse_date_text(text: str) -> date | None:
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, OverflowError):
        return None

    if pd.isna(parsed):
        return None
    return parsed.date()


def validate_transaction_form(
    amount: str | int | float | Decimal | None,
    transaction_date: str | date | None,
    category_id: str | int | None,
    description: str | None,
    categories: Iterable[Category],
    today: date | None = None,
) -> tuple[NewTransaction | None, dict[str, str]]:
    """Validate raw form input and build a creation payload.

    Args:
        amount: Amount in pounds; must be a nonzero number.
        transaction_date: Date of the transaction.
        category_id: Id of an existing category.
        description: Optional free text.
        categories: Known categories.
        today: Reference date for the allowed year window; defaults to today.

    Returns:
        Tuple of (payload, errors). payload is None whenever errors is non-empty.
    """
    errors: dict[str, str] = {}

    amount_pence, amount_error = parse_amount(amount)
    if amount_error:
        errors["amount"] = amount_error

    txn_date, date_error = parse_transaction_date(transaction_date, today)
    if date_error:
        errors["transaction_date"] = date_error

    known_ids = {category.id for category in categories}
    try:
        parsed_category = int(str(category_id).strip()) if category_id is not None else None
    except ValueError:
        parsed_category = None
    if parsed_category is None or parsed_category not in known_ids:
        errors["category_id"] = "Please select a valid category"

    text = (description or "").strip()
    if len(text) > MAX_DESCRIPTION_LENGTH:
        errors["description"] = f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"

    if errors:
        return None, errors

    assert amount_pence is not None and txn_date is not None and parsed_category is not None
    payload = NewTransaction(
        amount=amount_pence,
        transaction_date=txn_date.strftime("%Y-%m-%d"),
        category_id=parsed_category,
        description=text,
    )
    return payload, {}


def redirect_period(payload: NewTransaction) -> Period:
    """Get the listing period a submitted transaction belongs to."""
    txn_date = date.fromisoformat(payload.transaction_date)
    return Period(year=txn_date.year, month=txn_date.month)


def listing_location(period: Period) -> str:
    """Build the transactions listing URL for a period."""
    if period.month is None:
        return f"{TRANSACTIONS_ROUTE}?year={period.year}"
    return f"{TRANSACTIONS_ROUTE}?month={period.month}&year={period.year}"


class SubmissionFlow:
    """State machine for submitting a new transaction.

    IDLE -> SUBMITTING -> SUCCESS | FAILED. A FAILED flow may be submitted
    again; SUCCESS is terminal. Resubmitting the same payload after a
    failure is not deduplicated.
    """

    def __init__(self, create: Callable[[NewTransaction], CreateResult]) -> None:
        self._create = create
        self.state = SubmissionState.IDLE
        self.message: str | None = None

    def submit(self, payload: NewTransaction) -> SubmissionOutcome:
        if self.state not in (SubmissionState.IDLE, SubmissionState.FAILED):
            raise InvalidTransitionError(f"Cannot submit while {self.state.value}")

        self.state = SubmissionState.SUBMITTING
        self.message = None

        try:
            result = self._create(payload)
        except Exception:
            self.state = SubmissionState.FAILED
            raise

        if result.error:
            self.state = SubmissionState.FAILED
            self.message = result.message
            return SubmissionOutcome(state=self.state, message=result.message)

        self.state = SubmissionState.SUCCESS
        self.message = SUCCESS_MESSAGE
        return SubmissionOutcome(
            state=self.state,
            message=SUCCESS_MESSAGE,
            redirect=redirect_period(payload),
            transaction_id=result.id,
        )
