"""Pure display formatting for money amounts.

Amounts stay in pence until they reach this module.
"""

from cashboard.domain.models import Money

DEFAULT_CURRENCY_SYMBOL = "£"


def format_money(amount: Money, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format pence for display with a thousands separator.

    Decimals are shown only when the amount has pence: 123400 -> "£1,234",
    123450 -> "£1,234.50". Negative amounts are prefixed with "-".

    Args:
        amount: Amount in pence.
        symbol: Currency symbol prefix.

    Returns:
        Display string.
    """
    pounds, pence = divmod(abs(amount), 100)
    text = f"{pounds:,}"
    if pence:
        text += f".{pence:02d}"
    # Sign before the symbol ("-£40"), not "£-40"
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{text}"
