"""cashboard - A personal finance dashboard for your transactions and cashflow."""

__version__ = "0.1.0"
