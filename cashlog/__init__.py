"""Command-line personal finance log with balances, reports and daily reminders."""

__version__ = "1.0.0"