"""Idea Board — phone-number accounts and an idea status ledger."""

__version__ = "0.1.0"
