"""Selectors for the books kernel (read side)."""

from books_kernel.selectors.ledger_selector import LedgerSelector

__all__ = [
    "LedgerSelector",
]
