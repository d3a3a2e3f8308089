"""
Books Kernel - read side of the bookkeeping ledger.

Companies, ledgers, vouchers and voucher entries, plus the pieces every
report is built from:
- Ledger classification (group label, normal balance, statement section)
- Balance evaluation over an immutable transaction log
- Typed exceptions and structured logging
"""

__version__ = "0.1.0"
