"""Domain models for the books kernel."""

from books_kernel.models.company import Company
from books_kernel.models.ledger import Ledger, LedgerType
from books_kernel.models.voucher import Voucher, VoucherEntry, VoucherType

__all__ = [
    "Company",
    "Ledger",
    "LedgerType",
    "Voucher",
    "VoucherEntry",
    "VoucherType",
]
