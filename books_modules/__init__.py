"""
Books Modules.

Thin orchestration layers over the Books Kernel.

Modules:
- Reporting: Balance sheet, profit & loss, trial balance, ledger statement,
  day book
"""
