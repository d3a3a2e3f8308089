"""
Module: books_kernel.db.types
Responsibility: Money precision and the rounding helper.
    Centralizes precision and rounding so that every model, pure function and
    report uses identical definitions.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    selectors/ and modules.  MUST NOT import from any of those layers.

Invariants enforced:
    - No floats anywhere.  All monetary amounts use Decimal.
    - round_money() is the ONLY sanctioned rounding function, and it is
      applied at presentation time only; balance arithmetic never rounds.
"""

from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import Numeric

# Voucher and ledger amounts: 18 digits, 2 decimal places
MONEY_PRECISION = 18
MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP


def money_column_type() -> Numeric:
    """Column type of every stored amount."""
    return Numeric(MONEY_PRECISION, MONEY_DECIMAL_PLACES)


def round_money(amount: Decimal, places: int = MONEY_DECIMAL_PLACES) -> Decimal:
    """
    Round an amount for display.

    Args:
        amount: The amount to round.
        places: Number of decimal places (default 2).

    Returns:
        Rounded Decimal (ROUND_HALF_UP).
    """
    quantizer = Decimal(10) ** -places
    return amount.quantize(quantizer, rounding=DEFAULT_ROUNDING)
