"""Monetary arithmetic for reservation fees.

All amounts are ``Decimal`` and every public result is quantized to two
fractional digits with ROUND_HALF_UP, so results never depend on binary
floating point or on the current decimal context's rounding mode.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

MONEY_QUANT = Decimal("0.01")
LATE_FEE_RATE = Decimal("0.15")  # 15% of the book price per day late
ZERO_MONEY = Decimal("0.00")


def to_decimal(value: Decimal | int | str | float) -> Decimal:
    """Convert a price-like value to ``Decimal``.

    Floats are converted through ``str`` so ``15.99`` stays ``15.99``
    instead of its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(amount: Decimal | int | str | float) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(amount).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def rental_fee(daily_rate: Decimal, rental_days: int) -> Decimal:
    """Charge for renting at ``daily_rate`` for ``rental_days`` days."""
    return round_money(to_decimal(daily_rate) * Decimal(rental_days))


def late_fee(
    book_price: Decimal,
    days_late: int,
    rate: Decimal = LATE_FEE_RATE,
) -> Decimal:
    """Late charge: ``rate`` of the book price for each day late.

    Parameters
    ----------
    book_price : Decimal
        Reference price of the book.
    days_late : int
        Whole days past the expected return date. Must be positive.
    rate : Decimal
        Daily fraction of the book price (default 15%).

    Returns
    -------
    Decimal
        Late fee rounded to cents.

    Raises
    ------
    ValueError
        If ``days_late`` is not positive. Callers branch on lateness
        before asking for a fee.
    """
    if days_late <= 0:
        raise ValueError(f"days_late must be positive, got {days_late}")
    return round_money(to_decimal(book_price) * to_decimal(rate) * Decimal(days_late))


def days_between(start: date, end: date) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if ``end`` is earlier)."""
    return (end - start).days
