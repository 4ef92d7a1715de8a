"""Monetary unit conversion between ERG and nanoERG."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

NANO_ERGS_PER_ERG = 1_000_000_000


def erg_to_nano_erg(erg_amount: float | str | Decimal) -> int:
    """Convert an ERG amount to nanoERGs, truncating sub-nanoERG fractions.

    Floats are converted through their shortest string form so that
    ``0.000000064`` yields ``64`` rather than ``63``.

    Raises:
        ValueError: If the amount is negative, not finite or not a number.
    """
    try:
        amount = Decimal(str(erg_amount)) if isinstance(erg_amount, float) else Decimal(erg_amount)
    except (InvalidOperation, TypeError) as exc:
        msg = f"Not an ERG amount: {erg_amount!r}"
        raise ValueError(msg) from exc
    if not amount.is_finite():
        msg = f"ERG amount must be finite: {erg_amount!r}"
        raise ValueError(msg)
    if amount < 0:
        msg = f"Negative ERG amount: {erg_amount}"
        raise ValueError(msg)
    return int((amount * NANO_ERGS_PER_ERG).to_integral_value(rounding=ROUND_DOWN))


def nano_erg_to_erg(nano_erg_amount: int) -> Decimal:
    """Convert nanoERGs to an exact ERG amount."""
    if nano_erg_amount < 0:
        msg = f"Negative nanoERG amount: {nano_erg_amount}"
        raise ValueError(msg)
    return Decimal(nano_erg_amount) / NANO_ERGS_PER_ERG
