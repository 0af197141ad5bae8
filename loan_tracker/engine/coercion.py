"""Lenient numeric coercion for loan fields.

Persisted records may come from older schema versions, so every numeric
field read by the engine goes through these helpers. Anything that is
not a finite number of sane magnitude becomes zero; nothing here raises.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")

# Amounts outside 1e-18..1e18 (by adjusted exponent) are read as zero, which
# keeps sums and EMI quotients well inside the decimal context limits.
MAX_EXPONENT = 18


def to_amount(value: Any) -> Decimal:
    """Coerce a monetary value to ``Decimal``, falling back to zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return ZERO
    else:
        return ZERO
    if not amount.is_finite() or amount.is_zero():
        return ZERO
    if abs(amount.adjusted()) > MAX_EXPONENT:
        return ZERO
    return amount


def to_months(value: Any) -> int:
    """Coerce a month count to ``int``, truncating fractions toward zero."""
    return int(to_amount(value))
