from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .exceptions import InvalidAmount

CENT = Decimal("0.01")
# Currency columns are DecimalField(max_digits=12, decimal_places=2).
MAX_AMOUNT = Decimal("10000000000")


def quantize(value: Decimal) -> Decimal:
    """Round a Decimal to whole cents."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_money(value, allow_zero=False) -> Decimal:
    """
    Parse a currency amount into a cent-precision Decimal.

    Accepts Decimal, int and numeric strings. Binary floats are rejected
    outright; anything with more than two fractional digits, non-finite, or
    not strictly positive (unless ``allow_zero``) raises InvalidAmount.
    """
    if isinstance(value, bool) or isinstance(value, float) or value is None:
        raise InvalidAmount()
    try:
        amount = Decimal(str(value).strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount()

    if not amount.is_finite() or abs(amount) >= MAX_AMOUNT:
        raise InvalidAmount()
    if amount.as_tuple().exponent < -2 and amount != amount.quantize(CENT):
        raise InvalidAmount("Amounts may have at most two decimal places.")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise InvalidAmount("Amount must be positive.")
    return quantize(amount)


def to_dil(value) -> int:
    """Parse a positive integer DIL amount."""
    if isinstance(value, bool):
        raise InvalidAmount()
    if isinstance(value, int):
        dil = value
    elif isinstance(value, str) and value.strip().isdigit():
        dil = int(value.strip())
    else:
        raise InvalidAmount("DIL amounts must be whole numbers.")
    if dil <= 0:
        raise InvalidAmount("DIL amount must be positive.")
    return dil
