"""
Money Utilities - Safe Decimal operations for monetary values.

Service prices are kept as Decimal end to end; floats only appear at
presentation boundaries.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union

Number = Union[str, int, float, Decimal, None]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

# Precision for integer currencies (NGN is displayed without kobo)
INTEGER_PRECISION = Decimal("1")

DEFAULT_CURRENCY = "NGN"

CURRENCY_SYMBOLS = {
    "NGN": "₦",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

INTEGER_CURRENCIES = {"NGN"}


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Via str to avoid binary float artifacts
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_price(value: Number) -> Decimal:
    """
    Convert a stored price to Decimal, rejecting anything that is not a finite number.

    Unlike to_decimal this never substitutes zero, so a damaged catalog row or
    snapshot cannot turn into a free service.

    Raises:
        ValueError: If value is None, a bool, non-numeric, NaN or infinite
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"price must be a number, got {value!r}")

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"price must be a number, got {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"price must be finite, got {value!r}")
    return result


def round_money(value: Number, to_int: bool = False) -> Decimal:
    """Round monetary value to cents, or to whole units when to_int is set."""
    decimal_value = to_decimal(value)
    precision = INTEGER_PRECISION if to_int else MONEY_PRECISION
    return decimal_value.quantize(precision, rounding=ROUND_HALF_UP)


def format_money(value: Number, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (NGN, USD, EUR, GBP)

    Returns:
        Formatted string, e.g. "₦5,000" or "$12.50"
    """
    decimal_value = to_decimal(value)
    symbol = CURRENCY_SYMBOLS.get(currency, currency)

    if currency in INTEGER_CURRENCIES:
        formatted = f"{int(round_money(decimal_value, to_int=True)):,}"
    else:
        formatted = f"{round_money(decimal_value):,.2f}"

    return f"{symbol}{formatted}"


def to_float(value: Number) -> float:
    """Convert to float. Use only at API/presentation boundaries."""
    return float(to_decimal(value))


def add(a: Number, b: Number) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def total(values: Iterable[Number]) -> Decimal:
    """Sum monetary values; an empty iterable totals Decimal("0")."""
    result = Decimal("0")
    for value in values:
        result = add(result, value)
    return result
