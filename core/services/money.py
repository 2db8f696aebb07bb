"""
Money helpers for Naira amounts.

Prices, line totals and order totals are Decimal everywhere inside the hub.
Floats appear only when a value leaves the process (JSON responses, the
orders table).
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union

KOBO = Decimal("0.01")
NAIRA = Decimal("1")

DEFAULT_CURRENCY = "NGN"

CURRENCY_SYMBOLS = {
    "NGN": "₦",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

Number = Union[str, int, float, Decimal]
ZERO = Decimal("0")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Coerce a price-like value to Decimal.

    Floats go through ``str`` so 0.1 stays 0.1. None and unparsable input
    become 0.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def round_money(value: Number, to_int: bool = False) -> Decimal:
    """Round to kobo, or to whole Naira with ``to_int``. Halves round up (862.5 -> 863)."""
    return to_decimal(value).quantize(NAIRA if to_int else KOBO, rounding=ROUND_HALF_UP)


def normalize(value: Number) -> Decimal:
    """Drop trailing zeros without exponent notation (1500.0 -> 1500, 1312.50 -> 1312.5)."""
    amount = to_decimal(value)
    if amount == amount.to_integral_value():
        return amount.quantize(NAIRA)
    return amount.normalize()


def format_money(value: Number, currency: str = DEFAULT_CURRENCY) -> str:
    """Display form: ₦1,950 for whole amounts, ₦1,312.50 otherwise."""
    amount = to_decimal(value)
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    if amount == amount.to_integral_value():
        return f"{symbol}{int(amount):,}"
    return f"{symbol}{round_money(amount):,.2f}"


def to_float(value: Number) -> float:
    """Boundary conversion for JSON and database rows."""
    return float(to_decimal(value))


def add(a: Number, b: Number) -> Decimal:
    return to_decimal(a) + to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    return to_decimal(value) * to_decimal(factor)


def total_of(amounts: Iterable[Number]) -> Decimal:
    """Sum of amounts; 0 for an empty iterable."""
    return sum((to_decimal(amount) for amount in amounts), ZERO)
