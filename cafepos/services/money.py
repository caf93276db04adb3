"""
Money Utilities - Integer-cent arithmetic and sales tax.

Amounts are held as integer minor units (cents). Where a division is
unavoidable (tax, averages) the intermediate is a Decimal and the result is
rounded half-up back to whole cents, so no float ever touches a price.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Optional, Union

from cafepos import config

Number = Union[str, int, float, Decimal]

# 10000 bps = 100.00%
BPS_SCALE = Decimal("10000")

# Rates carry one decimal digit of basis points (887.5 bps = 8.875%)
RATE_PRECISION = Decimal("0.1")

# Tax is computed in tenths of a cent before the final rounding
TAX_SUBUNIT = 10

DEFAULT_TAX_RATE_BPS = Decimal("887.5")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def to_decimal(value: Optional[Number]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Floats go through their string form to keep the written digits.
    Returns Decimal("0") for None or unparseable input.
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_half_up(value: Decimal) -> int:
    """Round a Decimal to the nearest integer, halves away from zero."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def normalize_rate_bps(rate_bps: Optional[Number]) -> Decimal:
    """Quantize a basis-point rate to one decimal digit."""
    return to_decimal(rate_bps).quantize(RATE_PRECISION, rounding=ROUND_HALF_UP)


def line_total_cents(unit_price_cents: int, quantity: int) -> int:
    """Price of one line: unit price times quantity."""
    return unit_price_cents * quantity


def subtotal_cents(items: Iterable) -> int:
    """
    Sum of unit_price_cents * quantity over all items.

    Accepts LineItem objects or plain mappings with the same keys.
    """
    total = 0
    for item in items:
        if isinstance(item, dict):
            price = item.get("unit_price_cents") or 0
            quantity = item.get("quantity") or 0
        else:
            price = item.unit_price_cents
            quantity = item.quantity
        total += line_total_cents(price, quantity)
    return total


def tax_cents(subtotal: int, rate_bps: Optional[Number] = None) -> int:
    """
    Sales tax on a subtotal, in whole cents.

    Two-step rounding keeps the half-basis-point term of rates like 887.5:
    the tax is first rounded in tenths of a cent, then to a cent.

        tax_times_10 = round(subtotal * 10 * rate / 10000)
        tax          = round(tax_times_10 / 10)

    Args:
        subtotal: Subtotal in cents
        rate_bps: Rate in basis points; defaults to the configured rate

    Returns:
        Tax in cents (>= 0 for a non-negative subtotal and rate)
    """
    rate = normalize_rate_bps(config.TAX_RATE_BPS if rate_bps is None else rate_bps)
    scaled_subtotal = Decimal(subtotal) * TAX_SUBUNIT
    tax_times_10 = round_half_up(scaled_subtotal * rate / BPS_SCALE)
    return round_half_up(Decimal(tax_times_10) / TAX_SUBUNIT)


def total_cents(subtotal: int, tax: int) -> int:
    """Grand total: subtotal plus tax."""
    return subtotal + tax


def divide_cents(amount: int, divisor: int) -> int:
    """Integer-cent division rounded half-up; 0 when divisor is 0."""
    if divisor == 0:
        return 0
    return round_half_up(Decimal(amount) / Decimal(divisor))


def parse_amount_to_cents(text: Optional[str]) -> int:
    """
    Parse a cashier-typed amount such as "20", "12.5" or "12,50".

    Blank or invalid input yields 0.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return 0
    normalized = trimmed.replace(",", ".", 1)
    try:
        value = Decimal(normalized)
    except InvalidOperation:
        return 0
    if not value.is_finite():
        return 0
    return round_half_up(value * 100)


def format_cents(cents: Optional[Number], currency: Optional[str] = None) -> str:
    """
    Format an amount in cents with its currency symbol.

    Examples:
        format_cents(1250) -> "$12.50"
        format_cents(0) -> "$0.00"
        format_cents(None) -> ""
    """
    if cents is None:
        return ""
    try:
        amount = cents if isinstance(cents, Decimal) else Decimal(str(cents).strip())
    except InvalidOperation:
        return ""
    if not amount.is_finite():
        return ""

    currency = currency or config.CURRENCY
    major = (amount / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if major < 0 else ""
    formatted = f"{abs(major):,.2f}"

    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{sign}{symbol}{formatted}"
    return f"{currency} {sign}{formatted}"
