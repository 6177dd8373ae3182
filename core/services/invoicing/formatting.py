"""Value formatting shared by the renderers and the compliance payload."""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP


TWO_PLACES = Decimal('0.01')


def format_amount(value) -> str:
    """Format a monetary value with exactly two fraction digits."""
    amount = Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return f"{amount:.2f}"


def format_quantity(value) -> str:
    """Format a quantity without trailing zeros (2.000 -> 2, 1.50 -> 1.5)."""
    quantity = Decimal(str(value))
    if quantity == quantity.to_integral_value():
        return str(quantity.quantize(Decimal('1')))
    return format(quantity.normalize(), 'f')


def to_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO 8601 UTC timestamp as carried in the compliance payload."""
    return to_utc(value).strftime('%Y-%m-%dT%H:%M:%SZ')


def format_display_date(value: datetime) -> str:
    return value.strftime('%Y-%m-%d %H:%M')
