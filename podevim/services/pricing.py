"""Tiered parking price calculation."""

from datetime import datetime
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union

from podevim.db.types import as_utc

HOURS_PER_DAY = Decimal(24)
HOURS_PER_MONTH = Decimal(720)  # 30 days
CENT = Decimal("0.01")

Number = Union[Decimal, float, int]


def _as_decimal(value: Optional[Number]) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def duration_hours(start: datetime, end: datetime) -> float:
    """Fractional hours between two instants."""
    return (as_utc(end) - as_utc(start)).total_seconds() / 3600


def calculate_price(spot: Any, hours: Number) -> Decimal:
    """
    Price a stay of ``hours`` on ``spot``.

    The hourly rate is the fallback. From 24 hours on, a spot with a daily
    rate charges per started day; from 720 hours on, a spot with a monthly
    rate charges per started month. The highest tier that applies wins.
    Only the unit count is rounded up; thresholds compare raw hours.

    ``spot`` is anything exposing ``price_hour``, ``price_day`` and
    ``price_month``.
    """
    hours = _as_decimal(hours)
    price_day = _as_decimal(spot.price_day)
    price_month = _as_decimal(spot.price_month)

    price = _as_decimal(spot.price_hour) * hours

    if hours >= HOURS_PER_DAY and price_day is not None:
        days = (hours / HOURS_PER_DAY).to_integral_value(rounding=ROUND_CEILING)
        price = price_day * days

    if hours >= HOURS_PER_MONTH and price_month is not None:
        months = (hours / HOURS_PER_MONTH).to_integral_value(rounding=ROUND_CEILING)
        price = price_month * months

    return price.quantize(CENT, rounding=ROUND_HALF_UP)
