"""Value coercion shared by the tariff extractors."""

import math
import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_VALIDITY_DAYS = 30

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_NUMBER_PATTERN = re.compile(r"-?(?:\d[\d,]*(?:\.\d+)?|(?<![A-Za-z])\.\d+)")

# Accepted when persisting dates that did not come out of the extractors
_DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y", "%d/%m/%Y", "%Y/%m/%d", "%d %b %Y", "%d %B %Y")


def today_iso() -> str:
    return date.today().isoformat()


def default_end_date() -> str:
    """ISO date ``DEFAULT_VALIDITY_DAYS`` days from today."""
    return (date.today() + timedelta(days=DEFAULT_VALIDITY_DAYS)).isoformat()


def parse_number(value: Any) -> float:
    """Parse a rate, percentage or fee into a non-negative float.

    Strings keep only their first number, with thousands separators removed,
    so currency prefixes such as "Rs.", "INR" or the rupee sign are ignored.
    Negative and unparseable values become 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        if math.isnan(number) or math.isinf(number) or number < 0:
            return 0.0
        return number

    match = _NUMBER_PATTERN.search(str(value))
    if not match:
        return 0.0
    try:
        number = float(match.group(0).replace(",", ""))
    except ValueError:
        return 0.0
    return number if number > 0 else 0.0


def coerce_text(value: Any) -> str:
    """Render a scalar as stripped text; None and containers become ""."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    return str(value).strip()


def flatten_meal_plan(value: Any) -> str:
    """Collapse a meal plan into one descriptive string.

    A mapping such as ``{"Breakfast": True, "Lunch": False, "Dinner": True}``
    becomes ``"Breakfast, Dinner"``: the truthy keys in their original order.
    A list is joined the same way.
    """
    if isinstance(value, dict):
        return ", ".join(str(meal) for meal, included in value.items() if included)
    if isinstance(value, (list, tuple)):
        return ", ".join(str(meal) for meal in value if meal)
    return coerce_text(value)


def valid_iso_date(value: Any, fallback: str) -> str:
    """Return ``value`` if it is a YYYY-MM-DD string, else ``fallback``."""
    text = coerce_text(value)
    return text if ISO_DATE_PATTERN.match(text) else fallback


def to_date(value: Any) -> date:
    """Convert an extracted date into a ``date``.

    Raises:
        ValueError: If the value matches none of the accepted formats
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = coerce_text(value)
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {value!r}")


def to_decimal(value: float, places: str = "0.01") -> Decimal:
    """Convert a float to a Decimal rounded for a NUMERIC column."""
    try:
        return Decimal(str(value)).quantize(Decimal(places))
    except (InvalidOperation, ValueError):
        LOGGER.warning(f"Failed to convert '{value}' to Decimal, storing 0")
        return Decimal("0").quantize(Decimal(places))


def optional_float(value: Optional[Decimal]) -> float:
    return float(value) if value is not None else 0.0
