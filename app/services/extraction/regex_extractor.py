"""Label-based heuristic extraction from free text.

Each field has one case-insensitive pattern: a label word, an optional colon
or dash, then a captured run of words. Runs stop at line breaks and commas so
that ``"Hotel: Grand Plaza, City: Pune"`` yields two separate values.
"""

import re
from typing import Optional

from app.models.tariff import HotelTariff
from app.services.extraction.normalization import default_end_date, parse_number, today_iso
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

_SEPARATOR = r"\s*[:\-]?\s*"
_WORDS = r"([\w&][\w& \t]*)"

HOTEL_NAME_PATTERN = re.compile(
    r"\b(?:hotel|property|accommodation|resort)(?:\s*name)?\b" + _SEPARATOR + _WORDS, re.IGNORECASE
)
CITY_PATTERN = re.compile(r"\b(?:city|location)\b" + _SEPARATOR + r"(\w[\w \t]*)", re.IGNORECASE)
CATEGORY_PATTERN = re.compile(
    r"\b(?:category|star|rating)\b" + _SEPARATOR + r"([\w\-][\w\- \t]*)", re.IGNORECASE
)
BASE_RATE_PATTERN = re.compile(
    r"\b(?:rate|price|cost|amount)\b" + _SEPARATOR + r"(?:Rs\.?|₹|INR)?\s*(\d[\d,\.]*)", re.IGNORECASE
)
GST_PATTERN = re.compile(r"\b(?:gst|tax)\b" + _SEPARATOR + r"(\d+(?:\.\d+)?)\s*%", re.IGNORECASE)
VENDOR_PATTERN = re.compile(
    r"\b(?:vendor|provider|agency|travel\s*agent)\b" + _SEPARATOR + _WORDS, re.IGNORECASE
)
MEAL_PLAN_PATTERN = re.compile(
    r"\b(?:meal|board)(?:\s*(?:plan|basis))?\b" + _SEPARATOR + _WORDS, re.IGNORECASE
)
SEASON_PATTERN = re.compile(r"\bseason\b" + _SEPARATOR + _WORDS, re.IGNORECASE)


def _search(pattern: re.Pattern, content: str) -> str:
    match = pattern.search(content)
    if not match:
        return ""
    return match.group(1).strip()


def extract_with_regex(content: str) -> Optional[HotelTariff]:
    """Extract a tariff from plain text using label patterns.

    Missing fields default to "" or 0; the service fee is never matched and
    stays 0. Dates are not read from the text: the validity window defaults
    to today through today plus 30 days.

    Returns:
        The tariff (possibly mostly empty), or None if extraction raised
    """
    try:
        tariff = HotelTariff(
            hotel_name=_search(HOTEL_NAME_PATTERN, content),
            vendor=_search(VENDOR_PATTERN, content),
            city=_search(CITY_PATTERN, content),
            category=_search(CATEGORY_PATTERN, content),
            base_rate=parse_number(_search(BASE_RATE_PATTERN, content)),
            gst_percent=parse_number(_search(GST_PATTERN, content)),
            service_fee=0.0,
            meal_plan=_search(MEAL_PLAN_PATTERN, content),
            season=_search(SEASON_PATTERN, content),
            start_date=today_iso(),
            end_date=default_end_date(),
        )
        LOGGER.debug(f"Regex extraction produced {tariff}")
        return tariff

    except Exception as e:
        LOGGER.error(f"Error extracting with regex: {str(e)}", exc_info=True)
        return None


def is_useful(tariff: Optional[HotelTariff]) -> bool:
    """Whether a regex result is worth keeping.

    Requires a hotel name and either a city or a positive base rate.
    """
    if tariff is None:
        return False
    return bool(tariff.hotel_name) and (bool(tariff.city) or tariff.base_rate > 0)
