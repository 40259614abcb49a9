"""Tariff extraction from the custom model's typed fields."""

from typing import Dict, Optional

from app.models.analysis import AnalyzeResult, DocumentField
from app.models.tariff import HotelTariff
from app.services.extraction.normalization import (
    coerce_text,
    default_end_date,
    flatten_meal_plan,
    parse_number,
    to_date,
    today_iso,
)
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


def _content(fields: Dict[str, DocumentField], name: str) -> Optional[str]:
    field = fields.get(name)
    if field is None:
        return None
    return field.content


def _date_or_default(raw: Optional[str], fallback: str) -> str:
    if not coerce_text(raw):
        return fallback
    try:
        return to_date(raw).isoformat()
    except ValueError:
        LOGGER.warning(f"Unparseable date {raw!r} in structured output, using {fallback}")
        return fallback


def extract_from_structured_model(result: AnalyzeResult) -> Optional[HotelTariff]:
    """Build a tariff from the first ``HotelTariff`` document of a result.

    Every field is read from ``fields[name].content``. Missing text fields
    become "", missing numbers 0, a missing start date today and a missing end
    date today plus 30 days. Confidence scores are not consulted.

    Returns:
        The tariff, or None when there is no HotelTariff document or its field
        map is missing
    """
    try:
        if not result.has_hotel_tariff:
            return None

        fields = result.first_document.fields
        if not isinstance(fields, dict):
            LOGGER.warning("HotelTariff document has no field map")
            return None

        tariff = HotelTariff(
            hotel_name=coerce_text(_content(fields, "hotelName")),
            vendor=coerce_text(_content(fields, "vendor")),
            city=coerce_text(_content(fields, "city")),
            category=coerce_text(_content(fields, "category")),
            base_rate=parse_number(_content(fields, "baseRate")),
            gst_percent=parse_number(_content(fields, "gstPercent")),
            service_fee=parse_number(_content(fields, "serviceFee")),
            meal_plan=flatten_meal_plan(_content(fields, "mealPlan")),
            season=coerce_text(_content(fields, "season")),
            start_date=_date_or_default(_content(fields, "startDate"), today_iso()),
            end_date=_date_or_default(_content(fields, "endDate"), default_end_date()),
            description=coerce_text(_content(fields, "description")),
        )
        LOGGER.info(f"Extracted tariff from structured model: {tariff}")
        return tariff

    except Exception as e:
        LOGGER.error(f"Error extracting from structured model: {str(e)}", exc_info=True)
        return None
