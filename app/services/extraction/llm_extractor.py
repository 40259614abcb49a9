"""LLM-based tariff extraction, the last step of the cascade."""

from typing import Any, Dict, Optional

from app.core.openai_client import AzureOpenAIClient
from app.models.tariff import HotelTariff
from app.services.extraction.normalization import (
    coerce_text,
    default_end_date,
    flatten_meal_plan,
    parse_number,
    today_iso,
    valid_iso_date,
)
from app.utils.json_parser import parse_json_object
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_MAX_CHARS = 4000

SYSTEM_PROMPT = (
    "You are an extraction assistant that outputs *only* valid JSON. "
    "Follow the exact format requirements."
)

EXTRACTION_PROMPT = """
Extract the following fields from the text below and return exactly one JSON object with keys:
hotelName, city, category, vendor, baseRate, gstPercent, serviceFee, mealPlan, season, startDate, endDate

IMPORTANT FORMATTING REQUIREMENTS:
1. All fields must be simple strings or numbers only, never objects or arrays
2. mealPlan must be a single string like "Breakfast Only" or "Breakfast, Lunch, Dinner"
3. baseRate, gstPercent, and serviceFee must be numeric values without currency symbols
4. startDate and endDate must be in YYYY-MM-DD format
5. If you're unsure about a value, use an empty string "" for text fields or 0 for numeric fields

Text:
{text}"""


class LLMTariffExtractor:
    """Extract a tariff by asking a chat model for a fixed JSON shape.

    The client is expected to make a single attempt per call; failures are
    logged and reported as no result.

    Attributes:
        client: Azure OpenAI chat client
        max_chars: Document text beyond this length is not sent
    """

    def __init__(self, client: AzureOpenAIClient, max_chars: int = DEFAULT_MAX_CHARS):
        self.client = client
        self.max_chars = max_chars

    def build_prompt(self, content: str) -> str:
        return EXTRACTION_PROMPT.format(text=content[: self.max_chars])

    async def extract(self, content: str) -> Optional[HotelTariff]:
        """Extract a tariff from document text.

        Args:
            content: Full document text; truncated to ``max_chars``

        Returns:
            The normalized tariff, or None if the call failed or the reply was
            not a JSON object
        """
        try:
            raw = await self.client.generate_content(
                contents=self.build_prompt(content),
                system_instruction=SYSTEM_PROMPT,
                temperature=0.0,
            )
        except Exception as e:
            LOGGER.error(f"LLM extraction call failed: {str(e)}", exc_info=True)
            return None

        if not raw:
            LOGGER.warning("LLM returned an empty extraction response")
            return None

        data = parse_json_object(raw)
        if data is None:
            LOGGER.error("LLM extraction response was not valid JSON", extra={"response": raw[:500]})
            return None

        return self.normalize(data)

    @staticmethod
    def normalize(data: Dict[str, Any]) -> HotelTariff:
        """Coerce a model reply into a tariff with scalar fields only."""
        return HotelTariff(
            hotel_name=coerce_text(data.get("hotelName")),
            vendor=coerce_text(data.get("vendor")),
            city=coerce_text(data.get("city")),
            category=coerce_text(data.get("category")),
            base_rate=parse_number(data.get("baseRate")),
            gst_percent=parse_number(data.get("gstPercent")),
            service_fee=parse_number(data.get("serviceFee")),
            meal_plan=flatten_meal_plan(data.get("mealPlan")),
            season=coerce_text(data.get("season")),
            start_date=valid_iso_date(data.get("startDate"), today_iso()),
            end_date=valid_iso_date(data.get("endDate"), default_end_date()),
        )
