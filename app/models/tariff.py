"""Canonical hotel tariff record produced by the extraction pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ExtractionMethod(str, Enum):
    """Which extraction strategy produced a tariff."""

    STRUCTURED_MODEL = "structured_model"
    REGEX = "regex"
    LLM = "llm"
    NONE = "none"


@dataclass(frozen=True)
class HotelTariff:
    """One hotel rate for a vendor, meal plan and season.

    Attributes:
        hotel_name: Property name as printed on the rate sheet
        vendor: Rate provider; empty when the sheet does not name one
        city: City of the property
        category: Star rating or category label, e.g. "5-star"
        base_rate: Nightly rate before tax, never negative
        gst_percent: Tax percentage, expected in 0-100 but not enforced
        service_fee: Flat fee added once per booking
        meal_plan: Included meals as one string, e.g. "Breakfast, Dinner"
        season: Season label, e.g. "Peak"
        start_date: First valid day (YYYY-MM-DD)
        end_date: Last valid day (YYYY-MM-DD)
        description: Free-text notes
    """

    hotel_name: str
    vendor: str
    city: str
    category: str
    base_rate: float
    gst_percent: float
    service_fee: float
    meal_plan: str
    season: str
    start_date: str
    end_date: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Render the camelCase wire shape used by API responses."""
        return {
            "hotelName": self.hotel_name,
            "vendor": self.vendor,
            "city": self.city,
            "category": self.category,
            "baseRate": self.base_rate,
            "gstPercent": self.gst_percent,
            "serviceFee": self.service_fee,
            "mealPlan": self.meal_plan,
            "season": self.season,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "description": self.description,
        }

    def __str__(self) -> str:
        return f"HotelTariff(hotel={self.hotel_name!r}, city={self.city!r}, rate={self.base_rate})"


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of running the extraction cascade over one document."""

    tariff: Optional[HotelTariff]
    method: ExtractionMethod

    @property
    def succeeded(self) -> bool:
        return self.tariff is not None
