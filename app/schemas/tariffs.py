"""Schemas for tariff detail and hotel search responses."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertySummary(CamelModel):
    id: int
    name: str
    city: str
    category: Optional[str] = None


class VendorSummary(CamelModel):
    id: int
    name: str


class SeasonSummary(CamelModel):
    id: int
    name: str
    start_date: str = Field(..., description="First valid day (YYYY-MM-DD)")
    end_date: str = Field(..., description="Last valid day (YYYY-MM-DD)")


class RoomTypeSummary(CamelModel):
    id: int
    name: str


class RatePlanSummary(CamelModel):
    id: int
    name: str
    meal_plan: Optional[str] = None


class TariffDetail(CamelModel):
    """A tariff joined with all of its dimensions."""

    id: int
    base_rate: float
    tax_percent: float
    service_fee: float
    currency: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    property: PropertySummary
    vendor: VendorSummary
    season: SeasonSummary
    room_type: RoomTypeSummary
    rate_plan: RatePlanSummary
    attributes: Dict[str, Any] = Field(default_factory=dict)


class TariffDetailResponse(CamelModel):
    tariff: TariffDetail


class HotelSearchItem(CamelModel):
    """One row of a hotel search."""

    tariff_id: int
    hotel_name: str
    city: str
    category: Optional[str] = None
    vendor: str
    base_rate: float
    gst_percent: float
    service_fee: float
    meal_plan: Optional[str] = None
    season: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    total_rate: float = Field(..., description="Base rate plus tax plus service fee, for one night")


class HotelSearchResponse(CamelModel):
    hotels: List[HotelSearchItem] = Field(default_factory=list)
    count: int = 0
