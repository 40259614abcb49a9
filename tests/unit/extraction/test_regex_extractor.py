"""Tests for label-based heuristic extraction."""

from app.models.tariff import HotelTariff
from app.services.extraction.regex_extractor import extract_with_regex, is_useful


class TestRegexExtractor:
    """Test suite for extract_with_regex and its usefulness gate."""

    def test_extracts_labelled_fields_on_one_line(self):
        tariff = extract_with_regex("Hotel: Grand Plaza, City: Pune, Rate: Rs. 5,000")

        assert tariff.hotel_name == "Grand Plaza"
        assert tariff.city == "Pune"
        assert tariff.base_rate == 5000
        assert tariff.service_fee == 0
        assert is_useful(tariff)

    def test_extracts_multiline_rate_sheet(self):
        content = (
            "Hotel Name: Lake View Resort\n"
            "Location: Udaipur\n"
            "Category: 4-star\n"
            "Vendor: Rajasthan Tours\n"
            "Price: INR 7,250.50\n"
            "GST: 12%\n"
            "Meal Plan: Breakfast & Dinner\n"
            "Season: Winter\n"
        )

        tariff = extract_with_regex(content)

        assert tariff.hotel_name == "Lake View Resort"
        assert tariff.city == "Udaipur"
        assert tariff.category == "4-star"
        assert tariff.vendor == "Rajasthan Tours"
        assert tariff.base_rate == 7250.5
        assert tariff.gst_percent == 12
        assert tariff.meal_plan == "Breakfast & Dinner"
        assert tariff.season == "Winter"

    def test_unlabelled_text_yields_empty_tariff(self):
        tariff = extract_with_regex("Thank you for your business.")

        assert tariff is not None
        assert tariff.hotel_name == ""
        assert not is_useful(tariff)

    def test_name_without_city_or_rate_is_not_useful(self):
        tariff = extract_with_regex("Hotel: Grand Plaza")

        assert tariff.hotel_name == "Grand Plaza"
        assert not is_useful(tariff)

    def test_is_useful_requires_name_and_city_or_rate(self):
        base = dict(
            vendor="",
            category="",
            gst_percent=0.0,
            service_fee=0.0,
            meal_plan="",
            season="",
            start_date="2024-01-01",
            end_date="2024-01-31",
        )

        assert is_useful(HotelTariff(hotel_name="A", city="Pune", base_rate=0.0, **base))
        assert is_useful(HotelTariff(hotel_name="A", city="", base_rate=100.0, **base))
        assert not is_useful(HotelTariff(hotel_name="", city="Pune", base_rate=100.0, **base))
        assert not is_useful(None)
