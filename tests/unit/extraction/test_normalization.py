"""Tests for value coercion shared by the extractors."""

from decimal import Decimal

import pytest

from app.services.extraction.normalization import flatten_meal_plan, parse_number, valid_iso_date


class TestParseNumber:
    """Test suite for parse_number."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Rs. 5,000", 5000.0),
            ("INR 7,250.50", 7250.5),
            ("18%", 18.0),
            (12500, 12500.0),
            (Decimal("99.5"), 99.5),
            ("1000-1500", 1000.0),
            ("Rs.500", 500.0),
        ],
    )
    def test_parses_first_number(self, value, expected):
        assert parse_number(value) == expected

    @pytest.mark.parametrize("value", ["-500", "Rs. -2,000", -500, -0.5, "n/a", None, True, float("nan")])
    def test_negative_and_unparseable_values_become_zero(self, value):
        assert parse_number(value) == 0.0


def test_flatten_meal_plan_keeps_truthy_keys_in_order():
    assert flatten_meal_plan({"Breakfast": True, "Lunch": False, "Dinner": True}) == "Breakfast, Dinner"


def test_valid_iso_date_falls_back():
    assert valid_iso_date("2024-03-31", "x") == "2024-03-31"
    assert valid_iso_date("31/03/2024", "x") == "x"
