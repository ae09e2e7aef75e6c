"""
Test value formatting helpers
"""
from datetime import date, datetime
from decimal import Decimal

import pytest

from report_exports.formatters import (
    format_currency,
    format_date,
    format_datetime,
    format_percentage,
    format_thousands,
    is_number,
    number_text,
)

pytestmark = pytest.mark.unit


class TestNumbers:
    def test_is_number_excludes_booleans(self):
        assert is_number(3)
        assert is_number(2.5)
        assert is_number(Decimal("1.10"))
        assert not is_number(True)
        assert not is_number("3")

    def test_number_text(self):
        assert number_text(10.0) == "10"
        assert number_text(10.5) == "10.5"
        assert number_text(7) == "7"


class TestFormatCurrency:
    """Test currency formatting"""

    def test_thousands_and_two_decimals(self):
        assert format_currency(1234.56) == "BDT 1,234.56"
        assert format_currency(1000000) == "BDT 1,000,000.00"

    def test_negative_amount(self):
        assert format_currency(-50) == "-BDT 50.00"

    @pytest.mark.parametrize("amount", [None, "abc", True])
    def test_non_numeric_renders_zero(self, amount):
        assert format_currency(amount) == "BDT 0.00"

    def test_explicit_currency(self):
        assert format_currency(10, currency="USD") == "USD 10.00"


class TestFormatThousandsAndPercentage:
    def test_format_thousands(self):
        assert format_thousands(1520) == "1,520"
        assert format_thousands(1234.5) == "1,234.5"
        assert format_thousands(None) == "0"

    def test_format_percentage(self):
        assert format_percentage(12.5) == "12.5%"
        assert format_percentage(10.0) == "10%"
        assert format_percentage(-3) == "-3%"

    def test_format_percentage_fixed_decimals(self):
        assert format_percentage(67.26, decimals=1) == "67.3%"
        assert format_percentage(None, decimals=1) == "0.0%"


class TestFormatDates:
    """Test date and timestamp formatting"""

    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-05T10:00:00Z",
            "2024-01-05",
            date(2024, 1, 5),
            datetime(2024, 1, 5, 10, 0),
            1704448800000,
        ],
    )
    def test_format_date(self, value):
        assert format_date(value) == "Jan 5, 2024"

    def test_empty_date(self):
        assert format_date(None) == ""
        assert format_date("") == ""

    def test_unparseable_date_passes_through(self):
        assert format_date("last week") == "last week"

    def test_format_datetime(self):
        assert format_datetime(datetime(2024, 1, 5, 14, 30)) == "Jan 5, 2024, 02:30 PM"
        assert format_datetime(None) == ""
