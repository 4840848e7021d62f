import pytest

from restaurant_inventory.currency import (
    convert_from_usd,
    default_currency_for_country,
    format_currency,
    normalize_currency_code,
)
from restaurant_inventory.errors import ValidationError


def test_format_currency_converts_and_renders_symbol():
    assert format_currency(10, "USD") == "$10.00"
    assert format_currency(10, "EUR") == "€9.20"
    assert format_currency(1000, "GBP") == "£790.00"
    assert format_currency(100, "JPY") == "¥15,025.00"
    assert format_currency(10, "cad") == "C$13.60"


def test_convert_from_usd_multiplies_by_rate():
    assert convert_from_usd(100, "INR") == pytest.approx(8345)
    assert convert_from_usd(0, "BRL") == 0


def test_unknown_currency_is_rejected():
    with pytest.raises(ValidationError):
        normalize_currency_code("XYZ")
    with pytest.raises(ValidationError):
        format_currency(1, "")


def test_default_currency_for_country():
    assert default_currency_for_country("US") == "USD"
    assert default_currency_for_country("de") == "EUR"
    assert default_currency_for_country("IN") == "INR"
    assert default_currency_for_country("ZZ") == "USD"
