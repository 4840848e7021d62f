from __future__ import annotations

from typing import Dict

from restaurant_inventory.errors import ValidationError

# Units of each currency per 1 USD.
CURRENCY_RATES: Dict[str, float] = {
    "USD": 1,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 150.25,
    "CAD": 1.36,
    "AUD": 1.52,
    "CNY": 7.23,
    "INR": 83.45,
    "MXN": 16.82,
    "BRL": 5.07,
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CNY": "¥",
    "INR": "₹",
    "MXN": "$",
    "BRL": "R$",
}

CURRENCY_NAMES: Dict[str, str] = {
    "USD": "US Dollar",
    "EUR": "Euro",
    "GBP": "British Pound",
    "JPY": "Japanese Yen",
    "CAD": "Canadian Dollar",
    "AUD": "Australian Dollar",
    "CNY": "Chinese Yuan",
    "INR": "Indian Rupee",
    "MXN": "Mexican Peso",
    "BRL": "Brazilian Real",
}

COUNTRY_CURRENCIES: Dict[str, str] = {
    "US": "USD",
    "CA": "CAD",
    "GB": "GBP",
    "EU": "EUR",
    "JP": "JPY",
    "CN": "CNY",
    "IN": "INR",
    "AU": "AUD",
    "MX": "MXN",
    "BR": "BRL",
}

EURO_COUNTRIES = frozenset(
    ["AT", "BE", "CY", "EE", "FI", "FR", "DE", "GR", "IE", "IT", "LV", "LT", "LU", "MT", "NL", "PT", "SK", "SI", "ES"]
)


def normalize_currency_code(code: str) -> str:
    normalized = (code or "").strip().upper()
    if normalized not in CURRENCY_RATES:
        raise ValidationError(f"Unsupported currency: {code}")
    return normalized


def convert_from_usd(amount: float, code: str) -> float:
    return amount * CURRENCY_RATES[normalize_currency_code(code)]


def format_currency(amount: float, code: str) -> str:
    """Convert a USD amount and render it with the currency symbol, e.g. ``€9.20``."""
    normalized = normalize_currency_code(code)
    converted = round(convert_from_usd(amount, normalized), 2)
    sign = "-" if converted < 0 else ""
    return f"{sign}{CURRENCY_SYMBOLS[normalized]}{abs(converted):,.2f}"


def default_currency_for_country(country_code: str) -> str:
    code = (country_code or "").strip().upper()
    if code in EURO_COUNTRIES:
        return "EUR"
    return COUNTRY_CURRENCIES.get(code, "USD")
