"""Built-in currency data used whenever live data is unavailable.

MVP keeps these lightweight; the live catalog from the provider lists ~160
codes, this set only covers what the converter needs to stay usable offline.
"""

from typing import Dict, Tuple

NUMERAIRE = "USD"

FALLBACK_CURRENCIES: Tuple[str, ...] = ("USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF")

FALLBACK_NAMES: Dict[str, str] = {
    "USD": "US Dollar",
    "EUR": "Euro",
    "GBP": "British Pound",
    "JPY": "Japanese Yen",
    "CAD": "Canadian Dollar",
    "AUD": "Australian Dollar",
    "CHF": "Swiss Franc",
}

# Units of each currency per 1 USD
BASE_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.78,
    "JPY": 155.8,
    "CAD": 1.36,
    "AUD": 1.52,
    "CHF": 0.86,
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "CHF": "CHF",
}
