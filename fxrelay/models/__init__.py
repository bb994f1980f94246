"""Data models for rate payloads, snapshots and built-in currency data."""

from .constants import (
    NUMERAIRE,
    FALLBACK_CURRENCIES,
    FALLBACK_NAMES,
    BASE_RATES,
    CURRENCY_SYMBOLS,
)  # re-export
from .rates import (
    CodesPayload,
    CurrencyCatalog,
    FreshnessStatus,
    RatesPayload,
    RateSnapshot,
)

__all__ = [
    "NUMERAIRE",
    "FALLBACK_CURRENCIES",
    "FALLBACK_NAMES",
    "BASE_RATES",
    "CURRENCY_SYMBOLS",
    "CodesPayload",
    "CurrencyCatalog",
    "FreshnessStatus",
    "RatesPayload",
    "RateSnapshot",
]
