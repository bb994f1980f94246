from __future__ import annotations

"""Built-in catalog and rate table used in fallback mode.

The base-rate table is quoted per 1 USD. Rebasing it onto another currency
divides every entry by that currency's USD rate, so the new base maps to 1.0.
"""
from typing import Dict

from fxrelay.models.constants import (
    BASE_RATES,
    FALLBACK_CURRENCIES,
    FALLBACK_NAMES,
    NUMERAIRE,
)
from fxrelay.models.rates import CurrencyCatalog, FreshnessStatus, RateSnapshot


def derive_rates_from_fallback(base: str) -> Dict[str, float]:
    builtin = BASE_RATES.get(base)
    if not builtin:
        # Unknown base: the USD table comes back as is, not rebased.
        return dict(BASE_RATES)
    usd_per_base = 1 / builtin
    rates = {code: usd_per_base * rate for code, rate in BASE_RATES.items()}
    # (1 / x) * x may land one ulp off 1.0
    rates[base] = 1.0
    return rates


def fallback_catalog() -> CurrencyCatalog:
    return CurrencyCatalog(codes=FALLBACK_CURRENCIES, names=dict(FALLBACK_NAMES))


def fallback_snapshot() -> RateSnapshot:
    return RateSnapshot(
        catalog=fallback_catalog(),
        rates=derive_rates_from_fallback(NUMERAIRE),
        status=FreshnessStatus.FALLBACK,
    )
