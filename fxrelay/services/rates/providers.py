from __future__ import annotations

"""Concrete rate sources and factory.

'ProxyRateSource' goes through the fxrelay proxy and never sees a key;
'DirectRateSource' calls the upstream provider with a bundled key.
"""
from typing import Optional
from urllib.parse import quote, urlencode

from fxrelay.core.config import ClientSettings
from .base import RateSource


class ProxyRateSource(RateSource):
    name = "proxy"

    def __init__(self, base_url: str):
        self._base = base_url.rstrip("/")

    def codes_url(self) -> str:
        return f"{self._base}/codes"

    def rates_url(self, base: str) -> str:
        return f"{self._base}/rates?{urlencode({'base': base})}"


class DirectRateSource(RateSource):
    name = "direct"

    def __init__(self, api_key: str, upstream_base_url: str):
        self._root = f"{upstream_base_url.rstrip('/')}/{quote(api_key, safe='')}"

    def codes_url(self) -> str:
        return f"{self._root}/codes"

    def rates_url(self, base: str) -> str:
        return f"{self._root}/latest/{quote(base, safe='')}"


def make_rate_source(config: ClientSettings) -> Optional[RateSource]:
    """Pick a source from client config; ``None`` means built-in data only."""
    if config.api_base_url:
        return ProxyRateSource(config.api_base_url)
    if config.api_key:
        return DirectRateSource(config.api_key, config.upstream_base_url)
    return None
