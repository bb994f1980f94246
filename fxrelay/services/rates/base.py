from __future__ import annotations

"""Rate source abstraction.

A source only knows where the catalog and the rate table live; fetching and
fallback handling stay in the session so every source behaves the same.
"""
from abc import ABC, abstractmethod


class RateSource(ABC):
    name: str = "abstract"

    @abstractmethod
    def codes_url(self) -> str:
        """URL of the currency catalog (``supported_codes``)."""
        raise NotImplementedError

    @abstractmethod
    def rates_url(self, base: str) -> str:
        """URL of the latest rates quoted per 1 unit of ``base``."""
        raise NotImplementedError
