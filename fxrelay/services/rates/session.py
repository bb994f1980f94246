from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Optional

import httpx
from pydantic import ValidationError

from fxrelay.core.config import ClientSettings
from fxrelay.models.constants import NUMERAIRE
from fxrelay.models.rates import (
    CodesPayload,
    CurrencyCatalog,
    FreshnessStatus,
    RatesPayload,
    RateSnapshot,
)
from fxrelay.services.http_client import HttpError, JsonReply, get_json
from .conversion import cross_rate
from .fallback import derive_rates_from_fallback, fallback_catalog, fallback_snapshot
from .providers import make_rate_source

"""Converter data session.

Purpose:
    Own the currency catalog, the USD-based rate table and the freshness
    status for one app session, and refresh them from a configured source.

Design:
    - One fetch cycle issues the catalog and rate GETs concurrently and waits
      for both before deciding anything, so completion order never matters.
    - Each sub-fetch that succeeded replaces its table; a failed one falls back
      to the built-in table. Status is LIVE only if both succeeded.
    - A transport failure (network error, undecodable 2xx body) resets both
      tables to built-in data, even if the other request had succeeded.
    - Results are installed as one RateSnapshot, never merged across cycles.
    - No retries, no cancellation; refresh() always ends with loading=False.
"""

logger = logging.getLogger("fxrelay.session")


def parse_catalog(reply: JsonReply) -> Optional[CurrencyCatalog]:
    if not reply.ok or reply.body is None:
        return None
    try:
        payload = CodesPayload.model_validate(reply.body)
    except ValidationError:
        return None
    return CurrencyCatalog.from_pairs(payload.supported_codes)


def parse_rates(reply: JsonReply) -> Optional[dict[str, float]]:
    if not reply.ok or reply.body is None:
        return None
    try:
        payload = RatesPayload.model_validate(reply.body)
    except ValidationError:
        return None
    rates = dict(payload.conversion_rates)
    rates[payload.base_code or NUMERAIRE] = 1.0
    return rates


class RateSession:
    """Session-scoped holder of the converter's rate data.

    Pass ``http`` to share a client (tests inject one with a mock transport);
    otherwise each cycle opens and closes its own.
    """

    def __init__(self, http: httpx.AsyncClient | None = None):
        self._http = http
        self.snapshot: RateSnapshot = fallback_snapshot()
        self.loading = False
        self.config: ClientSettings | None = None

    # Read side ---------------------------------------------------
    @property
    def catalog(self) -> CurrencyCatalog:
        return self.snapshot.catalog

    @property
    def rates(self) -> Mapping[str, float]:
        return self.snapshot.rates

    @property
    def status(self) -> FreshnessStatus:
        if self.loading:
            return FreshnessStatus.LOADING
        return self.snapshot.status

    def cross_rate(self, source: str, target: str) -> float:
        return cross_rate(self.snapshot.rates, source, target)

    # Fetch cycle -------------------------------------------------
    async def ensure_fresh(self, config: ClientSettings) -> RateSnapshot:
        """Refresh only if ``config`` differs from the last cycle's config."""
        if self.config is not None and self.config == config:
            return self.snapshot
        return await self.refresh(config)

    async def refresh(self, config: ClientSettings) -> RateSnapshot:
        self.loading = True
        try:
            self.snapshot = await self._load(config)
        finally:
            self.loading = False
            self.config = config
        logger.info(
            "rates ready",
            extra={"status": self.snapshot.status.value},
        )
        return self.snapshot

    async def _load(self, config: ClientSettings) -> RateSnapshot:
        source = make_rate_source(config)
        if source is None:
            logger.info("no backend configured, using built-in rates")
            return fallback_snapshot()

        logger.debug("fetching codes and rates", extra={"source": source.name})
        try:
            codes_reply, rates_reply = await self._fetch_both(
                source.codes_url(), source.rates_url(NUMERAIRE), config
            )
        except HttpError as e:
            logger.warning(
                "rate fetch failed, using built-in data: %s",
                e,
                extra={"source": source.name},
            )
            return fallback_snapshot()

        catalog = parse_catalog(codes_reply)
        rates = parse_rates(rates_reply)
        if catalog is None:
            logger.info(
                "codes unavailable, using built-in catalog",
                extra={"status_code": codes_reply.status_code},
            )
        if rates is None:
            logger.info(
                "rates unavailable, using built-in rates",
                extra={"status_code": rates_reply.status_code},
            )
        live = catalog is not None and rates is not None
        return RateSnapshot(
            catalog=catalog if catalog is not None else fallback_catalog(),
            rates=rates if rates is not None else derive_rates_from_fallback(NUMERAIRE),
            status=FreshnessStatus.LIVE if live else FreshnessStatus.FALLBACK,
        )

    async def _fetch_both(
        self, codes_url: str, rates_url: str, config: ClientSettings
    ) -> list[JsonReply]:
        if self._http is not None:
            return await self._gather(self._http, codes_url, rates_url)
        async with httpx.AsyncClient(timeout=config.http_timeout_seconds) as http:
            return await self._gather(http, codes_url, rates_url)

    @staticmethod
    async def _gather(
        http: httpx.AsyncClient, codes_url: str, rates_url: str
    ) -> list[JsonReply]:
        # wait for both to settle before surfacing a failure
        replies = await asyncio.gather(
            get_json(http, codes_url, only_if_ok=True),
            get_json(http, rates_url, only_if_ok=True),
            return_exceptions=True,
        )
        for reply in replies:
            if isinstance(reply, BaseException):
                raise reply
        return replies
