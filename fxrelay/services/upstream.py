from __future__ import annotations

"""Upstream exchange-rate provider access for the proxy.

Every call injects the server-held key and relays the provider's JSON
unchanged. Failures become ProxyError subclasses which the app renders:

    - no key configured        -> MissingCredentialError (500, no outbound call)
    - reply is not a success   -> UpstreamResponseError (502, upstream body attached)
    - call failed / not JSON   -> UpstreamTransportError (500, generic message)

No caching and no retries: one relay() is exactly one outbound GET.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from fxrelay.core.errors import (
    MissingCredentialError,
    UpstreamResponseError,
    UpstreamTransportError,
)
from fxrelay.models.constants import NUMERAIRE
from fxrelay.services.http_client import HttpError, get_json

logger = logging.getLogger("fxrelay.upstream")


class ExchangeRateUpstream:
    def __init__(self, http: httpx.AsyncClient, api_key: Optional[str], base_url: str):
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{quote(self._api_key or '', safe='')}/{path}"

    async def fetch_codes(self) -> Dict[str, Any]:
        return await self.relay("codes", "codes")

    async def fetch_latest(self, base: Optional[str] = None) -> Dict[str, Any]:
        base = (base or NUMERAIRE).upper()
        logger.debug("relaying latest rates", extra={"endpoint": "rates", "base": base})
        return await self.relay(f"latest/{quote(base, safe='')}", "rates")

    async def relay(self, path: str, what: str) -> Any:
        if not self.configured:
            logger.error("upstream key missing", extra={"endpoint": what})
            raise MissingCredentialError()

        try:
            reply = await get_json(self._http, self._url(path))
        except HttpError as e:
            logger.error(
                "failed to fetch %s: %s", what, e, extra={"endpoint": what}
            )
            raise UpstreamTransportError(what) from e

        body = reply.body
        if not reply.ok or not isinstance(body, dict) or body.get("result") != "success":
            logger.warning(
                "upstream %s error",
                what,
                extra={"endpoint": what, "status_code": reply.status_code},
            )
            raise UpstreamResponseError(body)
        return body
