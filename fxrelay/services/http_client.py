from __future__ import annotations

"""Lightweight async HTTP helper for JSON GETs.

Shared by the proxy (outbound upstream calls) and the converter client
(proxy or direct upstream calls). One call, one request: no retries.
"""
from dataclasses import dataclass
from typing import Any

import httpx


class HttpError(Exception):
    pass


@dataclass(frozen=True)
class JsonReply:
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


async def get_json(
    client: httpx.AsyncClient, url: str, *, only_if_ok: bool = False
) -> JsonReply:
    """GET ``url`` and decode the body as JSON.

    With ``only_if_ok`` a non-2xx reply is returned with ``body=None`` and the
    body is not decoded. Malformed URLs, transport failures and undecodable
    bodies raise ``HttpError``.
    """
    try:
        resp = await client.get(url)
        if only_if_ok and not resp.is_success:
            return JsonReply(status_code=resp.status_code, body=None)
        return JsonReply(status_code=resp.status_code, body=resp.json())
    except (
        httpx.HTTPError,
        httpx.InvalidURL,
        ValueError,
    ) as e:  # InvalidURL for malformed config, ValueError for JSON decode
        # message omits the URL, which may carry a credential
        raise HttpError(type(e).__name__) from e
