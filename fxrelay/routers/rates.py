from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from fxrelay.services.upstream import ExchangeRateUpstream

"""Relay endpoints for the converter app.

Endpoints:
    - GET /codes             -> upstream supported_codes catalog, verbatim
    - GET /rates?base=<CODE> -> upstream latest rates for CODE (default USD)

Bodies are passed through unchanged so the client contract tracks the
provider's shape. Errors are raised as ProxyError and rendered centrally.
"""

router = APIRouter(tags=["rates"])


def get_upstream(request: Request) -> ExchangeRateUpstream:
    return request.app.state.upstream


@router.get("/codes", summary="Supported currency codes and names")
async def codes(upstream: ExchangeRateUpstream = Depends(get_upstream)):
    return JSONResponse(await upstream.fetch_codes())


@router.get("/rates", summary="Latest rates against a base currency")
async def rates(
    base: Optional[str] = Query(
        None, description="Base currency code, case-insensitive (default USD)"
    ),
    upstream: ExchangeRateUpstream = Depends(get_upstream),
):
    return JSONResponse(await upstream.fetch_latest(base))
