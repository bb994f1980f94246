"""Shared fixtures: a recording mock transport standing in for the network."""

from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from fxrelay.core.config import Settings
from fxrelay.main import create_app

CODES_BODY = {
    "result": "success",
    "supported_codes": [["USD", "United States Dollar"], ["EUR", "Euro"], ["AED", "UAE Dirham"]],
}

RATES_BODY = {
    "result": "success",
    "base_code": "USD",
    "conversion_rates": {"USD": 1, "EUR": 0.9, "AED": 3.6725},
}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]


def route_by_suffix(
    routes: Dict[str, Tuple[int, Any]]
) -> Callable[[httpx.Request], httpx.Response]:
    """Answer with (status, body) of the route whose key ends the request path.

    A bytes body is sent raw; anything else is sent as JSON.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        for suffix, (status_code, body) in routes.items():
            if request.url.path.endswith(suffix):
                if isinstance(body, bytes):
                    return httpx.Response(status_code, content=body)
                return httpx.Response(status_code, json=body)
        return httpx.Response(404, json={"result": "error", "error-type": "unknown-path"})

    return handler


@pytest.fixture
def make_client():
    """Build (TestClient, transport) for a proxy with the given key and handler."""

    def _make(handler=None, api_key="test-key", **overrides):
        transport = RecordingTransport(handler or route_by_suffix({}))
        overrides.setdefault("upstream_base_url", "https://upstream.test/v6")
        settings = Settings(_env_file=None, exchangerate_api_key=api_key, **overrides)
        app = create_app(settings_override=settings, transport=transport)
        return TestClient(app), transport

    return _make
