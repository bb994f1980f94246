"""Proxy endpoint tests: relay, error mapping and outbound call accounting."""

import httpx

from conftest import CODES_BODY, RATES_BODY, route_by_suffix


def test_health_makes_no_outbound_call(make_client):
    client, transport = make_client(api_key=None)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert transport.calls == 0


def test_root_reports_version(make_client):
    client, _ = make_client()
    body = client.get("/").json()
    assert body["version"] == "0.1.0"


def test_codes_relayed_verbatim(make_client):
    client, transport = make_client(route_by_suffix({"/codes": (200, CODES_BODY)}))
    r = client.get("/codes")
    assert r.status_code == 200
    assert r.json() == CODES_BODY
    assert transport.calls == 1
    assert transport.paths == ["/v6/test-key/codes"]


def test_rates_default_base_is_usd(make_client):
    client, transport = make_client(route_by_suffix({"/latest/USD": (200, RATES_BODY)}))
    r = client.get("/rates")
    assert r.status_code == 200
    assert r.json() == RATES_BODY
    assert transport.paths == ["/v6/test-key/latest/USD"]


def test_rates_base_is_upper_cased(make_client):
    eur = {"result": "success", "base_code": "EUR", "conversion_rates": {"EUR": 1, "USD": 1.1}}
    client, transport = make_client(route_by_suffix({"/latest/EUR": (200, eur)}))
    r = client.get("/rates", params={"base": "eur"})
    assert r.status_code == 200
    assert r.json()["base_code"] == "EUR"
    assert transport.paths == ["/v6/test-key/latest/EUR"]


def test_rates_empty_base_means_usd(make_client):
    client, transport = make_client(route_by_suffix({"/latest/USD": (200, RATES_BODY)}))
    r = client.get("/rates?base=")
    assert r.status_code == 200
    assert transport.paths == ["/v6/test-key/latest/USD"]


def test_missing_key_fails_without_outbound_call(make_client):
    client, transport = make_client(
        route_by_suffix({"/codes": (200, CODES_BODY), "/latest/USD": (200, RATES_BODY)}),
        api_key=None,
    )
    for path in ("/codes", "/rates", "/rates?base=EUR"):
        r = client.get(path)
        assert r.status_code == 500
        assert r.json() == {"error": "Missing EXCHANGERATE_API_KEY on the backend"}
    assert transport.calls == 0


def test_empty_key_counts_as_missing(make_client):
    client, transport = make_client(api_key="")
    assert client.get("/codes").status_code == 500
    assert transport.calls == 0


def test_upstream_error_result_is_502_with_details(make_client):
    upstream = {"result": "error", "error-type": "invalid-key"}
    client, transport = make_client(route_by_suffix({"/codes": (200, upstream)}))
    r = client.get("/codes")
    assert r.status_code == 502
    assert r.json() == {"error": "Upstream error", "details": upstream}
    assert transport.calls == 1


def test_upstream_http_error_status_is_502(make_client):
    upstream = {"result": "error", "error-type": "unsupported-code"}
    client, _ = make_client(route_by_suffix({"/latest/XXX": (404, upstream)}))
    r = client.get("/rates?base=xxx")
    assert r.status_code == 502
    assert r.json()["details"] == upstream


def test_non_success_status_with_success_body_is_502(make_client):
    client, _ = make_client(route_by_suffix({"/codes": (503, CODES_BODY)}))
    assert client.get("/codes").status_code == 502


def test_non_json_body_is_500(make_client):
    client, transport = make_client(route_by_suffix({"/codes": (200, b"<html>oops</html>")}))
    r = client.get("/codes")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch codes"}
    assert transport.calls == 1


def test_network_failure_is_500(make_client):
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, transport = make_client(boom)
    r = client.get("/rates")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch rates"}
    assert transport.calls == 1


def test_key_never_leaks_into_error_bodies(make_client):
    def boom(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client, _ = make_client(boom, api_key="s3cr3t-key")
    for path in ("/codes", "/rates"):
        assert "s3cr3t-key" not in client.get(path).text


def test_each_request_triggers_exactly_one_upstream_call(make_client):
    client, transport = make_client(
        route_by_suffix({"/codes": (200, CODES_BODY), "/latest/USD": (200, RATES_BODY)})
    )
    client.get("/codes")
    client.get("/codes")
    client.get("/rates")
    assert transport.calls == 3


def test_unknown_route_is_404(make_client):
    client, _ = make_client()
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"


def test_cors_allow_list(make_client):
    client, _ = make_client(allowed_origins="https://a.example, ,https://b.example")
    ok = client.get("/health", headers={"Origin": "https://b.example"})
    assert ok.headers["access-control-allow-origin"] == "https://b.example"
    denied = client.get("/health", headers={"Origin": "https://evil.example"})
    assert "access-control-allow-origin" not in denied.headers


def test_cors_unrestricted_by_default(make_client):
    client, _ = make_client()
    r = client.get("/health", headers={"Origin": "https://anywhere.example"})
    assert r.headers["access-control-allow-origin"] == "*"


def test_request_id_header_echoed(make_client):
    client, _ = make_client()
    r = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert r.headers["x-request-id"] == "abc123"


def test_malformed_upstream_url_is_500_without_outbound_call(make_client):
    client, transport = make_client(
        route_by_suffix({"/codes": (200, CODES_BODY)}),
        upstream_base_url="https://upstream.test/v6\n",
    )
    for path, what in (("/codes", "codes"), ("/rates", "rates")):
        r = client.get(path)
        assert r.status_code == 500
        assert r.json() == {"error": f"Failed to fetch {what}"}
    assert transport.calls == 0


def test_key_is_escaped_in_upstream_path(make_client):
    client, transport = make_client(
        route_by_suffix({"/codes": (200, CODES_BODY)}), api_key="bad key\n"
    )
    r = client.get("/codes")
    assert r.status_code == 200
    assert transport.requests[0].url.raw_path == b"/v6/bad%20key%0A/codes"
