"""Tests for the shared HTTP client."""

from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from tomanfolio.services.shared.http_client import HTTPClient, HTTPClientError


def _client_with(handler, max_retries: int = 2) -> HTTPClient:
    client = HTTPClient(base_url="https://example.test", timeout=1.0, max_retries=max_retries)
    client._client = httpx.Client(
        base_url="https://example.test",
        transport=httpx.MockTransport(handler),
    )
    return client


class TestHTTPClient:
    def test_get_text(self):
        client = _client_with(lambda request: httpx.Response(200, text="<html>ok</html>"))
        assert client.get_text("/page") == "<html>ok</html>"

    def test_get_json(self):
        client = _client_with(lambda request: httpx.Response(200, json={"a": 1}))
        assert client.get_json("/api") == {"a": 1}

    def test_invalid_json_raises(self):
        client = _client_with(lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(HTTPClientError):
            client.get_json("/api")

    def test_error_status_raises_with_code(self):
        client = _client_with(lambda request: httpx.Response(503, text="busy"))
        with pytest.raises(HTTPClientError) as exc_info:
            client.get("/page")
        assert exc_info.value.status_code == 503

    def test_timeout_retried_then_raised(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ReadTimeout("slow", request=request)

        client = _client_with(handler, max_retries=2)
        with pytest.raises(HTTPClientError):
            client.get("/slow")
        assert len(calls) == 2

    def test_user_agent_sent(self):
        seen = {}

        def handler(request):
            seen["ua"] = request.headers.get("user-agent")
            return httpx.Response(200, text="")

        _client_with(handler).get("/page")
        assert seen["ua"].startswith("Mozilla/5.0")

    def test_context_manager_closes(self):
        with _client_with(lambda request: httpx.Response(200, text="")) as client:
            client.get("/page")
        assert client._client is None

    def test_concurrent_first_use_shares_one_client(self):
        client = HTTPClient(base_url="https://prices.example")

        with ThreadPoolExecutor(max_workers=8) as pool:
            instances = list(pool.map(lambda _: client.client, range(32)))

        assert len({id(instance) for instance in instances}) == 1
        client.close()

    def test_reopens_after_close(self):
        client = HTTPClient(base_url="https://prices.example")
        first = client.client
        client.close()

        assert first.is_closed
        assert client.client is not first
        client.close()
