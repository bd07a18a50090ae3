import httpx
import pytest

from portfolio_journal.errors import ConfigurationError
from portfolio_journal.finnhub_client import FinnhubClient


@pytest.mark.asyncio
async def test_get_quote_sends_symbol_and_token_header(monkeypatch: pytest.MonkeyPatch):
    client = FinnhubClient("https://finnhub.io/api/v1/", api_key="key-123", timeout_seconds=5.0)
    captured: dict[str, object] = {}

    async def fake_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        json=None,
    ):
        captured["method"] = method
        captured["url"] = url
        captured["headers"] = headers
        captured["params"] = params
        return httpx.Response(200, json={"c": 1.0}, request=httpx.Request(method, url))

    monkeypatch.setattr(httpx.AsyncClient, "request", fake_request)
    result = await client.get_quote("AAPL")
    assert result == {"c": 1.0}
    assert captured["method"] == "GET"
    assert captured["url"] == "https://finnhub.io/api/v1/quote"
    assert captured["params"] == {"symbol": "AAPL"}
    assert captured["headers"]["X-Finnhub-Token"] == "key-123"


@pytest.mark.asyncio
async def test_get_company_profile_calls_profile_endpoint(monkeypatch: pytest.MonkeyPatch):
    client = FinnhubClient("https://finnhub.io/api/v1", api_key="key-123")
    captured: dict[str, object] = {}

    async def fake_request(self, method: str, url: str, headers=None, params=None, json=None):
        captured["url"] = url
        return httpx.Response(200, json={}, request=httpx.Request(method, url))

    monkeypatch.setattr(httpx.AsyncClient, "request", fake_request)
    await client.get_company_profile("MSFT")
    assert captured["url"] == "https://finnhub.io/api/v1/stock/profile2"


@pytest.mark.asyncio
async def test_missing_api_key_raises_before_any_request(monkeypatch: pytest.MonkeyPatch):
    client = FinnhubClient("https://finnhub.io/api/v1", api_key=None)
    calls = {"count": 0}

    async def fake_request(self, method: str, url: str, headers=None, params=None, json=None):
        calls["count"] += 1
        return httpx.Response(200, json={}, request=httpx.Request(method, url))

    monkeypatch.setattr(httpx.AsyncClient, "request", fake_request)
    with pytest.raises(ConfigurationError):
        await client.get_quote("AAPL")
    assert calls["count"] == 0
    assert client.configured is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error_type",
    [httpx.ConnectError, httpx.ReadTimeout],
)
async def test_get_retries_once_on_network_error(monkeypatch: pytest.MonkeyPatch, error_type):
    client = FinnhubClient("https://finnhub.io/api/v1", api_key="key-123")
    attempts = {"count": 0}

    async def fake_request(self, method: str, url: str, headers=None, params=None, json=None):
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise error_type("temporary network issue", request=httpx.Request(method, url))
        return httpx.Response(200, json={"c": 2.0}, request=httpx.Request(method, url))

    monkeypatch.setattr(httpx.AsyncClient, "request", fake_request)
    result = await client.get_quote("AAPL")
    assert attempts["count"] == 2
    assert result == {"c": 2.0}


@pytest.mark.asyncio
async def test_get_does_not_retry_on_http_status_error(monkeypatch: pytest.MonkeyPatch):
    client = FinnhubClient("https://finnhub.io/api/v1", api_key="key-123")
    attempts = {"count": 0}

    async def fake_request(self, method: str, url: str, headers=None, params=None, json=None):
        attempts["count"] += 1
        return httpx.Response(429, json={"error": "limit"}, request=httpx.Request(method, url))

    monkeypatch.setattr(httpx.AsyncClient, "request", fake_request)
    with pytest.raises(httpx.HTTPStatusError):
        await client.get_quote("AAPL")
    assert attempts["count"] == 1
