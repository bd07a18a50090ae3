import httpx
import pytest

from portfolio_journal.http import request_json


URL = "https://example.test/resource"


@pytest.mark.asyncio
async def test_last_transport_error_propagates_after_all_attempts(monkeypatch: pytest.MonkeyPatch):
    attempts = {"count": 0}

    async def fake_request(self, method: str, url: str, headers=None, params=None, json=None):
        attempts["count"] += 1
        raise httpx.ReadTimeout(f"timed out #{attempts['count']}", request=httpx.Request(method, url))

    monkeypatch.setattr(httpx.AsyncClient, "request", fake_request)
    with pytest.raises(httpx.ReadTimeout, match="timed out #3"):
        await request_json("svc", "GET", URL, headers={}, timeout_seconds=1.0, attempts=3)
    assert attempts["count"] == 3


@pytest.mark.asyncio
async def test_single_attempt_does_not_retry(monkeypatch: pytest.MonkeyPatch):
    attempts = {"count": 0}

    async def fake_request(self, method: str, url: str, headers=None, params=None, json=None):
        attempts["count"] += 1
        raise httpx.ConnectError("down", request=httpx.Request(method, url))

    monkeypatch.setattr(httpx.AsyncClient, "request", fake_request)
    with pytest.raises(httpx.ConnectError):
        await request_json("svc", "POST", URL, headers={}, timeout_seconds=1.0, json={"a": 1})
    assert attempts["count"] == 1


@pytest.mark.asyncio
async def test_json_body_is_decoded_and_empty_body_is_none(monkeypatch: pytest.MonkeyPatch):
    responses = [httpx.Response(200, json={"ok": True}), httpx.Response(204)]

    async def fake_request(self, method: str, url: str, headers=None, params=None, json=None):
        response = responses.pop(0)
        response.request = httpx.Request(method, url)
        return response

    monkeypatch.setattr(httpx.AsyncClient, "request", fake_request)
    assert await request_json("svc", "GET", URL, headers={}, timeout_seconds=1.0) == {"ok": True}
    assert await request_json("svc", "DELETE", URL, headers={}, timeout_seconds=1.0) is None


@pytest.mark.asyncio
async def test_zero_attempts_is_rejected():
    with pytest.raises(ValueError, match="attempts"):
        await request_json("svc", "GET", URL, headers={}, timeout_seconds=1.0, attempts=0)
