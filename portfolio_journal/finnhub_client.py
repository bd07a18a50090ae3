from typing import Any

from portfolio_journal.errors import ConfigurationError
from portfolio_journal.http import request_json


class FinnhubClient:
    def __init__(self, base_url: str, api_key: str | None, timeout_seconds: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.max_network_retries = 1

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("Finnhub API key is not configured")
        return {"Accept": "application/json", "X-Finnhub-Token": self.api_key}

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await request_json(
            "finnhub",
            "GET",
            f"{self.base_url}{path}",
            headers=self._headers(),
            timeout_seconds=self.timeout_seconds,
            attempts=self.max_network_retries + 1,
            params=params,
        )

    async def get_quote(self, symbol: str) -> Any:
        return await self._get("/quote", params={"symbol": symbol})

    async def get_company_profile(self, symbol: str) -> Any:
        return await self._get("/stock/profile2", params={"symbol": symbol})
