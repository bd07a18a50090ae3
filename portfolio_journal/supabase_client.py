from typing import Any

from portfolio_journal.errors import ConfigurationError
from portfolio_journal.http import request_json


class SupabaseClient:
    """Minimal PostgREST client for a single Supabase table."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None,
        table: str,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout_seconds = timeout_seconds
        self.max_network_retries = 1

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    def _headers(self, *, return_rows: bool = False) -> dict[str, str]:
        if not self.configured:
            raise ConfigurationError("Supabase URL or key is not configured")
        headers = {
            "Accept": "application/json",
            "apikey": self.api_key or "",
            "Authorization": f"Bearer {self.api_key}",
        }
        if return_rows:
            headers["Prefer"] = "return=representation"
        return headers

    def _table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    async def _request_json(
        self,
        method: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        return_rows: bool = False,
    ) -> Any:
        # Only reads are retried; a repeated write could double-insert.
        attempts = self.max_network_retries + 1 if method == "GET" else 1
        return await request_json(
            "supabase",
            method,
            self._table_url(),
            headers=self._headers(return_rows=return_rows),
            timeout_seconds=self.timeout_seconds,
            attempts=attempts,
            params=params,
            json=json,
        )

    async def select_all(self) -> Any:
        return await self._request_json("GET", params={"select": "*"})

    async def insert(self, row: dict[str, Any]) -> Any:
        return await self._request_json("POST", json=row, return_rows=True)

    async def update_by_id(self, row_id: str, values: dict[str, Any]) -> Any:
        return await self._request_json(
            "PATCH", params={"id": f"eq.{row_id}"}, json=values, return_rows=True
        )

    async def delete_by_id(self, row_id: str) -> Any:
        return await self._request_json("DELETE", params={"id": f"eq.{row_id}"}, return_rows=True)
