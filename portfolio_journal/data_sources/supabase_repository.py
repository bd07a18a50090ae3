import math
from typing import Any

import httpx

from portfolio_journal.errors import DataFetchError
from portfolio_journal.schemas import HoldingRecord
from portfolio_journal.supabase_client import SupabaseClient
from portfolio_journal.telemetry import get_logger


logger = get_logger(__name__)


class SupabaseHoldingsRepository:
    """Holdings stored in the Supabase ``portfolio`` table.

    Transport and payload failures become :class:`DataFetchError`.
    An unconfigured client raises ``ConfigurationError`` unchanged.
    """

    def __init__(self, client: SupabaseClient) -> None:
        self.client = client

    @staticmethod
    def parse_record(item: Any, index: int) -> HoldingRecord:
        if not isinstance(item, dict):
            raise DataFetchError(f"Holding at index {index} must be an object")
        row_id = item.get("id")
        symbol = item.get("symbol")
        if row_id is None or not symbol:
            raise DataFetchError(f"Holding at index {index} is missing required id or symbol")
        try:
            shares = float(item.get("shares"))
        except (TypeError, ValueError):
            raise DataFetchError(f"Holding at index {index} has invalid required numeric field 'shares'")
        if not math.isfinite(shares):
            raise DataFetchError(f"Holding at index {index} has non-finite shares")
        if shares < 0:
            raise DataFetchError(f"Holding at index {index} has negative shares")
        return HoldingRecord(id=str(row_id), symbol=str(symbol), shares=shares)

    async def list(self) -> list[HoldingRecord]:
        try:
            response = await self.client.select_all()
        except (httpx.HTTPError, ValueError) as exc:
            raise DataFetchError(f"Failed to list holdings: {exc}") from exc
        if response is None:
            return []
        if not isinstance(response, list):
            raise DataFetchError("Expected holdings list from Supabase")
        return [self.parse_record(item, index) for index, item in enumerate(response)]

    async def insert(self, symbol: str, shares: float) -> str:
        try:
            response = await self.client.insert({"symbol": symbol, "shares": shares})
        except (httpx.HTTPError, ValueError) as exc:
            raise DataFetchError(f"Failed to add {symbol}: {exc}") from exc
        if not isinstance(response, list) or not response or not isinstance(response[0], dict):
            raise DataFetchError("Insert did not return the created row")
        row_id = response[0].get("id")
        if row_id is None:
            raise DataFetchError("Insert response did not contain an id")
        logger.info("holding_inserted", extra={"symbol": symbol, "holding_id": str(row_id)})
        return str(row_id)

    async def delete(self, holding_id: str) -> None:
        try:
            response = await self.client.delete_by_id(holding_id)
        except (httpx.HTTPError, ValueError) as exc:
            raise DataFetchError(f"Failed to delete holding {holding_id}: {exc}") from exc
        if not response:
            raise DataFetchError(f"Holding {holding_id} not found")
        logger.info("holding_deleted", extra={"holding_id": holding_id})

    async def update_shares(self, holding_id: str, shares: float) -> None:
        try:
            response = await self.client.update_by_id(holding_id, {"shares": shares})
        except (httpx.HTTPError, ValueError) as exc:
            raise DataFetchError(f"Failed to update holding {holding_id}: {exc}") from exc
        if not response:
            raise DataFetchError(f"Holding {holding_id} not found")
        logger.info("holding_updated", extra={"holding_id": holding_id, "shares": shares})
