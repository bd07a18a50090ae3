from typing import Protocol

from portfolio_journal.schemas import HoldingRecord, ProfileSnapshot, QuoteSnapshot


class HoldingsRepository(Protocol):
    async def list(self) -> list[HoldingRecord]: ...

    async def insert(self, symbol: str, shares: float) -> str: ...

    async def delete(self, holding_id: str) -> None: ...

    async def update_shares(self, holding_id: str, shares: float) -> None: ...


class QuoteProvider(Protocol):
    async def fetch(self, symbol: str) -> QuoteSnapshot | None: ...


class ProfileProvider(Protocol):
    async def fetch(self, symbol: str) -> ProfileSnapshot | None: ...
