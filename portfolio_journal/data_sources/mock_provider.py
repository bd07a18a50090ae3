from itertools import count

from portfolio_journal.errors import DataFetchError
from portfolio_journal.schemas import HoldingRecord, ProfileSnapshot, QuoteSnapshot

MOCK_HOLDINGS = [
    {"symbol": "AAPL", "shares": 10},
    {"symbol": "MSFT", "shares": 5},
    {"symbol": "NVDA", "shares": 8},
    {"symbol": "JPM", "shares": 12},
    {"symbol": "KO", "shares": 30},
    {"symbol": "VTI", "shares": 6},
]

MOCK_QUOTES = {
    "AAPL": {"price": 150.0, "absolute_change": 2.0, "percent_change": 1.35},
    "MSFT": {"price": 300.0, "absolute_change": -3.0, "percent_change": -1.0},
    "NVDA": {"price": 120.0, "absolute_change": 4.2, "percent_change": 3.63},
    "JPM": {"price": 195.0, "absolute_change": -0.8, "percent_change": -0.41},
    "KO": {"price": 62.0, "absolute_change": 0.3, "percent_change": 0.49},
    "VTI": {"price": 280.0, "absolute_change": 1.1, "percent_change": 0.39},
}

# VTI deliberately has no profile so the "Others" bucket is exercised.
MOCK_PROFILES = {
    "AAPL": "Technology",
    "MSFT": "Technology",
    "NVDA": "Semiconductors",
    "JPM": "Banking",
    "KO": "Beverages",
}


class MockHoldingsRepository:
    def __init__(self, holdings: list[dict] | None = None) -> None:
        self._ids = count(1)
        self._rows: dict[str, HoldingRecord] = {}
        for item in MOCK_HOLDINGS if holdings is None else holdings:
            holding_id = self._next_id()
            self._rows[holding_id] = HoldingRecord(
                id=holding_id, symbol=item["symbol"], shares=item["shares"]
            )

    def _next_id(self) -> str:
        return f"h-{next(self._ids)}"

    async def list(self) -> list[HoldingRecord]:
        return list(self._rows.values())

    async def insert(self, symbol: str, shares: float) -> str:
        holding_id = self._next_id()
        self._rows[holding_id] = HoldingRecord(id=holding_id, symbol=symbol, shares=shares)
        return holding_id

    async def delete(self, holding_id: str) -> None:
        if holding_id not in self._rows:
            raise DataFetchError(f"Holding {holding_id} not found")
        del self._rows[holding_id]

    async def update_shares(self, holding_id: str, shares: float) -> None:
        existing = self._rows.get(holding_id)
        if existing is None:
            raise DataFetchError(f"Holding {holding_id} not found")
        self._rows[holding_id] = existing.model_copy(update={"shares": shares})


class MockQuoteProvider:
    def __init__(self, quotes: dict[str, dict] | None = None) -> None:
        self.quotes = MOCK_QUOTES if quotes is None else quotes

    async def fetch(self, symbol: str) -> QuoteSnapshot | None:
        quote = self.quotes.get(symbol.upper())
        if quote is None:
            return None
        return QuoteSnapshot(**quote)


class MockProfileProvider:
    def __init__(self, profiles: dict[str, str] | None = None) -> None:
        self.profiles = MOCK_PROFILES if profiles is None else profiles

    async def fetch(self, symbol: str) -> ProfileSnapshot | None:
        industry = self.profiles.get(symbol.upper())
        if industry is None:
            return None
        return ProfileSnapshot(industry=industry)
