import asyncio

import pytest

from portfolio_journal.aggregator import aggregate
from portfolio_journal.allocation import compute_allocation
from portfolio_journal.errors import DataFetchError
from tests.fakes import FakeProfiles, FakeQuotes, record


@pytest.mark.asyncio
async def test_tied_values_keep_repository_order():
    records = [record("1", "AAPL", 10), record("2", "MSFT", 5)]
    quotes = FakeQuotes({"AAPL": (150.0, 2.0, 1.35), "MSFT": (300.0, -3.0, -1.0)})
    profiles = FakeProfiles({"AAPL": "Technology", "MSFT": "Technology"})

    holdings, summary = await aggregate(records, quotes, profiles)

    assert [h.symbol for h in holdings] == ["AAPL", "MSFT"]
    assert [h.market_value for h in holdings] == [1500.0, 1500.0]
    assert summary.total_market_value == 3000.0
    assert summary.total_daily_pl == 5.0
    assert compute_allocation(holdings, summary.total_market_value) == {"Technology": 100.0}


@pytest.mark.asyncio
async def test_empty_repository_yields_empty_view():
    holdings, summary = await aggregate([], FakeQuotes({}), FakeProfiles({}))
    assert holdings == []
    assert summary.total_market_value == 0
    assert summary.total_daily_pl == 0
    assert compute_allocation(holdings, summary.total_market_value) == {}


@pytest.mark.asyncio
async def test_holding_without_quote_is_dropped_from_output_and_totals():
    records = [record("1", "AAPL", 10), record("2", "GONE", 100)]
    quotes = FakeQuotes({"AAPL": (150.0, 2.0, 1.35)})

    for profiles in (FakeProfiles({}), FakeProfiles({"GONE": "Mining", "AAPL": "Technology"})):
        holdings, summary = await aggregate(records, quotes, profiles)
        assert [h.symbol for h in holdings] == ["AAPL"]
        assert summary.total_market_value == 1500.0
        assert summary.total_daily_pl == 20.0


@pytest.mark.asyncio
async def test_holding_without_profile_is_filed_under_others():
    records = [record("1", "AAPL", 10), record("2", "VTI", 10)]
    quotes = FakeQuotes({"AAPL": (100.0, 1.0, 1.0), "VTI": (300.0, 1.0, 0.3)})
    profiles = FakeProfiles({"AAPL": "Technology"})

    holdings, summary = await aggregate(records, quotes, profiles)

    assert [(h.symbol, h.industry) for h in holdings] == [("VTI", "Others"), ("AAPL", "Technology")]
    assert compute_allocation(holdings, summary.total_market_value) == {"Others": 75.0, "Technology": 25.0}


@pytest.mark.asyncio
async def test_holdings_sorted_by_market_value_descending():
    records = [record("1", "KO", 1), record("2", "NVDA", 10), record("3", "JPM", 5)]
    quotes = FakeQuotes({"KO": (60.0, 0, 0), "NVDA": (120.0, 0, 0), "JPM": (200.0, 0, 0)})

    holdings, _ = await aggregate(records, quotes, FakeProfiles({}))

    assert [h.symbol for h in holdings] == ["NVDA", "JPM", "KO"]


@pytest.mark.asyncio
async def test_total_is_exact_sum_of_market_values():
    records = [record(str(i), f"S{i}", shares) for i, shares in enumerate([0.1, 3.3, 7.7, 1.01, 2.5])]
    quotes = FakeQuotes({f"S{i}": (price, 0.01, 0.1) for i, price in enumerate([10.1, 0.3, 99.99, 42.42, 7.0])})

    holdings, summary = await aggregate(records, quotes, FakeProfiles({}))

    assert summary.total_market_value == sum(h.market_value for h in holdings)
    assert summary.total_daily_pl == sum(h.daily_profit_loss for h in holdings)


@pytest.mark.asyncio
async def test_market_data_requests_run_concurrently():
    in_flight = {"now": 0, "peak": 0}

    class SlowQuotes:
        async def fetch(self, symbol: str):
            in_flight["now"] += 1
            in_flight["peak"] = max(in_flight["peak"], in_flight["now"])
            await asyncio.sleep(0.01)
            in_flight["now"] -= 1
            return None

    records = [record(str(i), f"S{i}", 1) for i in range(4)]
    holdings, _ = await aggregate(records, SlowQuotes(), FakeProfiles({}))

    assert holdings == []
    assert in_flight["peak"] == 4


@pytest.mark.asyncio
async def test_collaborator_failure_propagates_without_partial_result():
    class BrokenProfiles:
        async def fetch(self, symbol: str):
            raise DataFetchError("boom")

    with pytest.raises(DataFetchError):
        await aggregate([record("1", "AAPL", 1)], FakeQuotes({"AAPL": (1.0, 0, 0)}), BrokenProfiles())
