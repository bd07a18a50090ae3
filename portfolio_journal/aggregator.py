"""Join holdings with market data into the enriched portfolio view."""

import asyncio

from portfolio_journal.data_sources.base import ProfileProvider, QuoteProvider
from portfolio_journal.schemas import (
    UNKNOWN_INDUSTRY,
    EnrichedHolding,
    HoldingRecord,
    PortfolioSummary,
    ProfileSnapshot,
    QuoteSnapshot,
)
from portfolio_journal.telemetry import get_logger


logger = get_logger(__name__)


def enrich_holding(
    record: HoldingRecord,
    quote: QuoteSnapshot,
    profile: ProfileSnapshot | None,
) -> EnrichedHolding:
    industry = profile.industry if profile is not None else UNKNOWN_INDUSTRY
    return EnrichedHolding(
        id=record.id,
        symbol=record.symbol,
        shares=record.shares,
        price=quote.price,
        absolute_change=quote.absolute_change,
        percent_change=quote.percent_change,
        industry=industry,
        market_value=quote.price * record.shares,
        daily_profit_loss=quote.absolute_change * record.shares,
    )


def summarize(holdings: list[EnrichedHolding]) -> PortfolioSummary:
    return PortfolioSummary(
        total_market_value=sum(h.market_value for h in holdings),
        total_daily_pl=sum(h.daily_profit_loss for h in holdings),
    )


async def _fetch_market_data(
    record: HoldingRecord,
    quotes: QuoteProvider,
    profiles: ProfileProvider,
) -> tuple[QuoteSnapshot | None, ProfileSnapshot | None]:
    quote, profile = await asyncio.gather(
        quotes.fetch(record.symbol),
        profiles.fetch(record.symbol),
    )
    return quote, profile


async def aggregate(
    records: list[HoldingRecord],
    quotes: QuoteProvider,
    profiles: ProfileProvider,
) -> tuple[list[EnrichedHolding], PortfolioSummary]:
    """Enrich ``records`` with quotes and profiles and total them.

    Every symbol's quote and profile are requested at once, so the whole pass
    takes as long as the slowest single call. A holding without a quote is
    dropped; one without a profile is filed under ``"Others"``. The result is
    ordered by market value, largest first, keeping input order for ties.

    Nothing is returned until every fetch has settled. If any collaborator
    raises, the exception propagates and no partial result escapes.
    """
    market_data = await asyncio.gather(
        *(_fetch_market_data(record, quotes, profiles) for record in records)
    )

    enriched: list[EnrichedHolding] = []
    for record, (quote, profile) in zip(records, market_data):
        if quote is None:
            logger.info("holding_dropped", extra={"symbol": record.symbol, "reason": "quote_unavailable"})
            continue
        enriched.append(enrich_holding(record, quote, profile))

    # sorted() is stable, so equal values keep repository order.
    enriched = sorted(enriched, key=lambda h: h.market_value, reverse=True)
    summary = summarize(enriched)
    logger.debug(
        "portfolio_aggregated",
        extra={
            "records": len(records),
            "holdings": len(enriched),
            "total_market_value": summary.total_market_value,
        },
    )
    return enriched, summary
