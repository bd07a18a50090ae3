from dataclasses import dataclass

from portfolio_journal.config import Settings
from portfolio_journal.data_sources.base import HoldingsRepository, ProfileProvider, QuoteProvider
from portfolio_journal.data_sources.finnhub_provider import FinnhubProfileProvider, FinnhubQuoteProvider
from portfolio_journal.data_sources.mock_provider import (
    MockHoldingsRepository,
    MockProfileProvider,
    MockQuoteProvider,
)
from portfolio_journal.data_sources.supabase_repository import SupabaseHoldingsRepository
from portfolio_journal.finnhub_client import FinnhubClient
from portfolio_journal.schemas import DATA_SOURCE_MOCK, DataSource
from portfolio_journal.supabase_client import SupabaseClient


@dataclass
class DataSources:
    repository: HoldingsRepository
    quotes: QuoteProvider
    profiles: ProfileProvider


def build_data_sources(data_source: DataSource, config: Settings) -> DataSources:
    if data_source == DATA_SOURCE_MOCK:
        return DataSources(
            repository=MockHoldingsRepository(),
            quotes=MockQuoteProvider(),
            profiles=MockProfileProvider(),
        )

    finnhub = FinnhubClient(
        base_url=config.finnhub_base_url,
        api_key=config.finnhub_api_key or None,
        timeout_seconds=config.request_timeout_seconds,
    )
    supabase = SupabaseClient(
        base_url=config.supabase_url,
        api_key=config.supabase_key or None,
        table=config.supabase_portfolio_table,
        timeout_seconds=config.request_timeout_seconds,
    )
    return DataSources(
        repository=SupabaseHoldingsRepository(supabase),
        quotes=FinnhubQuoteProvider(finnhub),
        profiles=FinnhubProfileProvider(finnhub),
    )
