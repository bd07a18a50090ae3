from portfolio_journal.aggregator import aggregate
from portfolio_journal.allocation import allocation_buckets
from portfolio_journal.data_sources.base import HoldingsRepository, ProfileProvider, QuoteProvider
from portfolio_journal.errors import ConfigurationError, DataFetchError
from portfolio_journal.paginator import DEFAULT_PAGE_SIZE, Paginator
from portfolio_journal.schemas import EnrichedHolding, PortfolioState
from portfolio_journal.telemetry import get_logger


logger = get_logger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load portfolio data."


class PortfolioView:
    """Owns the rendered portfolio: holdings, totals, allocation and carousel page.

    Each refresh takes a new generation number and only commits if no newer
    refresh has started meanwhile, so a slow cycle cannot overwrite a fresher
    one. Commits swap in a whole new :class:`PortfolioState`.

    Mutations never patch local state; after the repository confirms a change
    the view re-fetches everything.
    """

    def __init__(
        self,
        repository: HoldingsRepository,
        quotes: QuoteProvider,
        profiles: ProfileProvider,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.repository = repository
        self.quotes = quotes
        self.profiles = profiles
        self._paginator: Paginator[EnrichedHolding] = Paginator(page_size=page_size)
        self._committed = PortfolioState(page_size=page_size)
        self._generation = 0
        self._in_flight = 0

    @property
    def loaded(self) -> bool:
        return self._committed.status != "idle"

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def state(self) -> PortfolioState:
        return self._committed.model_copy(
            update={
                "loading": self.loading,
                "page_count": self._paginator.page_count,
                "current_page": self._paginator.current_index,
                "page": self._paginator.current_page,
            }
        )

    def _commit(self, state: PortfolioState) -> None:
        self._committed = state
        self._paginator.replace(state.holdings)

    async def _load(self):
        self._in_flight += 1
        try:
            records = await self.repository.list()
            holdings, summary = await aggregate(records, self.quotes, self.profiles)
            return holdings, summary, allocation_buckets(holdings, summary.total_market_value)
        finally:
            self._in_flight -= 1

    async def refresh(self) -> PortfolioState:
        self._generation += 1
        generation = self._generation
        logger.info("portfolio_refresh_started", extra={"generation": generation})
        try:
            holdings, summary, allocation = await self._load()
        except (DataFetchError, ConfigurationError) as exc:
            if generation != self._generation:
                logger.info("portfolio_refresh_discarded", extra={"generation": generation, "outcome": "error"})
                return self.state
            logger.warning(
                "portfolio_refresh_failed",
                extra={"generation": generation, "error_type": type(exc).__name__, "error": str(exc)},
            )
            self._commit(
                PortfolioState(
                    status="error",
                    error=LOAD_ERROR_MESSAGE,
                    generation=generation,
                    page_size=self._paginator.page_size,
                )
            )
            return self.state

        if generation != self._generation:
            logger.info("portfolio_refresh_discarded", extra={"generation": generation, "outcome": "success"})
            return self.state

        self._commit(
            PortfolioState(
                status="ready",
                generation=generation,
                holdings=holdings,
                summary=summary,
                allocation=allocation,
                page_size=self._paginator.page_size,
            )
        )
        logger.info(
            "portfolio_refresh_completed",
            extra={
                "generation": generation,
                "holdings": len(holdings),
                "total_market_value": summary.total_market_value,
                "total_daily_pl": summary.total_daily_pl,
            },
        )
        return self.state

    async def ensure_loaded(self) -> PortfolioState:
        if not self.loaded and not self.loading:
            return await self.refresh()
        return self.state

    @staticmethod
    def _normalize_symbol(symbol: str) -> str:
        normalized = symbol.strip().upper()
        if not normalized:
            raise ValueError("Symbol is required")
        return normalized

    async def add_holding(self, symbol: str, shares: float) -> PortfolioState:
        normalized = self._normalize_symbol(symbol)
        if shares <= 0:
            raise ValueError("Shares must be greater than zero")
        await self.repository.insert(normalized, shares)
        return await self.refresh()

    async def remove_holding(self, holding_id: str) -> PortfolioState:
        await self.repository.delete(holding_id)
        return await self.refresh()

    async def update_shares(self, holding_id: str, shares: float) -> PortfolioState:
        if shares < 0:
            raise ValueError("Shares cannot be negative")
        await self.repository.update_shares(holding_id, shares)
        return await self.refresh()

    def next_page(self) -> PortfolioState:
        self._paginator.next()
        return self.state

    def previous_page(self) -> PortfolioState:
        self._paginator.previous()
        return self.state

    def jump_to_page(self, index: int) -> PortfolioState:
        self._paginator.jump(index)
        return self.state

    def on_carousel_position(self, index: int) -> PortfolioState:
        self._paginator.on_carousel_position(index)
        return self.state
