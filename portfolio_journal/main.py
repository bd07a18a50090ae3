from fastapi import FastAPI, HTTPException

from portfolio_journal.access_gate import AccessGate
from portfolio_journal.config import settings
from portfolio_journal.data_sources import build_data_sources
from portfolio_journal.errors import AuthenticationError, ConfigurationError, DataFetchError
from portfolio_journal.portfolio_view import PortfolioView
from portfolio_journal.schemas import (
    DATA_SOURCE_MOCK,
    AddHoldingRequest,
    HealthResponse,
    PageRequest,
    PortfolioState,
    UnlockRequest,
    UnlockResponse,
    UpdateSharesRequest,
)
from portfolio_journal.telemetry import configure_logging, get_logger

configure_logging(
    level=settings.log_level,
    log_format=settings.log_format,
    include_stack=settings.log_include_stack,
    redact_fields_raw=settings.log_redact_fields,
)
logger = get_logger(__name__)

app = FastAPI(title="Portfolio Journal", version="0.1.0")


def build_view() -> PortfolioView:
    sources = build_data_sources(settings.default_data_source, settings)
    return PortfolioView(
        repository=sources.repository,
        quotes=sources.quotes,
        profiles=sources.profiles,
        page_size=settings.page_size,
    )


PORTFOLIO_VIEW = build_view()
# Per browser session; nothing here survives a restart.
SESSION_GATES: dict[str, AccessGate] = {}


def get_gate(session_id: str) -> AccessGate:
    gate = SESSION_GATES.get(session_id)
    if gate is None:
        gate = AccessGate(settings.admin_password)
        SESSION_GATES[session_id] = gate
    return gate


def require_unlocked(session_id: str) -> None:
    # Lookup only; gates are created by /session/unlock alone.
    gate = SESSION_GATES.get(session_id)
    if gate is None or not gate.authenticated:
        raise HTTPException(
            status_code=401,
            detail="Session is locked. Call /session/unlock with the management password first.",
        )


async def run_mutation(action: str, coro) -> PortfolioState:
    try:
        return await coro
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ConfigurationError as exc:
        logger.warning("holding_mutation_unconfigured", extra={"action": action, "error": str(exc)})
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except DataFetchError as exc:
        logger.warning("holding_mutation_failed", extra={"action": action, "error": str(exc)})
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    logger.debug("health_check", extra={"data_source": settings.default_data_source})
    mock = settings.default_data_source == DATA_SOURCE_MOCK
    return HealthResponse(
        status="ok",
        data_source=settings.default_data_source,
        market_data_configured=mock or bool(settings.finnhub_api_key),
        database_configured=mock or bool(settings.supabase_url and settings.supabase_key),
        access_gate_configured=bool(settings.admin_password),
    )


@app.get("/portfolio", response_model=PortfolioState)
async def get_portfolio() -> PortfolioState:
    return await PORTFOLIO_VIEW.ensure_loaded()


@app.post("/portfolio/refresh", response_model=PortfolioState)
async def refresh_portfolio() -> PortfolioState:
    return await PORTFOLIO_VIEW.refresh()


@app.post("/portfolio/page", response_model=PortfolioState)
async def move_page(request: PageRequest) -> PortfolioState:
    if request.action == "next":
        return PORTFOLIO_VIEW.next_page()
    if request.action == "previous":
        return PORTFOLIO_VIEW.previous_page()
    if request.index is None:
        raise HTTPException(status_code=422, detail="index is required for action 'jump'")
    return PORTFOLIO_VIEW.on_carousel_position(request.index)


@app.post("/session/unlock", response_model=UnlockResponse)
async def unlock_session(request: UnlockRequest) -> UnlockResponse:
    logger.info("session_unlock_requested", extra={"session_id": request.session_id})
    gate = get_gate(request.session_id)
    try:
        gate.submit(request.password)
    except ConfigurationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return UnlockResponse(session_id=request.session_id, authenticated=gate.authenticated)


@app.post("/holdings", response_model=PortfolioState)
async def add_holding(request: AddHoldingRequest) -> PortfolioState:
    require_unlocked(request.session_id)
    logger.info("holding_add_requested", extra={"session_id": request.session_id, "symbol": request.symbol})
    return await run_mutation("add", PORTFOLIO_VIEW.add_holding(request.symbol, request.shares))


@app.patch("/holdings/{holding_id}", response_model=PortfolioState)
async def update_holding(holding_id: str, request: UpdateSharesRequest) -> PortfolioState:
    require_unlocked(request.session_id)
    logger.info("holding_update_requested", extra={"session_id": request.session_id, "holding_id": holding_id})
    return await run_mutation("update", PORTFOLIO_VIEW.update_shares(holding_id, request.shares))


@app.delete("/holdings/{holding_id}", response_model=PortfolioState)
async def delete_holding(holding_id: str, session_id: str = "default") -> PortfolioState:
    require_unlocked(session_id)
    logger.info("holding_delete_requested", extra={"session_id": session_id, "holding_id": holding_id})
    return await run_mutation("delete", PORTFOLIO_VIEW.remove_holding(holding_id))
