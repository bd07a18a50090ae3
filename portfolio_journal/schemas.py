from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DATA_SOURCE_LIVE = "live"
DATA_SOURCE_MOCK = "mock"
DataSource = Literal[DATA_SOURCE_LIVE, DATA_SOURCE_MOCK]

UNKNOWN_INDUSTRY = "Others"

ViewStatus = Literal["idle", "ready", "error"]
PageAction = Literal["next", "previous", "jump"]


class HoldingRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    shares: float = Field(ge=0, allow_inf_nan=False)


class QuoteSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    price: float
    absolute_change: float
    percent_change: float


class ProfileSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry: str = UNKNOWN_INDUSTRY


class EnrichedHolding(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    shares: float
    price: float
    absolute_change: float
    percent_change: float
    industry: str
    market_value: float
    daily_profit_loss: float


class PortfolioSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_market_value: float = 0.0
    total_daily_pl: float = 0.0


class AllocationBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry: str
    value: float
    percentage: float


class PortfolioState(BaseModel):
    """Everything the rendering layer sees; replaced wholesale per fetch."""

    model_config = ConfigDict(frozen=True)

    status: ViewStatus = "idle"
    error: str | None = None
    loading: bool = False
    generation: int = 0
    holdings: list[EnrichedHolding] = Field(default_factory=list)
    summary: PortfolioSummary = Field(default_factory=PortfolioSummary)
    allocation: list[AllocationBucket] = Field(default_factory=list)
    page_size: int = 5
    page_count: int = 0
    current_page: int = 0
    page: list[EnrichedHolding] = Field(default_factory=list)


class UnlockRequest(BaseModel):
    session_id: str = "default"
    password: str = ""


class UnlockResponse(BaseModel):
    session_id: str
    authenticated: bool


class AddHoldingRequest(BaseModel):
    session_id: str = "default"
    symbol: str = Field(min_length=1)
    shares: float = Field(gt=0, allow_inf_nan=False)


class UpdateSharesRequest(BaseModel):
    session_id: str = "default"
    shares: float = Field(ge=0, allow_inf_nan=False)


class PageRequest(BaseModel):
    action: PageAction
    index: int | None = None


class HealthResponse(BaseModel):
    status: str
    data_source: DataSource
    market_data_configured: bool
    database_configured: bool
    access_gate_configured: bool
