"""
Pydantic schemas for API request/response models.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stockfolio.core.constants import DEFAULT_CURRENCY, DEFAULT_DRIFT_THRESHOLD_PERCENT
from stockfolio.core.enums import (
    DividendFrequency,
    PortfolioType,
    RebalanceAction,
    RebalanceFrequency,
    RiskLevel,
)


class PortfolioCreateRequest(BaseModel):
    """Request model for portfolio creation.

    Budget and allocation limits are checked together by the engine so
    that every violated rule is reported at once.
    """

    owner_id: str = Field(..., min_length=1, description="Owning user id")
    name: str = Field(..., min_length=1, description="Portfolio name")
    budget: float = Field(..., description="Capital allocated to the portfolio")
    max_holdings: int = Field(..., description="Maximum number of tradable holdings")
    max_allocation_percent: float = Field(..., description="Maximum weight per holding (%)")
    description: str = ""
    portfolio_type: PortfolioType = PortfolioType.CUSTOM
    risk_level: RiskLevel | None = None
    rebalance_frequency: RebalanceFrequency | None = None
    tags: list[str] = Field(default_factory=list)
    initial_cash: float | None = Field(default=None, gt=0, description="Seed cash holding")


class HoldingCreateRequest(BaseModel):
    """Request model for adding a tradable holding."""

    ticker: str = Field(..., min_length=1, description="Exchange ticker symbol")
    name: str = Field(..., min_length=1)
    quantity: float = Field(..., ge=0)
    price: float = Field(..., ge=0, description="Current unit price")
    average_cost: float | None = Field(default=None, ge=0, description="Per-unit cost basis")
    target_weight: float | None = Field(default=None, ge=0, le=100)
    sector: str | None = None
    exchange: str | None = None


class TargetWeightRequest(BaseModel):
    """Request model for setting or clearing a target weight."""

    target_weight: float | None = Field(default=None, ge=0, le=100)


class DividendRequest(BaseModel):
    """Request model for recording a dividend."""

    amount: float = Field(..., ge=0)
    ex_date: date
    pay_date: date
    frequency: DividendFrequency = DividendFrequency.QUARTERLY
    currency: str = DEFAULT_CURRENCY
    notes: str | None = None

    @field_validator("frequency", mode="before")
    @classmethod
    def normalize_frequency(cls, v):
        """Accept spellings such as "semi-annual" or "Quarterly"."""
        if isinstance(v, str):
            try:
                return DividendFrequency.from_string(v)
            except ValueError:
                return v
        return v

    @field_validator("pay_date")
    @classmethod
    def validate_pay_date(cls, v: date, info) -> date:
        """Validate that the dividend is paid on or after its ex-date."""
        if "ex_date" in info.data and v < info.data["ex_date"]:
            raise ValueError("pay_date must not be before ex_date")
        return v


class BatchUpdateItem(BaseModel):
    holding_id: str
    price: float | None = None
    quantity: float | None = None


class BatchUpdateRequest(BaseModel):
    """Request model for a batch price/quantity update."""

    updates: list[BatchUpdateItem]
    notes: str | None = None


class QuoteUpdateRequest(BaseModel):
    """Request model for applying market-data quotes keyed by ticker."""

    quotes: dict[str, float | dict[str, float]]
    notes: str | None = None


class BudgetTopUpRequest(BaseModel):
    amount: float = Field(..., gt=0, description="Capital to add to the budget")


class ConstraintValidationRequest(BaseModel):
    """Request model for checking a candidate constraint configuration."""

    max_holdings: int
    max_allocation_percent: float
    budget: float


class ConstraintsRequest(BaseModel):
    """Request model for constraint updates; omitted values are kept."""

    max_holdings: int | None = None
    max_allocation_percent: float | None = None
    budget: float | None = None


class PriceHistoryEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    price: float
    quantity: float
    date: datetime
    notes: str | None = None


class DividendResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    amount: float
    ex_date: date
    pay_date: date
    frequency: DividendFrequency
    currency: str
    notes: str | None = None


class HoldingResponse(BaseModel):
    """Response model for a holding."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    ticker: str
    name: str
    quantity: float
    current_price: float
    average_cost: float | None = None
    target_weight: float | None = None
    weight: float
    total_value: float
    sector: str | None = None
    exchange: str | None = None
    is_cash_holding: bool
    price_history: list[PriceHistoryEntryResponse] = Field(default_factory=list)
    dividends: list[DividendResponse] = Field(default_factory=list)


class PortfolioResponse(BaseModel):
    """Response model for a portfolio snapshot."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    name: str
    description: str
    portfolio_type: PortfolioType
    budget: float
    max_holdings: int
    max_allocation_percent: float
    holdings: list[HoldingResponse]
    risk_level: RiskLevel | None = None
    rebalance_frequency: RebalanceFrequency | None = None
    tags: list[str]
    total_value: float
    total_return: float
    total_return_percent: float
    available_cash: float
    cash_allocation_percent: float
    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int


class HoldingChangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    holding_id: str
    old_price: float
    new_price: float
    old_quantity: float
    new_quantity: float
    price_delta: float
    value_impact: float


class BatchSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    updated_count: int
    total_value_impact: float
    changes: list[HoldingChangeResponse]


class BatchUpdateResponse(BaseModel):
    """Response model for batch and quote updates."""

    model_config = ConfigDict(from_attributes=True)

    portfolio: PortfolioResponse
    summary: BatchSummaryResponse
    warnings: list[str]


class CashPositionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_invested: float
    available_cash: float
    cash_allocation_percent: float


class RebalanceRecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    holding_id: str
    ticker: str
    current_weight: float
    target_weight: float
    drift: float
    action: RebalanceAction
    recommended_quantity_delta: int
    estimated_cost: float


class RebalancePlanResponse(BaseModel):
    """Response model for a rebalance plan."""

    drift_threshold_percent: float = DEFAULT_DRIFT_THRESHOLD_PERCENT
    recommendations: list[RebalanceRecommendationResponse]


class PriceRangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    min: float
    max: float


class PriceHistoryAnalysisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    average_price: float
    price_range: PriceRangeResponse
    price_change: float
    price_change_percent: float
    sample_size: int


class DividendSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_amount: float
    year_to_date: float
    average_yield: float
    year: int | None = None


class SectorAllocationResponse(BaseModel):
    allocation: dict[str, float]


class ValidationResponse(BaseModel):
    """Response model for constraint validation."""

    is_valid: bool
    errors: list[str]
