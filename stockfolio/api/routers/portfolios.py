"""
Portfolio API endpoints.

Mutating endpoints load the latest snapshot, run one engine operation,
and save the result. Passing ``version`` makes the save conditional on
the client's copy still being current.
"""

from dataclasses import replace

from fastapi import APIRouter, Depends, Query, Response, status

from stockfolio.api.dependencies import get_engine, get_repository
from stockfolio.api.schemas.api_models import (
    BatchUpdateRequest,
    BatchUpdateResponse,
    BudgetTopUpRequest,
    CashPositionResponse,
    ConstraintsRequest,
    DividendRequest,
    DividendSummaryResponse,
    HoldingCreateRequest,
    PortfolioCreateRequest,
    PortfolioResponse,
    PriceHistoryAnalysisResponse,
    QuoteUpdateRequest,
    RebalancePlanResponse,
    SectorAllocationResponse,
    TargetWeightRequest,
)
from stockfolio.core.constants import DEFAULT_DRIFT_THRESHOLD_PERCENT
from stockfolio.core.engine import PortfolioEngine
from stockfolio.core.exceptions.portfolio import HoldingNotFoundError
from stockfolio.core.interfaces.storage import IPortfolioRepository
from stockfolio.core.models import BatchUpdate, DividendEntry, Holding, Portfolio

router = APIRouter()

VersionQuery = Query(default=None, ge=0, description="Expected stored version")


def _load_for_update(
    repository: IPortfolioRepository, portfolio_id: str, version: int | None
) -> Portfolio:
    portfolio = repository.load(portfolio_id)
    if version is not None:
        portfolio = replace(portfolio, version=version)
    return portfolio


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_portfolio(
    request: PortfolioCreateRequest,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> PortfolioResponse:
    """Create a portfolio after validating its constraints."""
    portfolio = engine.create_portfolio(
        owner_id=request.owner_id,
        name=request.name,
        budget=request.budget,
        max_holdings=request.max_holdings,
        max_allocation_percent=request.max_allocation_percent,
        description=request.description,
        portfolio_type=request.portfolio_type,
        risk_level=request.risk_level,
        rebalance_frequency=request.rebalance_frequency,
        tags=tuple(request.tags),
        initial_cash=request.initial_cash,
    )
    return PortfolioResponse.model_validate(repository.save(portfolio))


@router.get("")
async def list_portfolios(
    owner_id: str = Query(..., min_length=1),
    repository: IPortfolioRepository = Depends(get_repository),
) -> list[PortfolioResponse]:
    """List the portfolios of one owner."""
    return [PortfolioResponse.model_validate(p) for p in repository.list_for_owner(owner_id)]


@router.get("/{portfolio_id}")
async def get_portfolio(
    portfolio_id: str,
    repository: IPortfolioRepository = Depends(get_repository),
) -> PortfolioResponse:
    """Get the latest snapshot of a portfolio."""
    return PortfolioResponse.model_validate(repository.load(portfolio_id))


@router.delete("/{portfolio_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_portfolio(
    portfolio_id: str,
    repository: IPortfolioRepository = Depends(get_repository),
) -> Response:
    """Delete a portfolio."""
    repository.delete(portfolio_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{portfolio_id}/holdings", status_code=status.HTTP_201_CREATED)
async def add_holding(
    portfolio_id: str,
    request: HoldingCreateRequest,
    version: int | None = VersionQuery,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> PortfolioResponse:
    """Add a tradable holding."""
    portfolio = _load_for_update(repository, portfolio_id, version)
    holding = Holding.create(
        ticker=request.ticker,
        name=request.name,
        quantity=request.quantity,
        price=request.price,
        average_cost=request.average_cost,
        target_weight=request.target_weight,
        sector=request.sector,
        exchange=request.exchange,
    )
    updated = engine.add_holding(portfolio, holding)
    return PortfolioResponse.model_validate(repository.save(updated))


@router.delete("/{portfolio_id}/holdings/{holding_id}")
async def remove_holding(
    portfolio_id: str,
    holding_id: str,
    version: int | None = VersionQuery,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> PortfolioResponse:
    """Remove a holding."""
    portfolio = _load_for_update(repository, portfolio_id, version)
    updated = engine.remove_holding(portfolio, holding_id)
    return PortfolioResponse.model_validate(repository.save(updated))


@router.put("/{portfolio_id}/holdings/{holding_id}/target-weight")
async def set_target_weight(
    portfolio_id: str,
    holding_id: str,
    request: TargetWeightRequest,
    version: int | None = VersionQuery,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> PortfolioResponse:
    """Set or clear a holding's target weight."""
    portfolio = _load_for_update(repository, portfolio_id, version)
    updated = engine.set_target_weight(portfolio, holding_id, request.target_weight)
    return PortfolioResponse.model_validate(repository.save(updated))


@router.post("/{portfolio_id}/holdings/{holding_id}/dividends")
async def add_dividend(
    portfolio_id: str,
    holding_id: str,
    request: DividendRequest,
    version: int | None = VersionQuery,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> PortfolioResponse:
    """Record a dividend on a holding."""
    portfolio = _load_for_update(repository, portfolio_id, version)
    dividend = DividendEntry(
        amount=request.amount,
        ex_date=request.ex_date,
        pay_date=request.pay_date,
        frequency=request.frequency,
        currency=request.currency,
        notes=request.notes,
    )
    updated = engine.add_dividend(portfolio, holding_id, dividend)
    return PortfolioResponse.model_validate(repository.save(updated))


@router.get("/{portfolio_id}/holdings/{holding_id}/price-history")
async def analyze_price_history(
    portfolio_id: str,
    holding_id: str,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> PriceHistoryAnalysisResponse:
    """Summarize a holding's price history."""
    holding = repository.load(portfolio_id).find_holding(holding_id)
    if holding is None:
        raise HoldingNotFoundError(holding_id)
    analysis = engine.analyze_price_history(holding.price_history)
    return PriceHistoryAnalysisResponse.model_validate(analysis)


@router.post("/{portfolio_id}/batch-update")
async def apply_batch_update(
    portfolio_id: str,
    request: BatchUpdateRequest,
    version: int | None = VersionQuery,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> BatchUpdateResponse:
    """Apply price/quantity corrections to several holdings at once."""
    portfolio = _load_for_update(repository, portfolio_id, version)
    updates = [
        BatchUpdate(holding_id=item.holding_id, price=item.price, quantity=item.quantity)
        for item in request.updates
    ]
    result = engine.apply_batch(portfolio, updates, notes=request.notes)
    saved = repository.save(result.portfolio)
    return BatchUpdateResponse.model_validate(replace(result, portfolio=saved))


@router.post("/{portfolio_id}/quotes")
async def apply_quotes(
    portfolio_id: str,
    request: QuoteUpdateRequest,
    version: int | None = VersionQuery,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> BatchUpdateResponse:
    """Reprice holdings from a market-data quote map keyed by ticker."""
    portfolio = _load_for_update(repository, portfolio_id, version)
    result = engine.apply_quotes(portfolio, request.quotes, notes=request.notes)
    saved = repository.save(result.portfolio)
    return BatchUpdateResponse.model_validate(replace(result, portfolio=saved))


@router.post("/{portfolio_id}/budget/top-up")
async def top_up_budget(
    portfolio_id: str,
    request: BudgetTopUpRequest,
    version: int | None = VersionQuery,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> PortfolioResponse:
    """Add capital to the portfolio budget."""
    portfolio = _load_for_update(repository, portfolio_id, version)
    updated = engine.top_up_budget(portfolio, request.amount)
    return PortfolioResponse.model_validate(repository.save(updated))


@router.put("/{portfolio_id}/constraints")
async def update_constraints(
    portfolio_id: str,
    request: ConstraintsRequest,
    version: int | None = VersionQuery,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> PortfolioResponse:
    """Change budget and allocation limits."""
    portfolio = _load_for_update(repository, portfolio_id, version)
    updated = engine.update_constraints(
        portfolio,
        max_holdings=request.max_holdings,
        max_allocation_percent=request.max_allocation_percent,
        budget=request.budget,
    )
    return PortfolioResponse.model_validate(repository.save(updated))


@router.get("/{portfolio_id}/cash-position")
async def get_cash_position(
    portfolio_id: str,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> CashPositionResponse:
    """Invested amount, available cash, and cash allocation."""
    cash = engine.cash_position(repository.load(portfolio_id))
    return CashPositionResponse.model_validate(cash)


@router.get("/{portfolio_id}/sector-allocation")
async def get_sector_allocation(
    portfolio_id: str,
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> SectorAllocationResponse:
    """Share of tradable value per sector."""
    allocation = engine.sector_allocation(repository.load(portfolio_id))
    return SectorAllocationResponse(allocation=allocation)


@router.get("/{portfolio_id}/rebalance")
async def get_rebalance_plan(
    portfolio_id: str,
    drift_threshold_percent: float = Query(default=DEFAULT_DRIFT_THRESHOLD_PERCENT),
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> RebalancePlanResponse:
    """Recommend trades for holdings that drifted off target."""
    recommendations = engine.plan(repository.load(portfolio_id), drift_threshold_percent)
    return RebalancePlanResponse(
        drift_threshold_percent=drift_threshold_percent,
        recommendations=[r.to_dict() for r in recommendations],
    )


@router.get("/{portfolio_id}/dividends/summary")
async def get_dividend_summary(
    portfolio_id: str,
    year: int | None = Query(default=None, ge=1900, le=2200),
    engine: PortfolioEngine = Depends(get_engine),
    repository: IPortfolioRepository = Depends(get_repository),
) -> DividendSummaryResponse:
    """Dividend totals and average yield for a calendar year."""
    summary = engine.dividend_summary(repository.load(portfolio_id), year)
    return DividendSummaryResponse.model_validate(summary)
