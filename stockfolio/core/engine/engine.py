"""
Portfolio engine facade.

Single entry point for callers: composes the valuator, aggregator, cash
calculator, constraint validator, rebalance planner, batch reconciler,
history analyzer, and lifecycle operations over one shared set of
components.
"""

from collections.abc import Sequence
from datetime import UTC, datetime

from stockfolio.core.constants import DEFAULT_DRIFT_THRESHOLD_PERCENT
from stockfolio.core.enums import PortfolioType, RebalanceFrequency, RiskLevel
from stockfolio.core.models import (
    AllocationCheck,
    BatchResult,
    BatchUpdate,
    CashPosition,
    ConstraintConfig,
    DividendEntry,
    DividendSummary,
    Holding,
    HoldingValuation,
    Portfolio,
    PortfolioTotals,
    PriceHistoryAnalysis,
    PriceHistoryEntry,
    QuantitySuggestion,
    RebalanceRecommendation,
    ValidationResult,
)
from stockfolio.core.protocols import IDividend, IHolding, QuoteMap, WeightMap
from stockfolio.core.utils.decorators import log_operation

from .batch import BatchUpdateReconciler
from .cash import CashPositionCalculator
from .constraints import ConstraintValidator
from .history import HistoryAnalyzer
from .lifecycle import PortfolioLifecycle
from .rebalance import RebalancePlanner
from .snapshot import PortfolioRefresher
from .valuation import HoldingValuator, PortfolioAggregator


class PortfolioEngine:
    """
    Portfolio valuation and rebalancing engine.

    The engine holds no portfolio state. Every method takes a snapshot and
    either computes a result from it or returns a new, refreshed snapshot.
    Mutating operations are logged with a correlation id.
    """

    def __init__(self) -> None:
        self.valuator = HoldingValuator()
        self.aggregator = PortfolioAggregator(self.valuator)
        self.cash_calculator = CashPositionCalculator(self.aggregator)
        self.refresher = PortfolioRefresher(self.aggregator, self.cash_calculator)
        self.validator = ConstraintValidator()
        self.planner = RebalancePlanner(self.valuator)
        self.reconciler = BatchUpdateReconciler(self.refresher)
        self.history = HistoryAnalyzer(self.valuator)
        self.lifecycle = PortfolioLifecycle(self.refresher, self.validator)

    # Valuation

    def valuate(self, holding: IHolding) -> HoldingValuation:
        return self.valuator.valuate(holding)

    def aggregate(self, portfolio: Portfolio) -> PortfolioTotals:
        return self.aggregator.aggregate(portfolio)

    def weights(self, portfolio: Portfolio) -> WeightMap:
        return self.aggregator.weights(portfolio)

    def sector_allocation(self, portfolio: Portfolio) -> dict[str, float]:
        return self.aggregator.sector_allocation(portfolio)

    def cash_position(self, portfolio: Portfolio) -> CashPosition:
        return self.cash_calculator.cash_position(portfolio)

    def refresh(self, portfolio: Portfolio) -> Portfolio:
        """Recompute every derived field of a snapshot."""
        return self.refresher.refresh(portfolio)

    # Constraints

    def validate(self, config: ConstraintConfig | Portfolio) -> ValidationResult:
        return self.validator.validate(config)

    def max_holdings_allowed(self, portfolio: Portfolio) -> int:
        return self.validator.max_holdings_allowed(portfolio)

    def check_allocation(
        self,
        portfolio: Portfolio,
        allocation_percent: float,
        exclude_holding_id: str | None = None,
    ) -> AllocationCheck:
        return self.validator.check_allocation(portfolio, allocation_percent, exclude_holding_id)

    def suggest_quantity(
        self, portfolio: Portfolio, price: float, allocation_percent: float
    ) -> QuantitySuggestion:
        return self.validator.suggest_quantity(portfolio, price, allocation_percent)

    # Rebalancing and batch updates

    def plan(
        self,
        portfolio: Portfolio,
        drift_threshold_percent: float = DEFAULT_DRIFT_THRESHOLD_PERCENT,
    ) -> list[RebalanceRecommendation]:
        return self.planner.plan(portfolio, drift_threshold_percent)

    def rebalance_updates(
        self, portfolio: Portfolio, recommendations: Sequence[RebalanceRecommendation]
    ) -> list[BatchUpdate]:
        return self.planner.to_updates(portfolio, recommendations)

    @log_operation
    def apply_batch(
        self,
        portfolio: Portfolio,
        updates: Sequence[BatchUpdate],
        notes: str | None = None,
        now: datetime | None = None,
    ) -> BatchResult:
        return self.reconciler.apply(portfolio, updates, notes=notes, now=now)

    @log_operation
    def apply_quotes(
        self,
        portfolio: Portfolio,
        quotes: QuoteMap,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> BatchResult:
        """Apply a market-data quote map as a batch price update.

        Tickers without a matching holding are reported as warnings on the
        result next to the reconciler's own warnings.
        """
        updates, quote_warnings = self.reconciler.updates_from_quotes(portfolio, quotes)
        result = self.reconciler.apply(portfolio, updates, notes=notes, now=now)
        return BatchResult(
            portfolio=result.portfolio,
            summary=result.summary,
            warnings=(*quote_warnings, *result.warnings),
        )

    def updates_from_quotes(
        self, portfolio: Portfolio, quotes: QuoteMap
    ) -> tuple[list[BatchUpdate], list[str]]:
        return self.reconciler.updates_from_quotes(portfolio, quotes)

    # History

    def analyze_price_history(self, entries: Sequence[PriceHistoryEntry]) -> PriceHistoryAnalysis:
        return self.history.analyze_price_history(entries)

    def dividend_yield(self, dividend: IDividend, holding: IHolding) -> float:
        return self.history.dividend_yield(dividend, holding)

    def dividend_summary(self, portfolio: Portfolio, year: int | None = None) -> DividendSummary:
        """Dividend totals for a portfolio; ``year`` defaults to the current UTC year."""
        if year is None:
            year = datetime.now(UTC).year
        return self.history.dividend_summary(portfolio.holdings, year)

    # Lifecycle

    @log_operation
    def create_portfolio(
        self,
        owner_id: str,
        name: str,
        budget: float,
        max_holdings: int,
        max_allocation_percent: float,
        description: str = "",
        portfolio_type: PortfolioType = PortfolioType.CUSTOM,
        risk_level: RiskLevel | None = None,
        rebalance_frequency: RebalanceFrequency | None = None,
        tags: tuple[str, ...] = (),
        initial_cash: float | None = None,
        now: datetime | None = None,
    ) -> Portfolio:
        return self.lifecycle.create_portfolio(
            owner_id=owner_id,
            name=name,
            budget=budget,
            max_holdings=max_holdings,
            max_allocation_percent=max_allocation_percent,
            description=description,
            portfolio_type=portfolio_type,
            risk_level=risk_level,
            rebalance_frequency=rebalance_frequency,
            tags=tags,
            initial_cash=initial_cash,
            now=now,
        )

    def create_cash_holding(self, amount: float) -> Holding:
        return Holding.create_cash(amount)

    @log_operation
    def add_holding(self, portfolio: Portfolio, holding: Holding) -> Portfolio:
        return self.lifecycle.add_holding(portfolio, holding)

    @log_operation
    def remove_holding(self, portfolio: Portfolio, holding_id: str) -> Portfolio:
        return self.lifecycle.remove_holding(portfolio, holding_id)

    @log_operation
    def set_target_weight(
        self, portfolio: Portfolio, holding_id: str, target_weight: float | None
    ) -> Portfolio:
        return self.lifecycle.set_target_weight(portfolio, holding_id, target_weight)

    @log_operation
    def add_dividend(
        self, portfolio: Portfolio, holding_id: str, dividend: DividendEntry
    ) -> Portfolio:
        return self.lifecycle.add_dividend(portfolio, holding_id, dividend)

    @log_operation
    def top_up_budget(
        self, portfolio: Portfolio, additional_amount: float, now: datetime | None = None
    ) -> Portfolio:
        return self.lifecycle.top_up_budget(portfolio, additional_amount, now=now)

    @log_operation
    def update_constraints(
        self,
        portfolio: Portfolio,
        max_holdings: int | None = None,
        max_allocation_percent: float | None = None,
        budget: float | None = None,
    ) -> Portfolio:
        return self.lifecycle.update_constraints(
            portfolio,
            max_holdings=max_holdings,
            max_allocation_percent=max_allocation_percent,
            budget=budget,
        )
