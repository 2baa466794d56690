"""
Snapshot refresh: recomputes every derived field of a portfolio.
"""

from dataclasses import replace

from loguru import logger

from stockfolio.core.models import Portfolio

from .cash import CashPositionCalculator
from .valuation import PortfolioAggregator


class PortfolioRefresher:
    """Rebuilds derived totals and holding weights from the holdings alone.

    Previously stored totals are never read.
    """

    def __init__(
        self,
        aggregator: PortfolioAggregator | None = None,
        cash_calculator: CashPositionCalculator | None = None,
    ) -> None:
        self.aggregator = aggregator or PortfolioAggregator()
        self.cash_calculator = cash_calculator or CashPositionCalculator(self.aggregator)

    def refresh(self, portfolio: Portfolio) -> Portfolio:
        """Return a copy of the portfolio with all derived fields recomputed.

        Args:
            portfolio: Portfolio snapshot, possibly with stale totals

        Returns:
            New snapshot with fresh totals, cash position, and weights
        """
        totals = self.aggregator.aggregate(portfolio)
        cash = self.cash_calculator.cash_position(portfolio, totals)
        weights = self.aggregator.weights(portfolio)

        refreshed = replace(
            portfolio,
            holdings=tuple(
                replace(holding, weight=weights[holding.id]) for holding in portfolio.holdings
            ),
            total_value=totals.total_value,
            total_return=totals.total_return,
            total_return_percent=totals.total_return_percent,
            available_cash=cash.available_cash,
            cash_allocation_percent=cash.cash_allocation_percent,
        )

        logger.debug(
            f"Portfolio metrics calculated: id={portfolio.id}, "
            f"total_value={totals.total_value}, total_return={totals.total_return}"
        )
        return refreshed
