"""
Cash position calculation.

Invested amount is the value of tradable holdings; the cash holding, if
any, is informational and never counted against the budget.
"""

from stockfolio.core.models import CashPosition, Portfolio, PortfolioTotals
from stockfolio.core.types.financial import percentage_of, round_amount, round_percentage

from .valuation import PortfolioAggregator


class CashPositionCalculator:
    """Derives invested amount, available cash, and cash allocation."""

    def __init__(self, aggregator: PortfolioAggregator | None = None) -> None:
        self.aggregator = aggregator or PortfolioAggregator()

    def cash_position(
        self, portfolio: Portfolio, totals: PortfolioTotals | None = None
    ) -> CashPosition:
        """Compute the portfolio's cash position.

        available_cash = budget - value of tradable holdings. A negative
        result means holdings are worth more than the budget and is
        returned unchanged.

        Args:
            portfolio: Portfolio snapshot
            totals: Precomputed totals for the same snapshot, if available

        Returns:
            CashPosition for the snapshot
        """
        total_invested = self.aggregator.total_value(portfolio.non_cash_holdings)
        available_cash = round_amount(portfolio.budget - total_invested)

        if totals is None:
            totals = self.aggregator.aggregate(portfolio)

        return CashPosition(
            total_invested=total_invested,
            available_cash=available_cash,
            cash_allocation_percent=round_percentage(
                percentage_of(available_cash, totals.total_value)
            ),
        )
