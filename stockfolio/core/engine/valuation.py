"""
Holding valuation and portfolio aggregation.

This module turns quantities and prices into market values, gains, and
weights. Cash holdings count toward portfolio value like any other
holding.
"""

import math
from collections.abc import Iterable

from stockfolio.core.constants import UNKNOWN_SECTOR
from stockfolio.core.exceptions.portfolio import InvalidHoldingError
from stockfolio.core.models import HoldingValuation, Portfolio, PortfolioTotals
from stockfolio.core.protocols import IHolding, WeightMap
from stockfolio.core.types.financial import (
    ZERO,
    calculate_market_value,
    percentage_of,
    round_amount,
    round_percentage,
)


class HoldingValuator:
    """Values a single holding at its current price."""

    def valuate(self, holding: IHolding) -> HoldingValuation:
        """Compute market value and unrealized gain of a holding.

        Args:
            holding: Holding to value

        Returns:
            HoldingValuation with gain fields set to None when the
            holding has no cost basis

        Raises:
            InvalidHoldingError: If quantity or price is negative
        """
        self._validate(holding)

        total_value = calculate_market_value(holding.quantity, holding.current_price)
        cost_basis = self.cost_basis(holding)
        if cost_basis is None:
            return HoldingValuation(total_value=total_value)

        gain = round_amount(total_value - cost_basis)
        return HoldingValuation(
            total_value=total_value,
            unrealized_gain=gain,
            unrealized_gain_percent=round_percentage(percentage_of(gain, cost_basis)),
        )

    def cost_basis(self, holding: IHolding) -> float | None:
        """Invested amount for a holding, or None when unknown.

        The cash holding is its own cost basis.
        """
        if getattr(holding, "is_cash_holding", False):
            return calculate_market_value(holding.quantity, holding.current_price)
        average_cost = getattr(holding, "average_cost", None)
        if average_cost is None:
            return None
        return calculate_market_value(holding.quantity, average_cost)

    @staticmethod
    def _validate(holding: IHolding) -> None:
        holding_id = getattr(holding, "id", None)
        for field_name, value in (
            ("quantity", holding.quantity),
            ("current price", holding.current_price),
        ):
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise InvalidHoldingError(f"{field_name} must be a number", holding_id)
            if not math.isfinite(value) or value < 0:
                raise InvalidHoldingError(
                    f"{field_name} must be non-negative, got {value}", holding_id
                )


class PortfolioAggregator:
    """Sums holdings into portfolio totals and derives weights."""

    def __init__(self, valuator: HoldingValuator | None = None) -> None:
        """Initialize with a holding valuator.

        Args:
            valuator: Valuator used for each holding (default HoldingValuator)
        """
        self.valuator = valuator or HoldingValuator()

    def total_value(self, holdings: Iterable[IHolding]) -> float:
        """Sum of market values of the given holdings."""
        return round_amount(
            sum((self.valuator.valuate(holding).total_value for holding in holdings), ZERO)
        )

    def aggregate(self, portfolio: Portfolio) -> PortfolioTotals:
        """Compute portfolio value and return.

        The return is only computed when every holding has a cost basis;
        otherwise it is reported as 0 with cost_basis_complete=False.

        Args:
            portfolio: Portfolio snapshot

        Returns:
            PortfolioTotals for the snapshot
        """
        total_value = self.total_value(portfolio.holdings)

        cost_basis = ZERO
        for holding in portfolio.holdings:
            holding_cost = self.valuator.cost_basis(holding)
            if holding_cost is None:
                return PortfolioTotals(total_value=total_value)
            cost_basis += holding_cost

        cost_basis = round_amount(cost_basis)
        total_return = round_amount(total_value - cost_basis)
        return PortfolioTotals(
            total_value=total_value,
            total_return=total_return,
            total_return_percent=round_percentage(percentage_of(total_return, cost_basis)),
            cost_basis=cost_basis,
            cost_basis_complete=True,
        )

    def weights(self, portfolio: Portfolio) -> WeightMap:
        """Weight of each holding as a percentage of total value.

        Weights are 0 for every holding when the portfolio is worth nothing.
        """
        values = {
            holding.id: self.valuator.valuate(holding).total_value
            for holding in portfolio.holdings
        }
        total_value = sum(values.values(), ZERO)
        return {
            holding_id: percentage_of(value, total_value) for holding_id, value in values.items()
        }

    def sector_allocation(self, portfolio: Portfolio) -> dict[str, float]:
        """Share of tradable value per sector, excluding the cash holding.

        Holdings without a sector are grouped under "Unknown".
        """
        holdings = portfolio.non_cash_holdings
        total_value = self.total_value(holdings)

        allocation: dict[str, float] = {}
        for holding in holdings:
            sector = holding.sector or UNKNOWN_SECTOR
            value = self.valuator.valuate(holding).total_value
            allocation[sector] = allocation.get(sector, ZERO) + percentage_of(value, total_value)
        return allocation
