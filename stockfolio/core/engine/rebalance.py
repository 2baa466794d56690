"""
Rebalance planning.

Compares each tradable holding's current weight with its target weight
and recommends the trade that closes the gap. Planning never changes the
portfolio; recommendations are applied, if at all, through the batch
reconciler.
"""

from collections.abc import Sequence

from loguru import logger

from stockfolio.core.constants import DEFAULT_DRIFT_THRESHOLD_PERCENT
from stockfolio.core.enums import RebalanceAction
from stockfolio.core.exceptions.portfolio import HoldingNotFoundError
from stockfolio.core.models import BatchUpdate, Portfolio, RebalanceRecommendation
from stockfolio.core.types.financial import (
    HUNDRED,
    ZERO,
    percentage_of,
    round_amount,
    round_half_up,
    round_percentage,
)
from stockfolio.core.utils.validation import validate_non_negative

from .valuation import HoldingValuator


class RebalancePlanner:
    """Emits buy/sell recommendations for holdings that drifted off target."""

    def __init__(self, valuator: HoldingValuator | None = None) -> None:
        self.valuator = valuator or HoldingValuator()

    def plan(
        self,
        portfolio: Portfolio,
        drift_threshold_percent: float = DEFAULT_DRIFT_THRESHOLD_PERCENT,
    ) -> list[RebalanceRecommendation]:
        """Recommend trades for holdings whose drift exceeds the threshold.

        A holding without a target weight is treated as on target. Trades
        that round to zero units, or holdings priced at zero, produce no
        recommendation. The cash holding is never traded.

        Args:
            portfolio: Portfolio snapshot
            drift_threshold_percent: Minimum drift (exclusive) worth acting on

        Returns:
            Recommendations ordered by drift, largest first

        Raises:
            ValidationError: If the threshold is negative
        """
        validate_non_negative(drift_threshold_percent, "drift_threshold_percent")

        values = {
            holding.id: self.valuator.valuate(holding).total_value
            for holding in portfolio.holdings
        }
        total_value = sum(values.values(), ZERO)

        ranked: list[tuple[float, RebalanceRecommendation]] = []
        for holding in portfolio.non_cash_holdings:
            current_value = values[holding.id]
            current_weight = percentage_of(current_value, total_value)
            target_weight = current_weight if holding.target_weight is None else holding.target_weight
            drift = abs(current_weight - target_weight)

            if drift <= drift_threshold_percent:
                continue

            if holding.current_price <= ZERO:
                logger.warning(
                    f"Skipping rebalance for {holding.ticker}: no price to size the trade"
                )
                continue

            value_difference = target_weight / HUNDRED * total_value - current_value
            quantity = round_half_up(abs(value_difference) / holding.current_price)
            if quantity == 0:
                continue

            action = RebalanceAction.BUY if value_difference > 0 else RebalanceAction.SELL
            ranked.append(
                (
                    drift,
                    RebalanceRecommendation(
                        holding_id=holding.id,
                        ticker=holding.ticker,
                        current_weight=round_percentage(current_weight),
                        target_weight=round_percentage(target_weight),
                        drift=round_percentage(drift),
                        action=action,
                        recommended_quantity_delta=quantity,
                        estimated_cost=round_amount(abs(value_difference)),
                    ),
                )
            )

        ranked.sort(key=lambda item: item[0], reverse=True)
        recommendations = [recommendation for _, recommendation in ranked]

        logger.info(
            f"Rebalance recommendations calculated: portfolio={portfolio.id}, "
            f"count={len(recommendations)}"
        )
        return recommendations

    def to_updates(
        self,
        portfolio: Portfolio,
        recommendations: Sequence[RebalanceRecommendation],
    ) -> list[BatchUpdate]:
        """Translate recommendations into quantity updates for the batch reconciler.

        Sell recommendations never take a quantity below zero.

        Raises:
            HoldingNotFoundError: If a recommendation references an unknown holding
        """
        updates = []
        for recommendation in recommendations:
            holding = portfolio.find_holding(recommendation.holding_id)
            if holding is None:
                raise HoldingNotFoundError(recommendation.holding_id)
            new_quantity = max(holding.quantity + recommendation.signed_quantity_delta, ZERO)
            updates.append(BatchUpdate(holding_id=holding.id, quantity=new_quantity))
        return updates
