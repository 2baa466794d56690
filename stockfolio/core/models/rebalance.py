"""
Rebalance recommendation value object.
"""

from dataclasses import dataclass

from stockfolio.core.enums import RebalanceAction


@dataclass(frozen=True)
class RebalanceRecommendation:
    """A suggested trade closing the gap between current and target weight.

    recommended_quantity_delta is always non-negative; the action carries
    the direction.
    """

    holding_id: str
    ticker: str
    current_weight: float
    target_weight: float
    drift: float
    action: RebalanceAction
    recommended_quantity_delta: int
    estimated_cost: float

    @property
    def signed_quantity_delta(self) -> int:
        """Quantity change with sign: positive to buy, negative to sell."""
        return self.action.direction * self.recommended_quantity_delta

    def to_dict(self) -> dict:
        """Convert recommendation to dictionary."""
        return {
            "holding_id": self.holding_id,
            "ticker": self.ticker,
            "current_weight": self.current_weight,
            "target_weight": self.target_weight,
            "drift": self.drift,
            "action": self.action.value,
            "recommended_quantity_delta": self.recommended_quantity_delta,
            "estimated_cost": self.estimated_cost,
        }
