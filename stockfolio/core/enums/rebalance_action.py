"""
Rebalance action enumeration.
"""

from enum import StrEnum


class RebalanceAction(StrEnum):
    """
    Allowed rebalance actions.

    Defines what the planner recommends doing with a holding.
    """

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"

    @property
    def is_trade(self) -> bool:
        """Check if the action requires a trade."""
        return self != self.HOLD

    @property
    def direction(self) -> int:
        """Sign applied to a quantity when the action is executed."""
        if self == self.BUY:
            return 1
        if self == self.SELL:
            return -1
        return 0
