"""
Core type definitions and protocols.

This module defines the structural interfaces the engine computes over,
so valuation code does not depend on the concrete snapshot classes.
"""

from typing import Protocol


class IHolding(Protocol):
    """Protocol defining the fields a holding must expose for valuation."""

    id: str
    quantity: float
    current_price: float
    average_cost: float | None
    is_cash_holding: bool


class IDividend(Protocol):
    """Protocol defining the fields a dividend must expose for yield math."""

    amount: float

    @property
    def annual_multiplier(self) -> int:
        """Number of payouts per year."""
        ...


# Type aliases for commonly used types
QuoteMap = dict[str, dict[str, float] | float]
WeightMap = dict[str, float]
