"""
Portfolio classification enumerations.

This module defines the descriptive categories a portfolio can carry.
None of them influence valuation math.
"""

from enum import StrEnum


class PortfolioType(StrEnum):
    """
    Allowed portfolio types.

    Describes the asset class mix the portfolio is built around.
    """

    EQUITY = "equity"
    DEBT = "debt"
    HYBRID = "hybrid"
    INDEX = "index"
    CUSTOM = "custom"


class RiskLevel(StrEnum):
    """Investor risk appetite attached to a portfolio."""

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"
    VERY_AGGRESSIVE = "very_aggressive"


class RebalanceFrequency(StrEnum):
    """How often the owner intends to rebalance."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi_annual"
    ANNUAL = "annual"
    MANUAL = "manual"

    @property
    def is_scheduled(self) -> bool:
        """Check if rebalancing happens on a calendar schedule."""
        return self != self.MANUAL
