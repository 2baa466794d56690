"""
Core enumerations for the portfolio engine.

This module provides centralized enumerations for domain concepts
like portfolio types, dividend frequencies, and rebalance actions.
"""

from .dividend_frequency import DividendFrequency
from .portfolio_types import PortfolioType, RebalanceFrequency, RiskLevel
from .rebalance_action import RebalanceAction

__all__ = [
    "DividendFrequency",
    "PortfolioType",
    "RebalanceAction",
    "RebalanceFrequency",
    "RiskLevel",
]
