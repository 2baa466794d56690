"""
Portfolio domain models.

Snapshots are frozen dataclasses: every engine operation returns a new
instance instead of mutating the one it was given.
"""

from .batch import BatchResult, BatchSummary, BatchUpdate, HoldingChange
from .holding import DividendEntry, Holding, PriceHistoryEntry
from .portfolio import Portfolio
from .rebalance import RebalanceRecommendation
from .results import (
    AllocationCheck,
    CashPosition,
    ConstraintConfig,
    DividendSummary,
    HoldingValuation,
    PortfolioTotals,
    PriceHistoryAnalysis,
    PriceRange,
    QuantitySuggestion,
    ValidationResult,
)

__all__ = [
    "AllocationCheck",
    "BatchResult",
    "BatchSummary",
    "BatchUpdate",
    "CashPosition",
    "ConstraintConfig",
    "DividendEntry",
    "DividendSummary",
    "Holding",
    "HoldingChange",
    "HoldingValuation",
    "Portfolio",
    "PortfolioTotals",
    "PriceHistoryAnalysis",
    "PriceHistoryEntry",
    "PriceRange",
    "QuantitySuggestion",
    "RebalanceRecommendation",
    "ValidationResult",
]
