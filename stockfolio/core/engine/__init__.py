"""
Portfolio valuation and rebalancing engine components.
"""

from .batch import BatchUpdateReconciler
from .cash import CashPositionCalculator
from .constraints import ConstraintValidator
from .engine import PortfolioEngine
from .history import HistoryAnalyzer
from .lifecycle import PortfolioLifecycle
from .rebalance import RebalancePlanner
from .snapshot import PortfolioRefresher
from .valuation import HoldingValuator, PortfolioAggregator

__all__ = [
    "BatchUpdateReconciler",
    "CashPositionCalculator",
    "ConstraintValidator",
    "HistoryAnalyzer",
    "HoldingValuator",
    "PortfolioAggregator",
    "PortfolioEngine",
    "PortfolioLifecycle",
    "PortfolioRefresher",
    "RebalancePlanner",
]
