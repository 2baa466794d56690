"""
Interfaces for collaborators of the portfolio engine.
"""

from .storage import IPortfolioRepository

__all__ = ["IPortfolioRepository"]
