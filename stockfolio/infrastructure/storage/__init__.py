"""
Portfolio storage adapters.
"""

from .memory_repository import InMemoryPortfolioRepository

__all__ = ["InMemoryPortfolioRepository"]
