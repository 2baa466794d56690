"""
Shared FastAPI dependencies.

The engine is stateless and shared; the repository defaults to a
process-wide in-memory store and can be swapped through
``app.dependency_overrides``.
"""

from functools import lru_cache

from stockfolio.core.engine import PortfolioEngine
from stockfolio.core.interfaces.storage import IPortfolioRepository
from stockfolio.infrastructure.storage import InMemoryPortfolioRepository


@lru_cache(maxsize=1)
def get_engine() -> PortfolioEngine:
    return PortfolioEngine()


@lru_cache(maxsize=1)
def get_repository() -> IPortfolioRepository:
    return InMemoryPortfolioRepository()
