"""
In-memory portfolio repository.

Keeps the latest snapshot per portfolio id in a dict guarded by a
re-entrant lock. Suitable for tests and single-process deployments.
"""

import threading
from dataclasses import replace

from loguru import logger

from stockfolio.core.exceptions.portfolio import (
    ConcurrentModificationError,
    PortfolioNotFoundError,
)
from stockfolio.core.interfaces.storage import IPortfolioRepository
from stockfolio.core.models import Portfolio


class InMemoryPortfolioRepository(IPortfolioRepository):
    """Thread-safe in-memory portfolio store with version checks."""

    def __init__(self) -> None:
        self._portfolios: dict[str, Portfolio] = {}
        self._lock = threading.RLock()

    def load(self, portfolio_id: str) -> Portfolio:
        with self._lock:
            portfolio = self._portfolios.get(portfolio_id)
        if portfolio is None:
            raise PortfolioNotFoundError(portfolio_id)
        return portfolio

    def save(self, portfolio: Portfolio) -> Portfolio:
        with self._lock:
            stored = self._portfolios.get(portfolio.id)
            stored_version = stored.version if stored is not None else 0
            if stored_version != portfolio.version:
                logger.warning(
                    f"Rejected stale save of portfolio {portfolio.id}: "
                    f"version {portfolio.version} != {stored_version}"
                )
                raise ConcurrentModificationError(
                    portfolio.id, portfolio.version, stored_version
                )

            saved = replace(portfolio, version=portfolio.version + 1)
            self._portfolios[portfolio.id] = saved

        logger.debug(f"Portfolio saved: id={saved.id}, version={saved.version}")
        return saved

    def delete(self, portfolio_id: str) -> None:
        with self._lock:
            if self._portfolios.pop(portfolio_id, None) is None:
                raise PortfolioNotFoundError(portfolio_id)
        logger.debug(f"Portfolio deleted: id={portfolio_id}")

    def list_for_owner(self, owner_id: str) -> list[Portfolio]:
        with self._lock:
            return [p for p in self._portfolios.values() if p.owner_id == owner_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._portfolios)
