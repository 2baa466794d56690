"""
Portfolio storage interface.
"""

from abc import ABC, abstractmethod

from stockfolio.core.models import Portfolio


class IPortfolioRepository(ABC):
    """Abstract interface for portfolio persistence.

    Implementations use optimistic concurrency: a snapshot can only be
    saved over the version it was loaded at.
    """

    @abstractmethod
    def load(self, portfolio_id: str) -> Portfolio:
        """Load the latest snapshot of a portfolio.

        Raises:
            PortfolioNotFoundError: If no portfolio has the given id
        """
        pass

    @abstractmethod
    def save(self, portfolio: Portfolio) -> Portfolio:
        """Store a snapshot and return it with its version incremented.

        Raises:
            ConcurrentModificationError: If the stored version differs from
                the snapshot's version
        """
        pass

    @abstractmethod
    def delete(self, portfolio_id: str) -> None:
        """Delete a portfolio.

        Raises:
            PortfolioNotFoundError: If no portfolio has the given id
        """
        pass

    @abstractmethod
    def list_for_owner(self, owner_id: str) -> list[Portfolio]:
        """List an owner's portfolios, oldest first."""
        pass
