"""
Portfolio aggregate root.

The portfolio owns its holdings, budget, and allocation constraints.
Derived totals are stored on the snapshot for the benefit of readers but
are only ever written by the engine, which recomputes them from the
holdings on every mutation.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import datetime

from stockfolio.core.constants import MAX_HOLDINGS_PER_PORTFOLIO
from stockfolio.core.enums import PortfolioType, RebalanceFrequency, RiskLevel
from stockfolio.core.exceptions.portfolio import ValidationError
from stockfolio.core.types.financial import ZERO

from .holding import Holding


@dataclass(frozen=True)
class Portfolio:
    """Immutable portfolio snapshot.

    Structural invariants are checked on construction: holding ids are
    unique and at most one holding is flagged as cash. Allocation
    constraints (max holdings, max allocation) are checked by the
    engine's constraint validator, not here.
    """

    id: str
    owner_id: str
    name: str
    budget: float
    max_holdings: int
    max_allocation_percent: float
    description: str = ""
    portfolio_type: PortfolioType = PortfolioType.CUSTOM
    holdings: tuple[Holding, ...] = field(default=())
    risk_level: RiskLevel | None = None
    rebalance_frequency: RebalanceFrequency | None = None
    tags: tuple[str, ...] = field(default=())

    # Derived values, written by the engine
    total_value: float = ZERO
    total_return: float = ZERO
    total_return_percent: float = ZERO
    available_cash: float = ZERO
    cash_allocation_percent: float = ZERO

    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = 0

    def __post_init__(self) -> None:
        """Validate structural invariants after initialization."""
        object.__setattr__(self, "holdings", tuple(self.holdings))
        object.__setattr__(self, "tags", tuple(self.tags))

        if len(self.holdings) > MAX_HOLDINGS_PER_PORTFOLIO:
            raise ValidationError(
                f"Maximum holdings limit reached ({MAX_HOLDINGS_PER_PORTFOLIO})"
            )

        seen: set[str] = set()
        for holding in self.holdings:
            if not isinstance(holding, Holding):
                raise ValidationError("Holdings must be Holding instances")
            if holding.id in seen:
                raise ValidationError(f"Duplicate holding id: {holding.id}")
            seen.add(holding.id)

        cash_count = sum(1 for holding in self.holdings if holding.is_cash_holding)
        if cash_count > 1:
            raise ValidationError(
                f"A portfolio may hold at most one cash holding, got {cash_count}"
            )

    def __iter__(self) -> Iterator[Holding]:
        return iter(self.holdings)

    @property
    def cash_holding(self) -> Holding | None:
        """The distinguished cash holding, if present."""
        return next((holding for holding in self.holdings if holding.is_cash_holding), None)

    @property
    def non_cash_holdings(self) -> tuple[Holding, ...]:
        """Tradable holdings, excluding the cash holding."""
        return tuple(holding for holding in self.holdings if not holding.is_cash_holding)

    @property
    def holding_ids(self) -> tuple[str, ...]:
        return tuple(holding.id for holding in self.holdings)

    def find_holding(self, holding_id: str) -> Holding | None:
        """Return the holding with the given id, or None."""
        return next((holding for holding in self.holdings if holding.id == holding_id), None)

    def find_by_ticker(self, ticker: str) -> Holding | None:
        """Return the first holding with the given ticker (case-insensitive), or None."""
        wanted = ticker.strip().upper()
        return next(
            (holding for holding in self.holdings if holding.ticker.upper() == wanted), None
        )

    def with_holdings(self, holdings: tuple[Holding, ...] | list[Holding]) -> "Portfolio":
        """Return a copy with the holdings replaced.

        Derived totals on the copy are stale until the engine refreshes it.
        """
        return replace(self, holdings=tuple(holdings))
