"""
Value objects returned by the valuation, cash, constraint, and history
components. None of these are persisted.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from stockfolio.core.exceptions.portfolio import ConstraintViolationError
from stockfolio.core.types.financial import ZERO

if TYPE_CHECKING:
    from .portfolio import Portfolio


@dataclass(frozen=True)
class HoldingValuation:
    """Market value and unrealized gain of a single holding.

    Gain fields are None when the holding has no cost basis.
    """

    total_value: float
    unrealized_gain: float | None = None
    unrealized_gain_percent: float | None = None

    @property
    def has_cost_basis(self) -> bool:
        return self.unrealized_gain is not None


@dataclass(frozen=True)
class PortfolioTotals:
    """Portfolio-wide value and return.

    When any tradable holding lacks a cost basis, the return cannot be
    computed: total_return and total_return_percent are 0 and
    cost_basis_complete is False.
    """

    total_value: float
    total_return: float = ZERO
    total_return_percent: float = ZERO
    cost_basis: float | None = None
    cost_basis_complete: bool = False


@dataclass(frozen=True)
class CashPosition:
    """Invested amount versus budget.

    available_cash is negative when holdings are worth more than the
    budget; that is reported as-is.
    """

    total_invested: float
    available_cash: float
    cash_allocation_percent: float

    @property
    def is_overspent(self) -> bool:
        """Check if holdings exceed the budget."""
        return self.available_cash < ZERO


@dataclass(frozen=True)
class ConstraintConfig:
    """Candidate allocation constraints for a portfolio."""

    max_holdings: int
    max_allocation_percent: float
    budget: float

    @classmethod
    def from_portfolio(cls, portfolio: "Portfolio") -> "ConstraintConfig":
        return cls(
            max_holdings=portfolio.max_holdings,
            max_allocation_percent=portfolio.max_allocation_percent,
            budget=portfolio.budget,
        )


@dataclass(frozen=True)
class ValidationResult:
    """Every constraint violation found, in rule order."""

    errors: tuple[str, ...] = field(default=())

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_if_invalid(self) -> None:
        """Raise ConstraintViolationError carrying every error message."""
        if self.errors:
            raise ConstraintViolationError(list(self.errors))


@dataclass(frozen=True)
class AllocationCheck:
    """Room left for a holding under the allocation constraints."""

    is_valid: bool
    current_total_allocation: float
    remaining_allocation: float
    max_allowed: float


@dataclass(frozen=True)
class QuantitySuggestion:
    """Whole units that fit a target allocation of the budget."""

    suggested_quantity: int
    estimated_value: float
    actual_allocation: float


@dataclass(frozen=True)
class PriceRange:
    min: float = ZERO
    max: float = ZERO


@dataclass(frozen=True)
class PriceHistoryAnalysis:
    """Summary statistics over a price history window."""

    average_price: float = ZERO
    price_range: PriceRange = field(default_factory=PriceRange)
    price_change: float = ZERO
    price_change_percent: float = ZERO
    sample_size: int = 0

    @classmethod
    def empty(cls, sample_size: int = 0) -> "PriceHistoryAnalysis":
        """All-zero analysis for windows too short to analyze."""
        return cls(sample_size=sample_size)


@dataclass(frozen=True)
class DividendSummary:
    """Dividend totals across a portfolio's holdings."""

    total_amount: float = ZERO
    year_to_date: float = ZERO
    average_yield: float = ZERO
    year: int | None = None
