"""
Holding domain models.

A holding is one tradable position, or the distinguished cash position,
inside a portfolio. Its market value is always derived from quantity and
price; the derived weight is written only by the engine's refresh step.
"""

import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime

from stockfolio.core.constants import (
    CASH_EXCHANGE,
    CASH_NAME,
    CASH_SECTOR,
    CASH_TICKER,
    CASH_UNIT_PRICE,
    DEFAULT_CURRENCY,
)
from stockfolio.core.enums import DividendFrequency
from stockfolio.core.exceptions.portfolio import InvalidHoldingError, ValidationError
from stockfolio.core.types.financial import ZERO, calculate_market_value, round_amount


def _is_non_negative_number(value: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value >= 0


def generate_id() -> str:
    """Generate a short random identifier for new entities."""
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class PriceHistoryEntry:
    """One observation in a holding's append-only price log."""

    price: float
    quantity: float
    date: datetime
    notes: str | None = None

    def __post_init__(self) -> None:
        """Validate history entry data after initialization."""
        if not _is_non_negative_number(self.price):
            raise ValidationError(f"History price must be non-negative, got {self.price}")
        if not _is_non_negative_number(self.quantity):
            raise ValidationError(f"History quantity must be non-negative, got {self.quantity}")

    @property
    def value(self) -> float:
        """Market value of the holding at the time of the observation."""
        return calculate_market_value(self.quantity, self.price)


@dataclass(frozen=True)
class DividendEntry:
    """A declared dividend on a holding."""

    amount: float
    ex_date: date
    pay_date: date
    frequency: DividendFrequency = DividendFrequency.QUARTERLY
    currency: str = DEFAULT_CURRENCY
    notes: str | None = None

    def __post_init__(self) -> None:
        """Validate and normalize dividend data after initialization."""
        if isinstance(self.frequency, str) and not isinstance(self.frequency, DividendFrequency):
            object.__setattr__(self, "frequency", DividendFrequency.from_string(self.frequency))

        if not _is_non_negative_number(self.amount):
            raise ValidationError(f"Dividend amount must be non-negative, got {self.amount}")

    @property
    def annual_multiplier(self) -> int:
        """Number of payouts per year implied by the frequency."""
        return self.frequency.annual_multiplier

    @property
    def annualized_amount(self) -> float:
        """Dividend amount scaled to a full year of payouts."""
        return round_amount(self.amount * self.annual_multiplier)


@dataclass(frozen=True)
class Holding:
    """A position inside a portfolio.

    Quantities and prices are plain floats. ``average_cost`` is the
    per-unit cost basis; when it is missing, gains are reported as
    unknown rather than estimated.
    """

    id: str
    ticker: str
    name: str
    quantity: float
    current_price: float
    average_cost: float | None = None
    target_weight: float | None = None
    weight: float = ZERO
    sector: str | None = None
    exchange: str | None = None
    price_history: tuple[PriceHistoryEntry, ...] = field(default=())
    dividends: tuple[DividendEntry, ...] = field(default=())
    is_cash_holding: bool = False

    def __post_init__(self) -> None:
        """Validate holding data after initialization."""
        object.__setattr__(self, "price_history", tuple(self.price_history))
        object.__setattr__(self, "dividends", tuple(self.dividends))

        if not _is_non_negative_number(self.quantity):
            raise InvalidHoldingError(
                f"quantity must be non-negative, got {self.quantity}", self.id
            )
        if not _is_non_negative_number(self.current_price):
            raise InvalidHoldingError(
                f"current price must be non-negative, got {self.current_price}", self.id
            )
        if self.average_cost is not None and not _is_non_negative_number(self.average_cost):
            raise InvalidHoldingError(
                f"average cost must be non-negative, got {self.average_cost}", self.id
            )
        if self.target_weight is not None and not (
            _is_non_negative_number(self.target_weight) and self.target_weight <= 100
        ):
            raise InvalidHoldingError(
                f"target weight must be between 0 and 100, got {self.target_weight}", self.id
            )

    @property
    def total_value(self) -> float:
        """Market value: quantity x current price."""
        return calculate_market_value(self.quantity, self.current_price)

    @property
    def cost_basis(self) -> float | None:
        """Total invested amount, or None when average cost is unknown."""
        if self.is_cash_holding:
            return self.total_value
        if self.average_cost is None:
            return None
        return calculate_market_value(self.quantity, self.average_cost)

    def with_market_data(self, price: float | None = None, quantity: float | None = None) -> "Holding":
        """Return a copy with a new price and/or quantity."""
        return replace(
            self,
            current_price=self.current_price if price is None else price,
            quantity=self.quantity if quantity is None else quantity,
        )

    def append_price_history(self, entry: PriceHistoryEntry) -> "Holding":
        """Return a copy with the entry appended to the price log."""
        return replace(self, price_history=(*self.price_history, entry))

    def append_dividend(self, dividend: DividendEntry) -> "Holding":
        """Return a copy with the dividend appended to the dividend log."""
        return replace(self, dividends=(*self.dividends, dividend))

    @classmethod
    def create(
        cls,
        ticker: str,
        name: str,
        quantity: float,
        price: float,
        average_cost: float | None = None,
        target_weight: float | None = None,
        sector: str | None = None,
        exchange: str | None = None,
        holding_id: str | None = None,
    ) -> "Holding":
        """Factory method to create a tradable holding.

        Args:
            ticker: Exchange ticker symbol
            name: Display name
            quantity: Units held
            price: Current unit price
            average_cost: Per-unit cost basis (defaults to the entry price)
            target_weight: Desired weight in percent, if any
            sector: Industry sector
            exchange: Listing exchange
            holding_id: Explicit id (generated when omitted)

        Returns:
            New Holding instance
        """
        return cls(
            id=holding_id or generate_id(),
            ticker=ticker.strip().upper(),
            name=name,
            quantity=quantity,
            current_price=price,
            average_cost=price if average_cost is None else average_cost,
            target_weight=target_weight,
            sector=sector,
            exchange=exchange,
        )

    @classmethod
    def create_cash(cls, amount: float, holding_id: str | None = None) -> "Holding":
        """Factory method to create the distinguished cash holding.

        Cash is quoted at a unit price of 1, so quantity equals the amount.
        """
        return cls(
            id=holding_id or generate_id(),
            ticker=CASH_TICKER,
            name=CASH_NAME,
            quantity=amount,
            current_price=CASH_UNIT_PRICE,
            sector=CASH_SECTOR,
            exchange=CASH_EXCHANGE,
            is_cash_holding=True,
        )
