"""
Batch update models.

A batch carries price and/or quantity corrections for several holdings,
applied in one reconciliation pass.
"""

from dataclasses import dataclass, field

from stockfolio.core.types.financial import ZERO

from .portfolio import Portfolio


@dataclass(frozen=True)
class BatchUpdate:
    """New price and/or quantity for one holding. None leaves the field unchanged."""

    holding_id: str
    price: float | None = None
    quantity: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.price is None and self.quantity is None


@dataclass(frozen=True)
class HoldingChange:
    """Effect of a batch update on one holding."""

    holding_id: str
    old_price: float
    new_price: float
    old_quantity: float
    new_quantity: float
    price_delta: float
    value_impact: float


@dataclass(frozen=True)
class BatchSummary:
    """Human-readable outcome of a batch update."""

    updated_count: int = 0
    total_value_impact: float = ZERO
    changes: tuple[HoldingChange, ...] = field(default=())

    def describe(self) -> str:
        """One-line description suitable for a notification."""
        sign = "+" if self.total_value_impact > 0 else ""
        noun = "holding" if self.updated_count == 1 else "holdings"
        return f"Updated {self.updated_count} {noun}, value impact {sign}{self.total_value_impact:.2f}"

    def to_dict(self) -> dict:
        """Convert summary to dictionary."""
        return {
            "updated_count": self.updated_count,
            "total_value_impact": self.total_value_impact,
            "changes": [
                {
                    "holding_id": change.holding_id,
                    "old_price": change.old_price,
                    "new_price": change.new_price,
                    "old_quantity": change.old_quantity,
                    "new_quantity": change.new_quantity,
                    "price_delta": change.price_delta,
                    "value_impact": change.value_impact,
                }
                for change in self.changes
            ],
        }


@dataclass(frozen=True)
class BatchResult:
    """New portfolio snapshot plus summary and non-fatal warnings."""

    portfolio: Portfolio
    summary: BatchSummary
    warnings: tuple[str, ...] = field(default=())
