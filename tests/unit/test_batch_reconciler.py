"""
Unit tests for batch update reconciliation.
"""

from datetime import UTC, datetime

import pytest

from stockfolio.core.constants import WEIGHT_EPSILON
from stockfolio.core.engine import BatchUpdateReconciler, PortfolioRefresher
from stockfolio.core.exceptions.portfolio import InvalidHoldingError
from stockfolio.core.models import BatchSummary, BatchUpdate, Holding, Portfolio

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def portfolio() -> Portfolio:
    snapshot = Portfolio(
        id="p1",
        owner_id="u1",
        name="Core",
        budget=5000.0,
        max_holdings=5,
        max_allocation_percent=50.0,
        holdings=(
            Holding.create("A", "A", 10, 100.0, holding_id="a"),
            Holding.create("B", "B", 5, 200.0, holding_id="b"),
            Holding.create_cash(1000.0, holding_id="cash"),
        ),
    )
    return PortfolioRefresher().refresh(snapshot)


class TestBatchApply:
    """Tests for BatchUpdateReconciler.apply."""

    def test_should_apply_valid_updates_and_warn_on_unknown_id(self, portfolio: Portfolio) -> None:
        """Test one unknown id among two valid updates is a warning, not an error."""
        # Arrange
        updates = [
            BatchUpdate("a", price=110.0),
            BatchUpdate("ghost", price=1.0),
            BatchUpdate("b", quantity=6),
        ]

        # Act
        result = BatchUpdateReconciler().apply(portfolio, updates, now=NOW)

        # Assert
        assert result.summary.updated_count == 2
        assert result.warnings == ("Unknown holding id: ghost",)
        assert result.portfolio.find_holding("a").current_price == 110.0
        assert result.portfolio.find_holding("b").quantity == 6
        assert result.summary.total_value_impact == 300.0

    def test_should_record_changes_per_holding(self, portfolio: Portfolio) -> None:
        """Test price delta and value impact of each change."""
        result = BatchUpdateReconciler().apply(
            portfolio, [BatchUpdate("a", price=95.5, quantity=12)], now=NOW
        )

        [change] = result.summary.changes
        assert change.holding_id == "a"
        assert change.old_price == 100.0
        assert change.new_price == 95.5
        assert change.old_quantity == 10
        assert change.new_quantity == 12
        assert change.price_delta == -4.5
        assert change.value_impact == 146.0

    def test_should_recompute_totals_from_scratch(self, portfolio: Portfolio) -> None:
        """Test total value equals the sum of holding values after a batch."""
        result = BatchUpdateReconciler().apply(
            portfolio,
            [BatchUpdate("a", price=101.37), BatchUpdate("b", price=199.99, quantity=7)],
            now=NOW,
        )

        snapshot = result.portfolio
        assert abs(snapshot.total_value - sum(h.total_value for h in snapshot.holdings)) < WEIGHT_EPSILON
        assert abs(sum(h.weight for h in snapshot.holdings) - 100.0) < WEIGHT_EPSILON
        assert snapshot.available_cash == round(5000.0 - 1013.7 - 1399.93, 8)

    def test_should_append_one_history_entry_per_updated_holding(
        self, portfolio: Portfolio
    ) -> None:
        """Test history is appended with the new price, quantity, time and notes."""
        result = BatchUpdateReconciler().apply(
            portfolio, [BatchUpdate("a", price=120.0)], notes="Weekly refresh", now=NOW
        )

        [entry] = result.portfolio.find_holding("a").price_history
        assert entry.price == 120.0
        assert entry.quantity == 10
        assert entry.date == NOW
        assert entry.notes == "Weekly refresh"
        assert result.portfolio.find_holding("b").price_history == ()
        assert result.portfolio.updated_at == NOW

    def test_should_leave_input_snapshot_untouched(self, portfolio: Portfolio) -> None:
        """Test the original snapshot is not mutated."""
        BatchUpdateReconciler().apply(portfolio, [BatchUpdate("a", price=1.0)], now=NOW)

        assert portfolio.find_holding("a").current_price == 100.0
        assert portfolio.total_value == 3000.0

    def test_should_merge_duplicate_updates(self, portfolio: Portfolio) -> None:
        """Test later values win for repeated ids."""
        result = BatchUpdateReconciler().apply(
            portfolio,
            [BatchUpdate("a", price=110.0, quantity=11), BatchUpdate("a", price=120.0)],
            now=NOW,
        )

        holding = result.portfolio.find_holding("a")
        assert holding.current_price == 120.0
        assert holding.quantity == 11
        assert len(holding.price_history) == 1
        assert result.summary.updated_count == 1
        assert any("Duplicate update for holding a" in w for w in result.warnings)

    def test_should_skip_empty_updates_with_warning(self, portfolio: Portfolio) -> None:
        """Test updates without price or quantity are skipped."""
        result = BatchUpdateReconciler().apply(portfolio, [BatchUpdate("a")], now=NOW)

        assert result.summary.updated_count == 0
        assert result.warnings == ("No price or quantity for holding a; skipped",)
        assert result.portfolio.updated_at == portfolio.updated_at

    @pytest.mark.parametrize("update", [BatchUpdate("a", price=-1.0), BatchUpdate("b", quantity=-2)])
    def test_should_reject_negative_values(self, portfolio: Portfolio, update: BatchUpdate) -> None:
        """Test negative values raise before anything is applied."""
        with pytest.raises(InvalidHoldingError, match="must be non-negative"):
            BatchUpdateReconciler().apply(portfolio, [BatchUpdate("a", price=150.0), update])

    def test_should_keep_cash_at_unit_price(self, portfolio: Portfolio) -> None:
        """Test a price update on the cash holding is ignored with a warning."""
        # Arrange
        updates = [BatchUpdate("cash", price=5.0), BatchUpdate("a", price=110.0)]

        # Act
        result = BatchUpdateReconciler().apply(portfolio, updates, now=NOW)

        # Assert
        cash = result.portfolio.find_holding("cash")
        assert cash.current_price == 1.0
        assert cash.price_history == portfolio.find_holding("cash").price_history
        assert result.summary.updated_count == 1
        assert result.portfolio.total_value == 3100.0
        assert result.warnings == ("Cash holding cash is priced at 1.0; price 5.0 ignored",)

    def test_should_apply_cash_quantity_without_repricing(self, portfolio: Portfolio) -> None:
        """Test a cash deposit keeps the unit price when a price is sent along."""
        result = BatchUpdateReconciler().apply(
            portfolio, [BatchUpdate("cash", price=2.0, quantity=1500.0)], now=NOW
        )

        cash = result.portfolio.find_holding("cash")
        assert cash.quantity == 1500.0
        assert cash.current_price == 1.0
        assert result.summary.total_value_impact == 500.0
        assert len(result.warnings) == 1

    def test_should_handle_empty_batch(self, portfolio: Portfolio) -> None:
        """Test an empty batch returns an equivalent snapshot."""
        result = BatchUpdateReconciler().apply(portfolio, [], now=NOW)

        assert result.summary == BatchSummary()
        assert result.portfolio.total_value == portfolio.total_value
        assert result.warnings == ()


class TestBatchSummary:
    """Tests for the human-readable summary."""

    def test_should_describe_summary(self) -> None:
        """Test describe() wording and sign."""
        assert BatchSummary(updated_count=1, total_value_impact=12.5).describe() == (
            "Updated 1 holding, value impact +12.50"
        )
        assert BatchSummary(updated_count=3, total_value_impact=-4.0).describe() == (
            "Updated 3 holdings, value impact -4.00"
        )

    def test_should_convert_summary_to_dict(self, portfolio: Portfolio) -> None:
        """Test to_dict includes changes."""
        result = BatchUpdateReconciler().apply(portfolio, [BatchUpdate("a", price=110.0)], now=NOW)

        summary = result.summary.to_dict()

        assert summary["updated_count"] == 1
        assert summary["total_value_impact"] == 100.0
        assert summary["changes"][0]["holding_id"] == "a"


class TestQuoteFolding:
    """Tests for converting market-data quotes to updates."""

    def test_should_match_quotes_by_ticker(self, portfolio: Portfolio) -> None:
        """Test plain and mapping quotes become price updates."""
        updates, warnings = BatchUpdateReconciler().updates_from_quotes(
            portfolio, {"a": {"price": 105.0, "change": 5.0}, "B": 190.0, "ZZZ": 1.0}
        )

        assert updates == [BatchUpdate("a", price=105.0), BatchUpdate("b", price=190.0)]
        assert warnings == ["No holding for quoted ticker: ZZZ"]

    def test_should_never_price_cash_from_quotes(self, portfolio: Portfolio) -> None:
        """Test the cash ticker is not repriced."""
        updates, warnings = BatchUpdateReconciler().updates_from_quotes(portfolio, {"CASH": 2.0})

        assert updates == []
        assert warnings == ["No holding for quoted ticker: CASH"]

    def test_should_warn_on_quote_without_price(self, portfolio: Portfolio) -> None:
        """Test a mapping quote without a price is reported."""
        updates, warnings = BatchUpdateReconciler().updates_from_quotes(
            portfolio, {"A": {"volume": 1000.0}}
        )

        assert updates == []
        assert warnings == ["Quote for A has no price"]
