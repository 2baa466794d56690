"""
Unit tests for holding models.
"""

from dataclasses import FrozenInstanceError
from datetime import UTC, date, datetime

import pytest

from stockfolio.core.constants import CASH_TICKER
from stockfolio.core.enums import DividendFrequency
from stockfolio.core.exceptions.portfolio import InvalidHoldingError, ValidationError
from stockfolio.core.models import DividendEntry, Holding, PriceHistoryEntry


class TestHoldingCreation:
    """Tests for Holding construction and invariants."""

    def test_should_create_holding_with_factory(self) -> None:
        """Test Holding.create defaults."""
        holding = Holding.create("infy ", "Infosys", 10, 1500.0, sector="IT")

        assert holding.ticker == "INFY"
        assert holding.average_cost == 1500.0
        assert holding.target_weight is None
        assert holding.weight == 0.0
        assert not holding.is_cash_holding
        assert len(holding.id) == 12

    def test_should_derive_total_value(self) -> None:
        """Test total_value is quantity x price."""
        holding = Holding.create("TCS", "TCS", 4, 250.5)
        assert holding.total_value == 1002.0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"quantity": -1},
            {"current_price": -0.01},
            {"average_cost": -5.0},
            {"target_weight": 100.5},
            {"target_weight": -1.0},
            {"quantity": float("nan")},
        ],
    )
    def test_should_reject_invalid_values(self, overrides: dict) -> None:
        """Test negative or out-of-range values raise InvalidHoldingError."""
        fields = {"id": "h1", "ticker": "X", "name": "X", "quantity": 1, "current_price": 1.0}
        fields.update(overrides)

        with pytest.raises(InvalidHoldingError, match="Invalid holding h1"):
            Holding(**fields)

    def test_should_be_immutable(self) -> None:
        """Test holdings are frozen."""
        holding = Holding.create("X", "X", 1, 1.0)
        with pytest.raises(FrozenInstanceError):
            holding.quantity = 2  # type: ignore[misc]


class TestCashHolding:
    """Tests for the distinguished cash holding."""

    def test_should_create_cash_holding_at_unit_price(self) -> None:
        """Test Holding.create_cash."""
        cash = Holding.create_cash(5000.0)

        assert cash.ticker == CASH_TICKER
        assert cash.is_cash_holding
        assert cash.current_price == 1.0
        assert cash.total_value == 5000.0
        assert cash.cost_basis == 5000.0


class TestHoldingCostBasis:
    """Tests for cost basis and target weight helpers."""

    def test_should_report_unknown_cost_basis(self) -> None:
        """Test cost basis is None without an average cost."""
        holding = Holding(id="h1", ticker="X", name="X", quantity=2, current_price=10.0)
        assert holding.cost_basis is None

    def test_should_compute_cost_basis(self) -> None:
        """Test quantity x average cost."""
        holding = Holding.create("X", "X", 2, 10.0, average_cost=8.0)
        assert holding.cost_basis == 16.0


class TestHoldingCopies:
    """Tests for copy-on-write helpers."""

    def test_should_copy_with_new_market_data(self) -> None:
        """Test with_market_data keeps unspecified fields."""
        holding = Holding.create("X", "X", 10, 100.0)

        repriced = holding.with_market_data(price=110.0)
        resized = holding.with_market_data(quantity=12)

        assert repriced.current_price == 110.0 and repriced.quantity == 10
        assert resized.current_price == 100.0 and resized.quantity == 12
        assert holding.current_price == 100.0

    def test_should_append_to_logs_without_mutation(self) -> None:
        """Test append-only price history and dividends."""
        holding = Holding.create("X", "X", 10, 100.0)
        entry = PriceHistoryEntry(price=100.0, quantity=10, date=datetime(2024, 1, 1, tzinfo=UTC))
        dividend = DividendEntry(amount=5.0, ex_date=date(2024, 3, 1), pay_date=date(2024, 3, 15))

        updated = holding.append_price_history(entry).append_dividend(dividend)

        assert updated.price_history == (entry,)
        assert updated.dividends == (dividend,)
        assert holding.price_history == ()
        assert holding.dividends == ()


class TestHistoryEntries:
    """Tests for price history and dividend entries."""

    def test_should_reject_negative_history_price(self) -> None:
        """Test PriceHistoryEntry validation."""
        with pytest.raises(ValidationError, match="History price must be non-negative"):
            PriceHistoryEntry(price=-1.0, quantity=1, date=datetime(2024, 1, 1, tzinfo=UTC))

    def test_should_value_history_entry(self) -> None:
        """Test PriceHistoryEntry.value."""
        entry = PriceHistoryEntry(price=20.0, quantity=3, date=datetime(2024, 1, 1, tzinfo=UTC))
        assert entry.value == 60.0

    def test_should_parse_dividend_frequency_strings(self) -> None:
        """Test string frequencies are normalized."""
        dividend = DividendEntry(
            amount=2.0,
            ex_date=date(2024, 1, 1),
            pay_date=date(2024, 1, 10),
            frequency="Semi-Annual",  # type: ignore[arg-type]
        )
        assert dividend.frequency is DividendFrequency.SEMI_ANNUAL
        assert dividend.annual_multiplier == 2
        assert dividend.annualized_amount == 4.0
        assert dividend.currency == "INR"

    def test_should_reject_negative_dividend(self) -> None:
        """Test DividendEntry validation."""
        with pytest.raises(ValidationError, match="Dividend amount must be non-negative"):
            DividendEntry(amount=-1.0, ex_date=date(2024, 1, 1), pay_date=date(2024, 1, 2))
