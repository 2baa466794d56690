"""
Unit tests for the Portfolio aggregate root.
"""

from dataclasses import FrozenInstanceError

import pytest

from stockfolio.core.enums import PortfolioType
from stockfolio.core.exceptions.portfolio import ValidationError
from stockfolio.core.models import Holding, Portfolio


def make_portfolio(*holdings: Holding) -> Portfolio:
    return Portfolio(
        id="p1",
        owner_id="u1",
        name="Core",
        budget=10000.0,
        max_holdings=5,
        max_allocation_percent=40.0,
        holdings=holdings,
    )


class TestPortfolioInvariants:
    """Tests for structural invariants checked on construction."""

    def test_should_create_portfolio_with_defaults(self) -> None:
        """Test default metadata and derived values."""
        portfolio = make_portfolio()

        assert portfolio.portfolio_type is PortfolioType.CUSTOM
        assert portfolio.holdings == ()
        assert portfolio.total_value == 0.0
        assert portfolio.version == 0

    def test_should_normalize_holdings_to_tuple(self) -> None:
        """Test list holdings are stored as a tuple."""
        holding = Holding.create("A", "A", 1, 1.0, holding_id="h1")
        portfolio = Portfolio(
            id="p1",
            owner_id="u1",
            name="Core",
            budget=1.0,
            max_holdings=1,
            max_allocation_percent=100.0,
            holdings=[holding],  # type: ignore[arg-type]
            tags=["long-term"],  # type: ignore[arg-type]
        )
        assert portfolio.holdings == (holding,)
        assert portfolio.tags == ("long-term",)

    def test_should_reject_duplicate_holding_ids(self) -> None:
        """Test unique ids."""
        first = Holding.create("A", "A", 1, 1.0, holding_id="h1")
        second = Holding.create("B", "B", 1, 1.0, holding_id="h1")

        with pytest.raises(ValidationError, match="Duplicate holding id: h1"):
            make_portfolio(first, second)

    def test_should_reject_second_cash_holding(self) -> None:
        """Test at most one cash holding."""
        with pytest.raises(ValidationError, match="at most one cash holding"):
            make_portfolio(Holding.create_cash(10.0), Holding.create_cash(20.0))

    def test_should_reject_non_holding_entries(self) -> None:
        """Test holdings must be Holding instances."""
        with pytest.raises(ValidationError, match="Holding instances"):
            make_portfolio({"ticker": "A"})  # type: ignore[arg-type]

    def test_should_be_immutable(self) -> None:
        """Test portfolios are frozen."""
        portfolio = make_portfolio()
        with pytest.raises(FrozenInstanceError):
            portfolio.budget = 5.0  # type: ignore[misc]


class TestPortfolioLookups:
    """Tests for holding lookups."""

    def test_should_separate_cash_from_tradable_holdings(self) -> None:
        """Test cash_holding and non_cash_holdings."""
        stock = Holding.create("A", "A", 1, 1.0, holding_id="h1")
        cash = Holding.create_cash(100.0, holding_id="c1")
        portfolio = make_portfolio(stock, cash)

        assert portfolio.cash_holding is cash
        assert portfolio.non_cash_holdings == (stock,)
        assert portfolio.holding_ids == ("h1", "c1")
        assert list(portfolio) == [stock, cash]

    def test_should_find_holdings_by_id_and_ticker(self) -> None:
        """Test find_holding and case-insensitive find_by_ticker."""
        stock = Holding.create("INFY", "Infosys", 1, 1.0, holding_id="h1")
        portfolio = make_portfolio(stock)

        assert portfolio.find_holding("h1") is stock
        assert portfolio.find_holding("missing") is None
        assert portfolio.find_by_ticker("infy") is stock
        assert portfolio.find_by_ticker("TCS") is None

    def test_should_replace_holdings_on_copy(self) -> None:
        """Test with_holdings leaves the original untouched."""
        portfolio = make_portfolio()
        stock = Holding.create("A", "A", 1, 1.0)

        updated = portfolio.with_holdings([stock])

        assert updated.holdings == (stock,)
        assert portfolio.holdings == ()
