"""
Unit tests for rebalance planning.
"""

import pytest

from stockfolio.core.engine import RebalancePlanner
from stockfolio.core.enums import RebalanceAction
from stockfolio.core.exceptions.portfolio import HoldingNotFoundError, ValidationError
from stockfolio.core.models import Holding, Portfolio, RebalanceRecommendation


def make_portfolio(*holdings: Holding) -> Portfolio:
    return Portfolio(
        id="p1",
        owner_id="u1",
        name="Core",
        budget=1000.0,
        max_holdings=10,
        max_allocation_percent=50.0,
        holdings=holdings,
    )


class TestRebalancePlan:
    """Tests for RebalancePlanner.plan."""

    def test_should_recommend_sell_for_overweight_holding(self) -> None:
        """Test weight 40% against target 30% on a 1000 portfolio."""
        # Arrange
        portfolio = make_portfolio(
            Holding.create("A", "A", 4, 100.0, target_weight=30.0, holding_id="a"),
            Holding.create("B", "B", 6, 100.0, holding_id="b"),
        )

        # Act
        recommendations = RebalancePlanner().plan(portfolio, drift_threshold_percent=2.0)

        # Assert
        assert len(recommendations) == 1
        recommendation = recommendations[0]
        assert recommendation.holding_id == "a"
        assert recommendation.action is RebalanceAction.SELL
        assert recommendation.current_weight == 40.0
        assert recommendation.target_weight == 30.0
        assert recommendation.drift == 10.0
        assert recommendation.estimated_cost == 100.0
        assert recommendation.recommended_quantity_delta == 1

    def test_should_recommend_buy_for_underweight_holding(self) -> None:
        """Test a holding below target is bought."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 2, 100.0, target_weight=50.0, holding_id="a"),
            Holding.create("B", "B", 8, 100.0, holding_id="b"),
        )

        [recommendation] = RebalancePlanner().plan(portfolio)

        assert recommendation.action is RebalanceAction.BUY
        assert recommendation.recommended_quantity_delta == 3
        assert recommendation.estimated_cost == 300.0
        assert recommendation.signed_quantity_delta == 3

    def test_should_return_nothing_when_on_target(self) -> None:
        """Test holdings exactly at target produce no recommendations."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 5, 100.0, target_weight=50.0),
            Holding.create("B", "B", 5, 100.0, target_weight=50.0),
        )

        assert RebalancePlanner().plan(portfolio) == []

    def test_should_treat_missing_target_as_on_target(self) -> None:
        """Test holdings without a target never drift."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 9, 100.0),
            Holding.create("B", "B", 1, 100.0),
        )

        assert RebalancePlanner().plan(portfolio, drift_threshold_percent=0.0) == []

    def test_should_only_emit_drift_strictly_above_threshold(self) -> None:
        """Test a drift equal to the threshold is silent."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 40, 10.0, target_weight=38.0),
            Holding.create("B", "B", 60, 10.0),
        )
        planner = RebalancePlanner()

        assert planner.plan(portfolio, drift_threshold_percent=2.0) == []
        assert len(planner.plan(portfolio, drift_threshold_percent=1.99)) == 1

    def test_should_suppress_zero_quantity_recommendations(self) -> None:
        """Test trades smaller than half a unit are not actionable."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 1, 400.0, target_weight=30.0),
            Holding.create("B", "B", 6, 100.0),
        )

        assert RebalancePlanner().plan(portfolio) == []

    def test_should_round_half_units_up(self) -> None:
        """Test 150 / 100 rounds to 2 units."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 4, 100.0, target_weight=25.0),
            Holding.create("B", "B", 6, 100.0),
        )

        [recommendation] = RebalancePlanner().plan(portfolio)

        assert recommendation.estimated_cost == 150.0
        assert recommendation.recommended_quantity_delta == 2

    def test_should_sort_by_drift_descending(self) -> None:
        """Test the largest misallocation comes first."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 2, 100.0, target_weight=10.0, holding_id="a"),
            Holding.create("B", "B", 3, 100.0, target_weight=60.0, holding_id="b"),
            Holding.create("C", "C", 5, 100.0, target_weight=30.0, holding_id="c"),
        )

        recommendations = RebalancePlanner().plan(portfolio)

        assert [r.holding_id for r in recommendations] == ["b", "c", "a"]
        assert [r.drift for r in recommendations] == [30.0, 20.0, 10.0]

    def test_should_skip_cash_and_unpriced_holdings(self) -> None:
        """Test the cash holding and zero-priced holdings are never traded."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 10, 0.0, target_weight=20.0),
            Holding.create_cash(1000.0),
        )

        assert RebalancePlanner().plan(portfolio) == []

    def test_should_not_mutate_portfolio(self) -> None:
        """Test planning leaves the snapshot untouched."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 4, 100.0, target_weight=30.0),
            Holding.create("B", "B", 6, 100.0),
        )
        before = portfolio

        RebalancePlanner().plan(portfolio)

        assert portfolio == before
        assert portfolio.holdings[0].quantity == 4

    def test_should_reject_negative_threshold(self) -> None:
        """Test ValidationError for a negative drift threshold."""
        with pytest.raises(ValidationError, match="drift_threshold_percent"):
            RebalancePlanner().plan(make_portfolio(), drift_threshold_percent=-1.0)

    def test_should_plan_nothing_for_empty_portfolio(self) -> None:
        """Test an empty portfolio is a legal degenerate state."""
        assert RebalancePlanner().plan(make_portfolio()) == []


class TestRebalanceUpdates:
    """Tests for turning recommendations into batch updates."""

    def test_should_translate_recommendations_to_quantities(self) -> None:
        """Test buys add and sells subtract units."""
        portfolio = make_portfolio(
            Holding.create("A", "A", 4, 100.0, holding_id="a"),
            Holding.create("B", "B", 2, 100.0, holding_id="b"),
        )
        recommendations = [
            RebalanceRecommendation("a", "A", 40.0, 30.0, 10.0, RebalanceAction.SELL, 1, 100.0),
            RebalanceRecommendation("b", "B", 20.0, 30.0, 10.0, RebalanceAction.BUY, 1, 100.0),
        ]

        updates = RebalancePlanner().to_updates(portfolio, recommendations)

        assert [(u.holding_id, u.quantity, u.price) for u in updates] == [
            ("a", 3, None),
            ("b", 3, None),
        ]

    def test_should_never_sell_below_zero(self) -> None:
        """Test sell quantities are floored at zero."""
        portfolio = make_portfolio(Holding.create("A", "A", 1, 100.0, holding_id="a"))
        recommendation = RebalanceRecommendation(
            "a", "A", 100.0, 0.0, 100.0, RebalanceAction.SELL, 5, 500.0
        )

        [update] = RebalancePlanner().to_updates(portfolio, [recommendation])

        assert update.quantity == 0

    def test_should_reject_unknown_holding(self) -> None:
        """Test recommendations must reference existing holdings."""
        recommendation = RebalanceRecommendation(
            "ghost", "G", 10.0, 0.0, 10.0, RebalanceAction.SELL, 1, 10.0
        )

        with pytest.raises(HoldingNotFoundError):
            RebalancePlanner().to_updates(make_portfolio(), [recommendation])
