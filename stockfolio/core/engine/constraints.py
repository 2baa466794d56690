"""
Portfolio constraint validation.

Checks the budget, holding-count, and per-holding allocation limits a
portfolio is configured with, and answers sizing questions under those
limits.
"""

import math

from stockfolio.core.constants import FULL_ALLOCATION_PERCENT
from stockfolio.core.models import (
    AllocationCheck,
    ConstraintConfig,
    Portfolio,
    QuantitySuggestion,
    ValidationResult,
)
from stockfolio.core.types.financial import (
    ZERO,
    calculate_market_value,
    percentage_of,
    round_percentage,
)
from stockfolio.core.utils.validation import validate_positive


class ConstraintValidator:
    """Validates allocation constraints.

    Every rule is evaluated independently so that all violations can be
    shown at once.
    """

    def validate(self, config: ConstraintConfig | Portfolio) -> ValidationResult:
        """Check a candidate constraint configuration.

        Rules:
        - max_allocation_percent must lie in (0, 100]
        - max_holdings must be at least 1
        - max_holdings must be at least ceil(100 / max_allocation_percent),
          otherwise 100% cannot be allocated without breaking the
          per-holding cap
        - budget must be positive

        Args:
            config: Constraint configuration, or a portfolio to read it from

        Returns:
            ValidationResult listing every violated rule
        """
        if isinstance(config, Portfolio):
            config = ConstraintConfig.from_portfolio(config)

        errors: list[str] = []
        max_allocation = config.max_allocation_percent
        max_holdings = config.max_holdings

        if max_allocation <= 0 or max_allocation > FULL_ALLOCATION_PERCENT:
            errors.append(
                f"Max allocation per holding must be between 0% and 100%, got {max_allocation}%"
            )

        if max_holdings < 1:
            errors.append("Maximum holdings must be at least 1")

        if max_allocation > 0:
            min_holdings = math.ceil(FULL_ALLOCATION_PERCENT / max_allocation)
            if max_holdings < min_holdings:
                errors.append(
                    f"With {max_allocation}% max allocation, you need at least "
                    f"{min_holdings} max holdings to achieve 100% allocation"
                )

        if config.budget <= 0:
            errors.append("Budget must be greater than 0")

        return ValidationResult(errors=tuple(errors))

    def max_holdings_allowed(self, portfolio: Portfolio) -> int:
        """Largest number of holdings that can each receive the maximum allocation."""
        if portfolio.max_allocation_percent <= 0:
            return portfolio.max_holdings
        by_allocation = math.floor(FULL_ALLOCATION_PERCENT / portfolio.max_allocation_percent)
        return min(portfolio.max_holdings, by_allocation)

    def check_allocation(
        self,
        portfolio: Portfolio,
        allocation_percent: float,
        exclude_holding_id: str | None = None,
    ) -> AllocationCheck:
        """Check whether a holding may be allocated the given percentage.

        Existing allocations are the target weights already assigned to
        other tradable holdings; holdings without a target reserve nothing.

        Args:
            portfolio: Portfolio snapshot
            allocation_percent: Proposed allocation for the holding
            exclude_holding_id: Holding being re-allocated, left out of the sum

        Returns:
            AllocationCheck with the room left under the constraints
        """
        current_total = sum(
            (
                holding.target_weight
                for holding in portfolio.non_cash_holdings
                if holding.id != exclude_holding_id and holding.target_weight is not None
            ),
            ZERO,
        )
        remaining = FULL_ALLOCATION_PERCENT - current_total
        max_allowed = min(portfolio.max_allocation_percent, remaining)

        return AllocationCheck(
            is_valid=ZERO < allocation_percent <= max_allowed,
            current_total_allocation=round_percentage(current_total),
            remaining_allocation=round_percentage(remaining),
            max_allowed=round_percentage(max_allowed),
        )

    def suggest_quantity(
        self, portfolio: Portfolio, price: float, allocation_percent: float
    ) -> QuantitySuggestion:
        """Whole units of a stock that fit the given share of the budget.

        Args:
            portfolio: Portfolio whose budget is being allocated
            price: Unit price of the stock
            allocation_percent: Share of the budget to spend

        Returns:
            QuantitySuggestion rounded down to whole units

        Raises:
            ValidationError: If price is not positive
        """
        validate_positive(price, "price")

        target_value = portfolio.budget * allocation_percent / FULL_ALLOCATION_PERCENT
        suggested_quantity = max(math.floor(target_value / price), 0)
        estimated_value = calculate_market_value(suggested_quantity, price)

        return QuantitySuggestion(
            suggested_quantity=suggested_quantity,
            estimated_value=estimated_value,
            actual_allocation=round_percentage(percentage_of(estimated_value, portfolio.budget)),
        )
