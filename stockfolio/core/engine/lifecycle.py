"""
Portfolio lifecycle operations.

Creating portfolios and changing their composition, budget, or
constraints. Every operation returns a refreshed snapshot and leaves its
input untouched.
"""

from dataclasses import replace
from datetime import UTC, datetime

from stockfolio.core.enums import PortfolioType, RebalanceFrequency, RiskLevel
from stockfolio.core.exceptions.portfolio import ConstraintViolationError, ValidationError
from stockfolio.core.models import ConstraintConfig, DividendEntry, Holding, Portfolio
from stockfolio.core.models.holding import generate_id
from stockfolio.core.types.financial import ZERO, round_amount
from stockfolio.core.utils.decorators import require_holding
from stockfolio.core.utils.validation import (
    validate_identifier,
    validate_positive,
    validate_weight,
)

from .constraints import ConstraintValidator
from .snapshot import PortfolioRefresher


class PortfolioLifecycle:
    """Creates portfolios and applies composition changes under their constraints."""

    def __init__(
        self,
        refresher: PortfolioRefresher | None = None,
        validator: ConstraintValidator | None = None,
    ) -> None:
        self.refresher = refresher or PortfolioRefresher()
        self.validator = validator or ConstraintValidator()

    def create_portfolio(
        self,
        owner_id: str,
        name: str,
        budget: float,
        max_holdings: int,
        max_allocation_percent: float,
        description: str = "",
        portfolio_type: PortfolioType = PortfolioType.CUSTOM,
        risk_level: RiskLevel | None = None,
        rebalance_frequency: RebalanceFrequency | None = None,
        tags: tuple[str, ...] = (),
        initial_cash: float | None = None,
        now: datetime | None = None,
    ) -> Portfolio:
        """Create a new portfolio.

        Args:
            owner_id: Id of the owning user
            name: Display name
            budget: Capital allocated to the portfolio
            max_holdings: Maximum number of tradable holdings
            max_allocation_percent: Maximum weight of any single holding
            description: Free-form description
            portfolio_type: Asset class mix
            risk_level: Optional risk appetite
            rebalance_frequency: Optional rebalance schedule
            tags: Free-form tags
            initial_cash: When given, seeds a cash holding with this amount
            now: Creation timestamp (default: current UTC time)

        Returns:
            Refreshed portfolio snapshot

        Raises:
            ConstraintViolationError: If the constraints are invalid
            ValidationError: If owner id or name is blank
        """
        validate_identifier(owner_id, "owner_id")
        validate_identifier(name, "name")
        self.validator.validate(
            ConstraintConfig(
                max_holdings=max_holdings,
                max_allocation_percent=max_allocation_percent,
                budget=budget,
            )
        ).raise_if_invalid()

        holdings: tuple[Holding, ...] = ()
        if initial_cash is not None:
            validate_positive(initial_cash, "initial_cash")
            holdings = (Holding.create_cash(initial_cash),)

        timestamp = now or datetime.now(UTC)
        portfolio = Portfolio(
            id=generate_id(),
            owner_id=owner_id,
            name=name.strip(),
            description=description,
            budget=budget,
            max_holdings=max_holdings,
            max_allocation_percent=max_allocation_percent,
            portfolio_type=portfolio_type,
            holdings=holdings,
            risk_level=risk_level,
            rebalance_frequency=rebalance_frequency,
            tags=tags,
            created_at=timestamp,
            updated_at=timestamp,
        )
        return self.refresher.refresh(portfolio)

    def add_holding(self, portfolio: Portfolio, holding: Holding) -> Portfolio:
        """Add a holding to the portfolio.

        Raises:
            ConstraintViolationError: If the holding count or allocation cap
                would be exceeded, or a second cash holding is added
            ValidationError: If the holding id is already present
        """
        if portfolio.find_holding(holding.id) is not None:
            raise ValidationError(f"Duplicate holding id: {holding.id}")

        if holding.is_cash_holding:
            if portfolio.cash_holding is not None:
                raise ConstraintViolationError("Portfolio already has a cash holding")
        else:
            if len(portfolio.non_cash_holdings) >= portfolio.max_holdings:
                raise ConstraintViolationError(
                    f"Maximum holdings reached ({portfolio.max_holdings})"
                )
            if holding.target_weight is not None:
                self._check_target_weight(portfolio, holding.target_weight)

        return self.refresher.refresh(portfolio.with_holdings((*portfolio.holdings, holding)))

    @require_holding()
    def remove_holding(self, portfolio: Portfolio, holding_id: str) -> Portfolio:
        """Remove a holding from the portfolio.

        Raises:
            HoldingNotFoundError: If the holding does not exist
        """
        remaining = tuple(h for h in portfolio.holdings if h.id != holding_id)
        return self.refresher.refresh(portfolio.with_holdings(remaining))

    @require_holding()
    def set_target_weight(
        self, portfolio: Portfolio, holding_id: str, target_weight: float | None
    ) -> Portfolio:
        """Set or clear a holding's target weight.

        Raises:
            HoldingNotFoundError: If the holding does not exist
            ConstraintViolationError: If the target breaks the allocation cap
        """
        holding = portfolio.find_holding(holding_id)
        if target_weight is not None:
            validate_weight(target_weight, "target_weight")
            if holding.is_cash_holding:
                raise ValidationError("The cash holding cannot have a target weight")
            self._check_target_weight(portfolio, target_weight, exclude_holding_id=holding_id)

        return self._replace_holding(portfolio, replace(holding, target_weight=target_weight))

    @require_holding()
    def add_dividend(
        self, portfolio: Portfolio, holding_id: str, dividend: DividendEntry
    ) -> Portfolio:
        """Append a dividend to a holding's dividend log.

        Raises:
            HoldingNotFoundError: If the holding does not exist
            ValidationError: If the holding is the cash holding
        """
        holding = portfolio.find_holding(holding_id)
        if holding.is_cash_holding:
            raise ValidationError("Dividends cannot be recorded on the cash holding")
        return self._replace_holding(portfolio, holding.append_dividend(dividend))

    def top_up_budget(
        self, portfolio: Portfolio, additional_amount: float, now: datetime | None = None
    ) -> Portfolio:
        """Add capital to the portfolio budget.

        Raises:
            ValidationError: If the amount is not positive
        """
        validate_positive(additional_amount, "additional_amount")
        updated = replace(
            portfolio,
            budget=round_amount(portfolio.budget + additional_amount),
            updated_at=now or datetime.now(UTC),
        )
        return self.refresher.refresh(updated)

    def update_constraints(
        self,
        portfolio: Portfolio,
        max_holdings: int | None = None,
        max_allocation_percent: float | None = None,
        budget: float | None = None,
    ) -> Portfolio:
        """Change allocation constraints; omitted values are kept.

        Raises:
            ConstraintViolationError: If the resulting constraints are invalid,
                fewer holdings would be allowed than are already held, or an
                existing target weight is above the new allocation cap
        """
        config = ConstraintConfig(
            max_holdings=portfolio.max_holdings if max_holdings is None else max_holdings,
            max_allocation_percent=(
                portfolio.max_allocation_percent
                if max_allocation_percent is None
                else max_allocation_percent
            ),
            budget=portfolio.budget if budget is None else budget,
        )
        self.validator.validate(config).raise_if_invalid()

        held = len(portfolio.non_cash_holdings)
        if config.max_holdings < held:
            raise ConstraintViolationError(
                f"Portfolio already holds {held} holdings, more than the new maximum of "
                f"{config.max_holdings}"
            )

        over_cap = [
            f"Holding {holding.ticker} targets {holding.target_weight}%, above the new "
            f"{config.max_allocation_percent}% cap"
            for holding in portfolio.non_cash_holdings
            if holding.target_weight is not None
            and holding.target_weight > config.max_allocation_percent
        ]
        if over_cap:
            raise ConstraintViolationError(over_cap)

        updated = replace(
            portfolio,
            max_holdings=config.max_holdings,
            max_allocation_percent=config.max_allocation_percent,
            budget=config.budget,
        )
        return self.refresher.refresh(updated)

    def _check_target_weight(
        self,
        portfolio: Portfolio,
        target_weight: float,
        exclude_holding_id: str | None = None,
    ) -> None:
        if target_weight == ZERO:
            return
        check = self.validator.check_allocation(portfolio, target_weight, exclude_holding_id)
        if not check.is_valid:
            raise ConstraintViolationError(
                f"Target weight {target_weight}% exceeds the {check.max_allowed}% "
                f"still allowed for this holding"
            )

    def _replace_holding(self, portfolio: Portfolio, holding: Holding) -> Portfolio:
        holdings = tuple(holding if h.id == holding.id else h for h in portfolio.holdings)
        return self.refresher.refresh(portfolio.with_holdings(holdings))
