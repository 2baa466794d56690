"""
Batch update reconciliation.

Applies a set of price/quantity corrections to a portfolio snapshot in a
single pass. Items that cannot be applied become warnings on the result
instead of failing the whole batch; invalid values still raise.
"""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import UTC, datetime

from loguru import logger

from stockfolio.core.constants import CASH_UNIT_PRICE
from stockfolio.core.exceptions.portfolio import InvalidHoldingError, ValidationError
from stockfolio.core.models import (
    BatchResult,
    BatchSummary,
    BatchUpdate,
    HoldingChange,
    Portfolio,
    PriceHistoryEntry,
)
from stockfolio.core.protocols import QuoteMap
from stockfolio.core.types.financial import ZERO, round_amount, safe_float_comparison, to_float
from stockfolio.core.utils.validation import validate_non_negative

from .snapshot import PortfolioRefresher


class BatchUpdateReconciler:
    """Applies batch price/quantity updates and recomputes derived totals."""

    def __init__(self, refresher: PortfolioRefresher | None = None) -> None:
        self.refresher = refresher or PortfolioRefresher()

    def apply(
        self,
        portfolio: Portfolio,
        updates: Sequence[BatchUpdate],
        notes: str | None = None,
        now: datetime | None = None,
    ) -> BatchResult:
        """Apply updates to a portfolio snapshot.

        - Unknown holding ids and updates carrying neither price nor
          quantity are skipped with a warning
        - The cash holding keeps its unit price; only its quantity changes
        - Repeated ids are merged, later values winning, with a warning
        - Each updated holding gets one price history entry
        - Totals are recomputed from scratch

        Args:
            portfolio: Current snapshot (left unchanged)
            updates: Updates to apply
            notes: Note recorded on every new history entry
            now: Timestamp for history entries (default: current UTC time)

        Returns:
            BatchResult with the new snapshot, summary, and warnings

        Raises:
            InvalidHoldingError: If an update carries a negative price or quantity
        """
        timestamp = now or datetime.now(UTC)
        merged, warnings = self._merge_updates(portfolio, updates)

        changes: list[HoldingChange] = []
        holdings = []
        for holding in portfolio.holdings:
            update = merged.get(holding.id)
            if update is None:
                holdings.append(holding)
                continue

            updated = holding.with_market_data(price=update.price, quantity=update.quantity)
            updated = updated.append_price_history(
                PriceHistoryEntry(
                    price=updated.current_price,
                    quantity=updated.quantity,
                    date=timestamp,
                    notes=notes,
                )
            )
            changes.append(
                HoldingChange(
                    holding_id=holding.id,
                    old_price=holding.current_price,
                    new_price=updated.current_price,
                    old_quantity=holding.quantity,
                    new_quantity=updated.quantity,
                    price_delta=round_amount(updated.current_price - holding.current_price),
                    value_impact=round_amount(updated.total_value - holding.total_value),
                )
            )
            holdings.append(updated)

        snapshot = self.refresher.refresh(portfolio.with_holdings(holdings))
        if changes:
            snapshot = replace(snapshot, updated_at=timestamp)

        summary = BatchSummary(
            updated_count=len(changes),
            total_value_impact=round_amount(
                sum((change.value_impact for change in changes), ZERO)
            ),
            changes=tuple(changes),
        )
        logger.info(f"Batch update applied to {portfolio.id}: {summary.describe()}")

        return BatchResult(portfolio=snapshot, summary=summary, warnings=tuple(warnings))

    def _merge_updates(
        self, portfolio: Portfolio, updates: Sequence[BatchUpdate]
    ) -> tuple[dict[str, BatchUpdate], list[str]]:
        """Validate updates and merge them per holding."""
        merged: dict[str, BatchUpdate] = {}
        warnings: list[str] = []

        for update in updates:
            holding = portfolio.find_holding(update.holding_id)
            if holding is None:
                warnings.append(f"Unknown holding id: {update.holding_id}")
                logger.warning(f"Batch update skipped unknown holding {update.holding_id}")
                continue

            if holding.is_cash_holding and update.price is not None:
                if not safe_float_comparison(update.price, CASH_UNIT_PRICE):
                    warnings.append(
                        f"Cash holding {update.holding_id} is priced at {CASH_UNIT_PRICE}; "
                        f"price {update.price} ignored"
                    )
                    logger.warning(f"Batch update ignored cash price for {update.holding_id}")
                    if update.quantity is None:
                        continue
                update = BatchUpdate(holding_id=update.holding_id, quantity=update.quantity)

            if update.is_empty:
                warnings.append(f"No price or quantity for holding {update.holding_id}; skipped")
                continue

            self._validate_update(update)

            previous = merged.get(update.holding_id)
            if previous is not None:
                warnings.append(
                    f"Duplicate update for holding {update.holding_id}; later values applied"
                )
                update = BatchUpdate(
                    holding_id=update.holding_id,
                    price=previous.price if update.price is None else update.price,
                    quantity=previous.quantity if update.quantity is None else update.quantity,
                )
            merged[update.holding_id] = update

        return merged, warnings

    @staticmethod
    def _validate_update(update: BatchUpdate) -> None:
        for field_name, value in (("price", update.price), ("quantity", update.quantity)):
            if value is None:
                continue
            try:
                validate_non_negative(value, field_name)
            except ValidationError as e:
                raise InvalidHoldingError(str(e), update.holding_id) from e

    def updates_from_quotes(
        self, portfolio: Portfolio, quotes: QuoteMap
    ) -> tuple[list[BatchUpdate], list[str]]:
        """Fold a market-data quote map into batch updates.

        Quotes may be plain prices or mappings with a "price" key and are
        matched to holdings by ticker. The cash holding is never priced
        from a quote.

        Args:
            portfolio: Portfolio snapshot
            quotes: Map of ticker to quote

        Returns:
            Updates for matched holdings and warnings for the rest
        """
        updates: list[BatchUpdate] = []
        warnings: list[str] = []

        for ticker, quote in quotes.items():
            price = quote.get("price") if isinstance(quote, Mapping) else quote
            holding = portfolio.find_by_ticker(ticker)

            if holding is None or holding.is_cash_holding:
                warnings.append(f"No holding for quoted ticker: {ticker}")
                continue
            if price is None:
                warnings.append(f"Quote for {ticker} has no price")
                continue

            updates.append(BatchUpdate(holding_id=holding.id, price=to_float(price)))

        return updates, warnings
