"""
Price and dividend history analysis.

Summary statistics are computed with pandas over the append-only logs
kept on each holding.
"""

from collections.abc import Sequence

import pandas as pd
from loguru import logger

from stockfolio.core.models import (
    DividendSummary,
    Holding,
    PriceHistoryAnalysis,
    PriceHistoryEntry,
    PriceRange,
)
from stockfolio.core.protocols import IDividend, IHolding
from stockfolio.core.types.financial import (
    ZERO,
    percentage_of,
    round_amount,
    round_percentage,
)

from .valuation import HoldingValuator


class HistoryAnalyzer:
    """
    Price and dividend history analyzer.

    Features:
    - Average, range, and net change over a price window
    - Annualized yield of a single dividend
    - Portfolio dividend totals with an unweighted average yield
    """

    def __init__(self, valuator: HoldingValuator | None = None) -> None:
        self.valuator = valuator or HoldingValuator()

    def analyze_price_history(self, entries: Sequence[PriceHistoryEntry]) -> PriceHistoryAnalysis:
        """
        Summarize a price history window.

        Entries are ordered most recent first, with naive dates read as
        UTC; the change is the most recent price minus the earliest one.
        Windows with fewer than two entries yield an all-zero analysis.

        Args:
            entries: Price history entries in any order

        Returns:
            PriceHistoryAnalysis for the window
        """
        if len(entries) < 2:
            logger.debug(f"Price history too short to analyze: {len(entries)} entries")
            return PriceHistoryAnalysis.empty(sample_size=len(entries))

        frame = pd.DataFrame(
            {
                "date": pd.to_datetime([entry.date for entry in entries], utc=True),
                "price": [entry.price for entry in entries],
            }
        )
        frame = frame.sort_values("date", ascending=False, kind="stable").reset_index(drop=True)

        prices = frame["price"]
        latest_price = float(prices.iloc[0])
        earliest_price = float(prices.iloc[-1])
        price_change = latest_price - earliest_price

        return PriceHistoryAnalysis(
            average_price=round_amount(float(prices.mean())),
            price_range=PriceRange(min=float(prices.min()), max=float(prices.max())),
            price_change=round_amount(price_change),
            price_change_percent=round_percentage(percentage_of(price_change, earliest_price)),
            sample_size=len(frame),
        )

    def dividend_yield(self, dividend: IDividend, holding: IHolding) -> float:
        """
        Annualized yield of a dividend against the holding's current value.

        Args:
            dividend: Dividend to annualize
            holding: Holding the dividend was paid on

        Returns:
            Yield in percent, 0 when the holding is worth nothing
        """
        holding_value = self.valuator.valuate(holding).total_value
        if holding_value == ZERO:
            return ZERO

        annual_dividend = dividend.amount * dividend.annual_multiplier
        return round_percentage(percentage_of(annual_dividend, holding_value))

    def dividend_summary(self, holdings: Sequence[Holding], year: int) -> DividendSummary:
        """
        Summarize dividends across tradable holdings.

        - total_amount: every dividend ever recorded
        - year_to_date: dividends whose ex-date falls in ``year``
        - average_yield: for each holding with any dividends, that
          holding's ``year`` dividends as a percentage of its current
          value; then the plain mean of those yields

        The average is deliberately not value-weighted: each
        dividend-paying holding counts once.

        Args:
            holdings: Holdings to summarize (the cash holding is ignored)
            year: Calendar year for year-to-date figures

        Returns:
            DividendSummary for the holdings
        """
        paying = [h for h in holdings if h.dividends and not h.is_cash_holding]
        if not paying:
            return DividendSummary(year=year)

        frame = pd.DataFrame(
            [
                {
                    "holding_id": holding.id,
                    "amount": dividend.amount,
                    "year": dividend.ex_date.year,
                }
                for holding in paying
                for dividend in holding.dividends
            ]
        )
        in_year = frame[frame["year"] == year]
        annual_by_holding = in_year.groupby("holding_id")["amount"].sum()

        yields = []
        for holding in paying:
            annual_dividend = float(annual_by_holding.get(holding.id, ZERO))
            holding_value = self.valuator.valuate(holding).total_value
            yields.append(percentage_of(annual_dividend, holding_value))

        return DividendSummary(
            total_amount=round_amount(float(frame["amount"].sum())),
            year_to_date=round_amount(float(in_year["amount"].sum())),
            average_yield=round_percentage(sum(yields) / len(yields)),
            year=year,
        )
