"""
Dividend frequency enumeration.

Maps each payout frequency to the number of payouts per year used
when annualizing a single dividend.
"""

from enum import StrEnum


class DividendFrequency(StrEnum):
    """
    Allowed dividend payout frequencies.

    Special dividends are one-off payouts and annualize as a single payment.
    """

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi_annual"
    ANNUAL = "annual"
    SPECIAL = "special"

    @property
    def annual_multiplier(self) -> int:
        """Number of payouts per year for this frequency."""
        return _ANNUAL_MULTIPLIERS[self]

    @property
    def is_recurring(self) -> bool:
        """Check if the dividend is expected to repeat."""
        return self != self.SPECIAL

    @classmethod
    def from_string(cls, value: str) -> "DividendFrequency":
        """Parse a frequency string, accepting hyphenated and mixed-case forms.

        Args:
            value: Frequency name such as "quarterly" or "Semi-Annual"

        Returns:
            Matching DividendFrequency

        Raises:
            ValueError: If the value is not a known frequency
        """
        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Invalid dividend frequency: {value}") from None


_ANNUAL_MULTIPLIERS: dict[DividendFrequency, int] = {
    DividendFrequency.MONTHLY: 12,
    DividendFrequency.QUARTERLY: 4,
    DividendFrequency.SEMI_ANNUAL: 2,
    DividendFrequency.ANNUAL: 1,
    DividendFrequency.SPECIAL: 1,
}
