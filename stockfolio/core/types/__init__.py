"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    FINANCIAL_DECIMALS,
    HUNDRED,
    PERCENTAGE_DECIMALS,
    ZERO,
    calculate_market_value,
    percentage_of,
    round_amount,
    round_half_up,
    round_percentage,
    safe_divide,
    safe_float_comparison,
    to_float,
)

__all__ = [
    # Utility functions
    "to_float",
    "round_amount",
    "round_percentage",
    "round_half_up",
    "safe_divide",
    "percentage_of",
    "calculate_market_value",
    "safe_float_comparison",
    # Constants
    "FINANCIAL_DECIMALS",
    "PERCENTAGE_DECIMALS",
    "ZERO",
    "HUNDRED",
]
