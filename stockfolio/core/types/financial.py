"""
Financial primitives for portfolio valuation.

This module provides float-based helpers for money and percentage
arithmetic. Portfolio tracking works on user-entered prices and
quantities, so float64 precision (~15-16 significant digits) is ample;
the helpers exist to keep rounding and zero-division behaviour
consistent across the engine.

Conventions:
- Money values are rounded with round_amount, percentages with round_percentage
- Percentages are expressed on a 0-100 scale
- Division by zero yields ZERO instead of NaN/Infinity
"""

import math

# Financial calculation precision (number of decimal places)
FINANCIAL_DECIMALS = 8  # Money amounts keep sub-paisa precision internally
PERCENTAGE_DECIMALS = 4  # 4 decimal places for percentages

# Common financial values as float constants
ZERO = 0.0
HUNDRED = 100.0


def to_float(value: str | int | float) -> float:
    """Convert various numeric types to float.

    Args:
        value: Numeric value to convert

    Returns:
        Float representation of the value

    Examples:
        >>> to_float(2500)
        2500.0
        >>> to_float('1.5')
        1.5
    """
    if isinstance(value, float):
        return value
    return float(value)


def round_amount(amount: float) -> float:
    """Round a money amount to internal precision.

    Args:
        amount: Amount value to round

    Returns:
        Rounded amount as float
    """
    return round(amount, FINANCIAL_DECIMALS)


def round_percentage(percentage: float) -> float:
    """Round percentage to appropriate precision.

    Args:
        percentage: Percentage value to round

    Returns:
        Rounded percentage as float
    """
    return round(percentage, PERCENTAGE_DECIMALS)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded away from zero.

    Python's built-in round() uses banker's rounding (round(2.5) == 2),
    which would under-recommend trades sitting exactly on a half unit.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -3
    """
    if value < ZERO:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning ZERO when the denominator is zero.

    Args:
        numerator: Dividend
        denominator: Divisor

    Returns:
        numerator / denominator, or ZERO if denominator == 0
    """
    if denominator == ZERO:
        return ZERO
    return numerator / denominator


def percentage_of(part: float, whole: float) -> float:
    """Express part as a percentage of whole (0-100 scale).

    Examples:
        >>> percentage_of(500.0, 2000.0)
        25.0
        >>> percentage_of(10.0, 0.0)
        0.0
    """
    return safe_divide(part * HUNDRED, whole)


def calculate_market_value(quantity: float, price: float) -> float:
    """Calculate market value of a position with proper precision.

    Args:
        quantity: Number of units held
        price: Current unit price

    Returns:
        Market value as float
    """
    return round_amount(quantity * price)


def safe_float_comparison(a: float, b: float, tolerance: float = 1e-9) -> bool:
    """Compare floats with tolerance for precision issues.

    Args:
        a: First float to compare
        b: Second float to compare
        tolerance: Acceptable difference (default: 1e-9)

    Returns:
        True if floats are equal within tolerance

    Examples:
        >>> safe_float_comparison(0.1 + 0.2, 0.3)
        True
        >>> safe_float_comparison(1000000.1, 1000000.2, 0.01)
        False
    """
    return abs(a - b) < tolerance
