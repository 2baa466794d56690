"""
Validation utilities for core domain models.

Provides consistent validation across the engine.
"""

import math

from stockfolio.core.exceptions.portfolio import ValidationError


def validate_finite(value: float, param_name: str) -> float:
    """Validate that a numeric value is a finite number.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is not a number, NaN, or infinite
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError(f"{param_name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValidationError(f"{param_name} must be finite, got {value}")
    return value


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a numeric value is positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is not positive
    """
    validate_finite(value, param_name)
    if value <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return value


def validate_non_negative(value: float, param_name: str) -> float:
    """Validate that a numeric value is zero or positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is negative
    """
    validate_finite(value, param_name)
    if value < 0:
        raise ValidationError(f"{param_name} must be non-negative, got {value}")
    return value


def validate_weight(value: float, param_name: str = "weight") -> float:
    """Validate that a weight lies within [0, 100].

    A zero weight is allowed: it means the holding should be sold out
    entirely.
    """
    validate_finite(value, param_name)
    if value < 0 or value > 100:
        raise ValidationError(f"{param_name} must be between 0 and 100, got {value}")
    return value


def validate_identifier(value: str, param_name: str = "id") -> str:
    """Validate that an identifier is a non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{param_name} must be a non-empty string")
    return value
