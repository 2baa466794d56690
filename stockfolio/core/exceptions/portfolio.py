"""
Custom exception hierarchy for the portfolio engine.

This module defines domain-specific exceptions for better error handling.
Validation errors always carry a human-readable message so callers can
surface them without reformatting.
"""


class PortfolioEngineException(Exception):
    """Base exception for all portfolio engine errors."""

    pass


class ValidationError(PortfolioEngineException):
    """Raised when input validation fails."""

    pass


class PortfolioError(PortfolioEngineException):
    """Raised when portfolio operations fail."""

    pass


class InvalidHoldingError(ValidationError):
    """Raised when a holding violates its value invariants."""

    def __init__(self, message: str, holding_id: str | None = None):
        self.holding_id = holding_id
        if holding_id is not None:
            message = f"Invalid holding {holding_id}: {message}"
        super().__init__(message)


class ConstraintViolationError(ValidationError):
    """Raised when portfolio constraints are violated or mutually unsatisfiable."""

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class HoldingNotFoundError(PortfolioError):
    """Raised when trying to operate on a non-existent holding."""

    def __init__(self, holding_id: str):
        self.holding_id = holding_id
        super().__init__(f"Holding not found: {holding_id}")


class PortfolioNotFoundError(PortfolioError):
    """Raised when the storage layer has no portfolio with the given id."""

    def __init__(self, portfolio_id: str):
        self.portfolio_id = portfolio_id
        super().__init__(f"Portfolio not found: {portfolio_id}")


class ConcurrentModificationError(PortfolioError):
    """Raised when a snapshot is saved over a newer stored version."""

    def __init__(self, portfolio_id: str, expected_version: int, actual_version: int):
        self.portfolio_id = portfolio_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Portfolio {portfolio_id} was modified concurrently: "
            f"snapshot version={expected_version}, stored version={actual_version}"
        )
