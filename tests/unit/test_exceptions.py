"""
Unit tests for custom exceptions.
Testing all exception classes and their attributes.
"""

from stockfolio.core.exceptions.portfolio import (
    ConcurrentModificationError,
    ConstraintViolationError,
    HoldingNotFoundError,
    InvalidHoldingError,
    PortfolioEngineException,
    PortfolioError,
    PortfolioNotFoundError,
    ValidationError,
)


class TestPortfolioEngineException:
    """Tests for the base exception."""

    def test_should_create_base_exception_with_message(self) -> None:
        """Test creating base exception with message."""
        exc = PortfolioEngineException("Test error message")
        assert str(exc) == "Test error message"
        assert isinstance(exc, Exception)

    def test_should_root_every_engine_error(self) -> None:
        """Test hierarchy roots."""
        assert issubclass(ValidationError, PortfolioEngineException)
        assert issubclass(PortfolioError, PortfolioEngineException)


class TestInvalidHoldingError:
    """Tests for InvalidHoldingError."""

    def test_should_prefix_message_with_holding_id(self) -> None:
        """Test holding id in message."""
        exc = InvalidHoldingError("quantity must be non-negative, got -1", "h1")
        assert str(exc) == "Invalid holding h1: quantity must be non-negative, got -1"
        assert exc.holding_id == "h1"
        assert isinstance(exc, ValidationError)

    def test_should_keep_message_without_holding_id(self) -> None:
        """Test message without id."""
        exc = InvalidHoldingError("bad holding")
        assert str(exc) == "bad holding"
        assert exc.holding_id is None


class TestConstraintViolationError:
    """Tests for ConstraintViolationError."""

    def test_should_carry_every_error(self) -> None:
        """Test error list and joined message."""
        exc = ConstraintViolationError(["Budget must be greater than 0", "Maximum holdings must be at least 1"])
        assert exc.errors == ["Budget must be greater than 0", "Maximum holdings must be at least 1"]
        assert str(exc) == "Budget must be greater than 0; Maximum holdings must be at least 1"
        assert isinstance(exc, ValidationError)

    def test_should_accept_single_message(self) -> None:
        """Test a single string becomes a one-item list."""
        exc = ConstraintViolationError("Maximum holdings reached (3)")
        assert exc.errors == ["Maximum holdings reached (3)"]


class TestPortfolioErrors:
    """Tests for lookup and concurrency errors."""

    def test_should_report_missing_holding(self) -> None:
        """Test HoldingNotFoundError."""
        exc = HoldingNotFoundError("abc")
        assert str(exc) == "Holding not found: abc"
        assert exc.holding_id == "abc"
        assert isinstance(exc, PortfolioError)

    def test_should_report_missing_portfolio(self) -> None:
        """Test PortfolioNotFoundError."""
        exc = PortfolioNotFoundError("p1")
        assert "p1" in str(exc)
        assert exc.portfolio_id == "p1"

    def test_should_report_versions_on_conflict(self) -> None:
        """Test ConcurrentModificationError attributes."""
        exc = ConcurrentModificationError("p1", expected_version=2, actual_version=3)
        assert exc.expected_version == 2
        assert exc.actual_version == 3
        assert "version=2" in str(exc)
        assert "version=3" in str(exc)
