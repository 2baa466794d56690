"""
Utility decorators for engine operations.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any

from loguru import logger

from stockfolio.core.exceptions.portfolio import HoldingNotFoundError


def _bind_arguments(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> inspect.BoundArguments:
    """Bind call arguments to the function signature with defaults applied."""
    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()
    return bound_args


def _extract_operation_context(bound_args: inspect.BoundArguments) -> dict[str, Any]:
    """Extract portfolio context from function arguments."""
    context: dict[str, Any] = {}
    for param_name, value in bound_args.arguments.items():
        if param_name == "self":
            continue
        if param_name == "portfolio" and hasattr(value, "id"):
            context["portfolio_id"] = value.id
        elif param_name in ("holding_id", "ticker", "year"):
            context[param_name] = _serialize_parameter_value(value)
        elif param_name in ("updates", "recommendations") and value is not None:
            context[f"{param_name}_count"] = len(value)
    return context


def _serialize_parameter_value(value: Any) -> Any:
    """Serialize parameter value for logging."""
    if hasattr(value, "value") and hasattr(value, "name"):
        return str(value.value)  # Handle enum values
    return value


def _create_success_context(
    base_context: dict[str, Any], execution_time_ms: float, result: Any
) -> dict[str, Any]:
    """Create success logging context."""
    success_context = {
        **base_context,
        "success": True,
        "execution_time_ms": round(execution_time_ms, 2),
        "result_type": type(result).__name__,
    }

    warnings = getattr(result, "warnings", None)
    if warnings:
        success_context["warnings_count"] = len(warnings)

    return success_context


def _create_error_context(
    base_context: dict[str, Any], execution_time_ms: float, error: Exception
) -> dict[str, Any]:
    """Create error logging context."""
    return {
        **base_context,
        "success": False,
        "execution_time_ms": round(execution_time_ms, 2),
        "error_type": type(error).__name__,
        "error_message": str(error),
    }


def _execute_with_logging(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    """Execute function with start/completion/failure logging."""
    func_name = func.__name__
    context = {
        "correlation_id": str(uuid.uuid4())[:8],
        **_extract_operation_context(_bind_arguments(func, args, kwargs)),
    }

    logger.bind(**context).debug(f"Portfolio operation started: {func_name}")
    start_time = time.perf_counter()

    try:
        result = func(*args, **kwargs)
    except Exception as e:
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        error_context = _create_error_context(context, execution_time_ms, e)
        logger.bind(**error_context).error(f"Portfolio operation failed: {func_name}")
        raise

    execution_time_ms = (time.perf_counter() - start_time) * 1000
    success_context = _create_success_context(context, execution_time_ms, result)
    logger.bind(**success_context).info(f"Portfolio operation completed: {func_name}")
    return result


def log_operation[F: Callable[..., Any]](func: F) -> F:
    """Decorator to log engine operations with correlation IDs."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return _execute_with_logging(func, args, kwargs)

    return wrapper  # type: ignore


def _check_holding_exists(
    args: tuple[Any, ...], kwargs: dict[str, Any], holding_param: str, func: Callable[..., Any]
) -> None:
    """Check if the referenced holding exists before function execution."""
    bound_args = _bind_arguments(func, args, kwargs)

    portfolio = bound_args.arguments.get("portfolio")
    holding_id = bound_args.arguments.get(holding_param)

    if portfolio is not None and holding_id is not None:
        if portfolio.find_holding(holding_id) is None:
            raise HoldingNotFoundError(holding_id)


def require_holding[F: Callable[..., Any]](holding_param: str = "holding_id") -> Callable[[F], F]:
    """Decorator to ensure a holding exists in the portfolio before executing."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            _check_holding_exists(args, kwargs, holding_param, func)
            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
