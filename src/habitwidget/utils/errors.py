"""
Error handling utilities and boundaries for the habit widget.

Refresh paths never surface errors to the widget host; these helpers give
them one consistent way to log and degrade.
"""

import logging
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def error_boundary(
    *,
    reraise: bool = False,
    default_return: Any = None,
    log_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Decorator to create consistent error boundaries around functions.

    Args:
        reraise: If True, re-raise the exception after logging
        default_return: Value to return if error occurs and not reraising
        log_level: Logging level for the error (default: ERROR)

    Returns:
        Decorated function with error handling

    Example:
        >>> @error_boundary(default_return=None, log_level=logging.WARNING)
        ... def read_document(path):
        ...     with open(path) as f:
        ...         return yaml.safe_load(f)
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.log(
                    log_level,
                    f"Error in {func.__name__}: {e}",
                    exc_info=log_level >= logging.ERROR,
                    extra={"function": func.__name__, "module": func.__module__},
                )

                if reraise:
                    raise

                return default_return

        return wrapper  # type: ignore

    return decorator


def safe_execute(
    func: Callable[[], Any],
    *,
    on_error: Optional[Callable[[Exception], Any]] = None,
    default: Any = None,
    log_level: int = logging.ERROR,
) -> Any:
    """
    Safely execute a function with error handling.

    Useful for one-off operations where a decorator isn't appropriate.

    Args:
        func: Function to execute
        on_error: Optional callback to call if error occurs (receives exception)
        default: Default value to return on error
        log_level: Logging level for the error (default: ERROR)

    Returns:
        Function result, or default value on error
    """
    try:
        return func()
    except Exception as e:
        logger.log(log_level, f"Error in safe_execute: {e}", exc_info=log_level >= logging.ERROR)
        if on_error:
            on_error(e)
        return default


class HabitWidgetError(Exception):
    """Base exception for all habit widget errors."""

    pass


class StoreError(HabitWidgetError):
    """Raised when the shared store cannot be written."""

    pass


class ConfigurationError(HabitWidgetError):
    """Raised when there's an issue with configuration."""

    pass


class PlatformError(HabitWidgetError):
    """Raised when a widget platform is unknown or misused."""

    pass


class ActionError(HabitWidgetError):
    """Raised when a tap action cannot be fulfilled."""

    pass
