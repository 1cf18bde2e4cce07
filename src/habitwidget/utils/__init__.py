"""
Utility modules for the habit widget.
"""

from .errors import (
    ActionError,
    ConfigurationError,
    HabitWidgetError,
    PlatformError,
    StoreError,
    error_boundary,
    safe_execute,
)

__all__ = [
    "HabitWidgetError",
    "StoreError",
    "ConfigurationError",
    "PlatformError",
    "ActionError",
    "error_boundary",
    "safe_execute",
]
