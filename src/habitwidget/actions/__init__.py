"""
Tap action descriptions, pending-action registry and desktop launcher.
"""

from .base import (
    DEFAULT_FLAGS,
    FLAG_IMMUTABLE,
    FLAG_UPDATE_CURRENT,
    AppEntryPoint,
    TapAction,
)
from .launch import HostAppLauncher
from .pending import PendingAction, PendingActionRegistry

__all__ = [
    "AppEntryPoint",
    "TapAction",
    "FLAG_IMMUTABLE",
    "FLAG_UPDATE_CURRENT",
    "DEFAULT_FLAGS",
    "PendingAction",
    "PendingActionRegistry",
    "HostAppLauncher",
]
