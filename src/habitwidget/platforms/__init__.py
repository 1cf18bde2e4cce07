"""
Widget platform adapters, one per target.
"""

from typing import Dict, List, Type

from ..utils.errors import PlatformError
from .android import AndroidPlatform
from .base import (
    FAMILY_MEDIUM,
    FAMILY_SIZES,
    FAMILY_SMALL,
    RefreshPolicy,
    WidgetConfiguration,
    WidgetPlatform,
)
from .desktop import DesktopPlatform
from .ios import IOSPlatform

PLATFORMS: Dict[str, Type[WidgetPlatform]] = {
    AndroidPlatform.name: AndroidPlatform,
    IOSPlatform.name: IOSPlatform,
    DesktopPlatform.name: DesktopPlatform,
}


def list_platforms() -> List[str]:
    """List registered platform names."""
    return sorted(PLATFORMS)


def get_platform(name: str, **kwargs) -> WidgetPlatform:
    """
    Instantiate a platform adapter by name.

    Args:
        name: Platform name ("android", "ios", "desktop")
        **kwargs: Passed to the platform constructor

    Raises:
        PlatformError: If the name is unknown
    """
    platform_class = PLATFORMS.get(name)
    if platform_class is None:
        raise PlatformError(f"Unknown platform '{name}' (available: {', '.join(list_platforms())})")
    return platform_class(**kwargs)


__all__ = [
    "WidgetPlatform",
    "WidgetConfiguration",
    "RefreshPolicy",
    "AndroidPlatform",
    "IOSPlatform",
    "DesktopPlatform",
    "FAMILY_SMALL",
    "FAMILY_MEDIUM",
    "FAMILY_SIZES",
    "PLATFORMS",
    "get_platform",
    "list_platforms",
]
