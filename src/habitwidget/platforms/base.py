"""
Base widget platform abstraction.

Every target (Android app widget, iOS WidgetKit, desktop) implements the same
three capabilities. Reading and fallback handling stay in the controller and
reader; platforms only translate a WidgetView into their own view tree.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..renderer import SnapshotRenderer, WidgetView

logger = logging.getLogger(__name__)

FAMILY_SMALL = "small"
FAMILY_MEDIUM = "medium"

# Widget sizes in points/pixels per family
FAMILY_SIZES: Dict[str, Tuple[int, int]] = {
    FAMILY_SMALL: (170, 170),
    FAMILY_MEDIUM: (364, 170),
}


class RefreshPolicy(Enum):
    """
    When the widget host should ask for a new timeline.

    None of these carry a time: the host owns refresh cadence.
    """

    # Ask again once the last entry has been shown (WidgetKit .atEnd)
    AT_END = "at_end"
    # Refresh whenever the host's own schedule or an app request says so
    HOST_SCHEDULED = "host_scheduled"
    # Only on explicit reload requests
    NEVER = "never"


@dataclass(frozen=True)
class WidgetConfiguration:
    """
    Static widget registration metadata.

    Attributes:
        kind: Widget kind identifier
        display_name: Name shown in the host's widget gallery
        description: Gallery description
        families: Supported size families
    """

    kind: str = "HabitWidget"
    display_name: str = "Habit Tracker"
    description: str = "Keep track of your today's habits."
    families: Tuple[str, ...] = field(default=(FAMILY_SMALL, FAMILY_MEDIUM))

    def supports(self, family: str) -> bool:
        return family in self.families


class WidgetPlatform(ABC):
    """
    Base class for per-target widget adapters.

    Class Attributes:
        name: Platform identifier used in configuration ("android", "ios", ...)

    Example:
        >>> class TextPlatform(WidgetPlatform):
        ...     name = "text"
        ...
        ...     def produce_placeholder(self, view, family):
        ...         return view.headline.text
        ...
        ...     def produce_snapshot_view(self, view, family):
        ...         return f"{view.headline.text}\\n{view.secondary.text}"
        ...
        ...     def refresh_policy(self):
        ...         return RefreshPolicy.HOST_SCHEDULED
    """

    name: str = "base"

    def __init__(
        self,
        renderer: Optional[SnapshotRenderer] = None,
        configuration: Optional[WidgetConfiguration] = None,
    ):
        """
        Args:
            renderer: Snapshot renderer (default host app entry point if omitted)
            configuration: Widget registration metadata
        """
        self.renderer = renderer or SnapshotRenderer()
        self.configuration = configuration or WidgetConfiguration()

    @abstractmethod
    def produce_placeholder(self, view: WidgetView, family: str) -> Any:
        """
        Build the native view shown before any real data is available.

        Args:
            view: View rendered from the static placeholder snapshot
            family: Size family

        Returns:
            Platform-native view description
        """
        pass

    @abstractmethod
    def produce_snapshot_view(self, view: WidgetView, family: str) -> Any:
        """
        Build the native view for a snapshot read from the store.

        Args:
            view: View rendered from the snapshot
            family: Size family

        Returns:
            Platform-native view description
        """
        pass

    @abstractmethod
    def refresh_policy(self) -> RefreshPolicy:
        """Refresh policy declared to the host after each timeline."""
        pass

    def describe(self, content: Any) -> Any:
        """
        Plain-data form of a native view, for printing.

        Override when the native view is not already plain data.
        """
        return content

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"
