"""
Habit widget - home-screen snapshot synchronization and rendering
"""

__version__ = "0.1.0"

from .controller import RefreshCycle, Timeline, TimelineController, TimelineEntry
from .renderer import SnapshotRenderer, WidgetView, render
from .snapshot import SnapshotReader, WidgetSnapshot

__all__ = [
    "WidgetSnapshot",
    "SnapshotReader",
    "SnapshotRenderer",
    "WidgetView",
    "render",
    "TimelineController",
    "RefreshCycle",
    "Timeline",
    "TimelineEntry",
]
