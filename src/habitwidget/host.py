"""
Stand-in for the operating system's widget host.

Phones and desktops own widget scheduling; this module plays that role so
the controller can be driven from the command line: it wires the pieces from
configuration, refreshes placed widget instances and runs a periodic tick.
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, Optional

from .actions.base import AppEntryPoint
from .actions.launch import HostAppLauncher
from .controller import Timeline, TimelineController
from .platforms import get_platform
from .platforms.base import WidgetConfiguration, WidgetPlatform
from .renderer import SnapshotRenderer
from .store.suite import SuiteStore

logger = logging.getLogger(__name__)


def build_platform(config: Dict[str, Any], name: Optional[str] = None) -> WidgetPlatform:
    """
    Create the platform adapter described by ``config``.

    Args:
        config: Loaded configuration
        name: Platform name overriding ``widget.platform``
    """
    widget = config["widget"]
    name = name or widget["platform"]
    entry_point = AppEntryPoint.parse(str(config["host_app"]["entry_point"]))
    kwargs: Dict[str, Any] = {
        "renderer": SnapshotRenderer(entry_point),
        "configuration": WidgetConfiguration(
            kind=widget["kind"],
            display_name=widget["display_name"],
            description=widget["description"],
            families=tuple(widget["families"]),
        ),
    }
    if name == "desktop":
        kwargs["style"] = config.get("style") or {}
        kwargs["launcher"] = HostAppLauncher(entry_point, config["host_app"].get("command"))
    return get_platform(name, **kwargs)


def build_controller(
    config: Dict[str, Any], platform: Optional[str] = None, family: Optional[str] = None
) -> TimelineController:
    """Create a controller reading the configured suite store."""
    store_config = config["store"]
    store = SuiteStore(store_config["suite"], store_config["directory"])
    return TimelineController(
        store,
        build_platform(config, platform),
        family=family or config["widget"]["families"][0],
    )


class WidgetHost:
    """
    Drives refresh cycles the way a widget host does.

    Each widget instance refreshes independently; nothing is shared between
    instances except the read-only store.
    """

    def __init__(self, controller: TimelineController):
        self.controller = controller
        self.running = False
        self._stop = threading.Event()

    def update(self, widget_ids: Iterable[int]) -> Dict[int, Timeline]:
        """
        Refresh placed widget instances once.

        Args:
            widget_ids: Ids of placed widgets of this kind

        Returns:
            Timeline per widget id (cancelled cycles are omitted)
        """
        timelines = {}
        for widget_id in widget_ids:
            timeline = self.controller.refresh()
            if timeline is not None:
                timelines[widget_id] = timeline
        logger.info(f"Host refreshed {len(timelines)} widget(s)")
        return timelines

    def run(
        self,
        interval: float,
        on_timeline: Callable[[Timeline], Any],
        max_ticks: Optional[int] = None,
    ) -> int:
        """
        Periodic tick loop: refresh, hand the timeline over, wait.

        Args:
            interval: Seconds between refreshes
            on_timeline: Called with each new timeline
            max_ticks: Stop after this many refreshes (None = until stopped)

        Returns:
            Number of refreshes performed
        """
        self.running = True
        self._stop.clear()
        ticks = 0
        logger.info(f"Widget host running, refreshing every {interval}s. Press Ctrl+C to exit.")

        try:
            while self.running:
                timeline = self.controller.refresh()
                if timeline is not None:
                    on_timeline(timeline)
                ticks += 1

                if max_ticks is not None and ticks >= max_ticks:
                    break
                if self._stop.wait(interval):
                    break
        except KeyboardInterrupt:
            logger.info("Received shutdown signal")
        finally:
            self.running = False
            logger.info(f"Widget host stopped after {ticks} refresh(es)")

        return ticks

    def stop(self) -> None:
        """Stop the tick loop from another thread or a signal handler."""
        self.running = False
        self._stop.set()
