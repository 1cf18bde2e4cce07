"""
Android app widget platform.

Builds RemoteViews-style descriptions: a layout resource, text assignments
per view id and a click binding per view id, all bound to one pending action
that opens the host app's main activity.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from ..actions.pending import PendingAction, PendingActionRegistry
from ..renderer import SnapshotRenderer, WidgetView
from ..utils.errors import PlatformError
from .base import RefreshPolicy, WidgetConfiguration, WidgetPlatform

logger = logging.getLogger(__name__)

LAYOUT = "habit_widget_layout"


@dataclass(frozen=True)
class RemoteViewsSpec:
    """
    Description of an app widget's remote views.

    Attributes:
        package: Package owning the layout
        layout: Layout resource name
        texts: View id to text
        click_bindings: View id to pending action fired on click
    """

    package: str
    layout: str
    texts: Dict[str, str]
    click_bindings: Dict[str, PendingAction]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package": self.package,
            "layout": self.layout,
            "texts": dict(self.texts),
            "click_bindings": {
                view_id: {"token": pending.token, **pending.action.to_dict()}
                for view_id, pending in self.click_bindings.items()
            },
        }


class AndroidPlatform(WidgetPlatform):
    """Android home-screen app widget support."""

    name = "android"

    def __init__(
        self,
        renderer: Optional[SnapshotRenderer] = None,
        configuration: Optional[WidgetConfiguration] = None,
        pending_actions: Optional[PendingActionRegistry] = None,
    ):
        """
        Args:
            renderer: Snapshot renderer
            configuration: Widget registration metadata
            pending_actions: Host-side pending action registry
        """
        super().__init__(renderer, configuration)
        self.pending_actions = pending_actions or PendingActionRegistry()

    def produce_placeholder(self, view: WidgetView, family: str) -> RemoteViewsSpec:
        # App widgets show the layout's initial content as the placeholder
        return self._remote_views(view, family)

    def produce_snapshot_view(self, view: WidgetView, family: str) -> RemoteViewsSpec:
        return self._remote_views(view, family)

    def refresh_policy(self) -> RefreshPolicy:
        return RefreshPolicy.HOST_SCHEDULED

    def describe(self, content: RemoteViewsSpec) -> Dict[str, Any]:
        return content.to_dict()

    def on_update(self, controller, manager, widget_ids: Iterable[int]) -> int:
        """
        Refresh every placed widget of this kind.

        Args:
            controller: TimelineController bound to this platform
            manager: Host widget manager exposing update_app_widget(widget_id, views)
            widget_ids: Ids of placed widget instances

        Returns:
            Number of widgets updated
        """
        updated = 0
        for widget_id in widget_ids:
            timeline = controller.refresh()
            if timeline is None:
                continue
            manager.update_app_widget(widget_id, timeline.entry.content)
            updated += 1
        logger.info(f"Updated {updated} {self.configuration.kind} widget(s)")
        return updated

    def _remote_views(self, view: WidgetView, family: str) -> RemoteViewsSpec:
        if not self.configuration.supports(family):
            raise PlatformError(f"Unsupported widget family: {family}")

        pending = self.pending_actions.get_activity(view.tap_region.action)
        return RemoteViewsSpec(
            package=view.tap_region.action.target.package,
            layout=LAYOUT,
            texts={element.element_id: element.text for element in view.elements},
            click_bindings={element_id: pending for element_id in view.tap_region.element_ids},
        )
