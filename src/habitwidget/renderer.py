"""
Pure mapping from a WidgetSnapshot to a platform-neutral view description.

The view has a headline text element, a secondary text element and one tap
region covering both, bound to the "open host app" action. Platforms
translate this description into their own view trees.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .actions.base import AppEntryPoint, TapAction
from .snapshot import CONTENT_KEY, TITLE_KEY, WidgetSnapshot

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_POINT = AppEntryPoint(package="com.example.habit", component=".MainActivity")

ROLE_HEADLINE = "headline"
ROLE_SECONDARY = "secondary"


@dataclass(frozen=True)
class TextElement:
    """
    One line of widget text.

    Attributes:
        element_id: Stable id platforms bind text and taps to
        role: ROLE_HEADLINE or ROLE_SECONDARY
        text: Text to display, exactly as read
    """

    element_id: str
    role: str
    text: str


@dataclass(frozen=True)
class TapRegion:
    """Tap target covering ``element_ids``, firing ``action``."""

    element_ids: Tuple[str, ...]
    action: TapAction


@dataclass(frozen=True)
class WidgetView:
    """
    Platform-neutral widget view description.

    Two views built from equal snapshots compare equal.
    """

    headline: TextElement
    secondary: TextElement
    tap_region: TapRegion

    @property
    def elements(self) -> Tuple[TextElement, TextElement]:
        return (self.headline, self.secondary)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form, e.g. for YAML output."""
        return {
            "elements": [
                {"id": element.element_id, "role": element.role, "text": element.text}
                for element in self.elements
            ],
            "tap_region": {
                "covers": list(self.tap_region.element_ids),
                "action": self.tap_region.action.to_dict(),
            },
        }


class SnapshotRenderer:
    """
    Renders snapshots into WidgetView descriptions.

    Rendering reads nothing but its argument: no store access, no I/O.
    """

    def __init__(self, entry_point: Optional[AppEntryPoint] = None):
        """
        Args:
            entry_point: Host app entry point the tap action opens
        """
        self.entry_point = entry_point or DEFAULT_ENTRY_POINT
        self._tap_action = TapAction(target=self.entry_point)

    @property
    def tap_action(self) -> TapAction:
        return self._tap_action

    def render(self, snapshot: WidgetSnapshot) -> WidgetView:
        """
        Map a snapshot to a view.

        Args:
            snapshot: Fully populated snapshot from SnapshotReader

        Returns:
            WidgetView with headline, secondary line and tap region
        """
        headline = TextElement(element_id=TITLE_KEY, role=ROLE_HEADLINE, text=snapshot.title)
        secondary = TextElement(element_id=CONTENT_KEY, role=ROLE_SECONDARY, text=snapshot.content)
        return WidgetView(
            headline=headline,
            secondary=secondary,
            tap_region=TapRegion(
                element_ids=(headline.element_id, secondary.element_id),
                action=self._tap_action,
            ),
        )


_default_renderer = SnapshotRenderer()


def render(snapshot: WidgetSnapshot) -> WidgetView:
    """Render with the default host app entry point."""
    return _default_renderer.render(snapshot)
