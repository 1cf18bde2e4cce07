"""
iOS WidgetKit platform.

Produces SwiftUI-shaped view trees as plain dictionaries: a leading-aligned
vertical stack with a headline and a secondary line.
"""

import logging
from typing import Any, Dict

from ..renderer import WidgetView
from ..utils.errors import PlatformError
from .base import RefreshPolicy, WidgetPlatform

logger = logging.getLogger(__name__)

STACK_SPACING = 8


class IOSPlatform(WidgetPlatform):
    """WidgetKit static widget support."""

    name = "ios"

    def produce_placeholder(self, view: WidgetView, family: str) -> Dict[str, Any]:
        tree = self._entry_view(view, family)
        tree["redacted"] = "placeholder"
        return tree

    def produce_snapshot_view(self, view: WidgetView, family: str) -> Dict[str, Any]:
        return self._entry_view(view, family)

    def refresh_policy(self) -> RefreshPolicy:
        return RefreshPolicy.AT_END

    def widget_configuration(self) -> Dict[str, Any]:
        """Static configuration as registered with WidgetKit."""
        config = self.configuration
        return {
            "kind": config.kind,
            "configuration_display_name": config.display_name,
            "description": config.description,
            "supported_families": [f"system{family.capitalize()}" for family in config.families],
        }

    def _entry_view(self, view: WidgetView, family: str) -> Dict[str, Any]:
        if not self.configuration.supports(family):
            raise PlatformError(f"Unsupported widget family: {family}")

        return {
            "type": "VStack",
            "alignment": "leading",
            "spacing": STACK_SPACING,
            "padding": True,
            "family": f"system{family.capitalize()}",
            # The whole widget is one tap target
            "widget_url": self._widget_url(view),
            "children": [
                {
                    "type": "Text",
                    "text": view.headline.text,
                    "font": "headline",
                    "foreground_color": "primary",
                },
                {
                    "type": "Text",
                    "text": view.secondary.text,
                    "font": "subheadline",
                    "foreground_color": "secondary",
                },
                {"type": "Spacer"},
            ],
        }

    def _widget_url(self, view: WidgetView) -> str:
        # Bundle-scoped scheme with no path or query: the app's default entry
        return f"{view.tap_region.action.target.package}://"
