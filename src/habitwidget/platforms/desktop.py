"""
Desktop widget platform.

Rasterises the widget view with Pillow: headline on top, secondary line
below, left-aligned with padding. Tapping launches the host app.
"""

import logging
import os
from typing import Any, Dict, Optional

from PIL import Image, ImageDraw, ImageFont

from ..actions.launch import HostAppLauncher
from ..renderer import SnapshotRenderer, WidgetView
from ..utils.errors import PlatformError
from .base import FAMILY_SIZES, RefreshPolicy, WidgetConfiguration, WidgetPlatform

logger = logging.getLogger(__name__)

DEFAULT_STYLE: Dict[str, Any] = {
    "font": "DejaVu Sans",
    "headline_size": 18,
    "secondary_size": 13,
    "text_color": "#FFFFFF",
    "secondary_color": "#AAAAAA",
    "placeholder_color": "#3A3A3C",
    "background_color": "#1C1C1E",
    "padding": 16,
    "spacing": 8,
}

FONT_DIRS = [
    "/usr/share/fonts",
    "/usr/local/share/fonts",
    os.path.expanduser("~/.fonts"),
    os.path.expanduser("~/.local/share/fonts"),
]

ELLIPSIS = "…"
LINE_SPACING = 2


class DesktopPlatform(WidgetPlatform):
    """
    Renders widgets to Pillow images.

    Attributes:
        style: Merged style dictionary (see DEFAULT_STYLE)
        launcher: Host app launcher used for taps (optional)
        font_cache: Loaded fonts keyed by name and size
    """

    name = "desktop"

    def __init__(
        self,
        renderer: Optional[SnapshotRenderer] = None,
        configuration: Optional[WidgetConfiguration] = None,
        style: Optional[Dict[str, Any]] = None,
        launcher: Optional[HostAppLauncher] = None,
    ):
        super().__init__(renderer, configuration)
        self.style = {**DEFAULT_STYLE, **(style or {})}
        self.launcher = launcher
        self.font_cache: Dict[str, Any] = {}

    def produce_placeholder(self, view: WidgetView, family: str) -> Image.Image:
        return self._render_image(view, family, placeholder=True)

    def produce_snapshot_view(self, view: WidgetView, family: str) -> Image.Image:
        return self._render_image(view, family)

    def refresh_policy(self) -> RefreshPolicy:
        return RefreshPolicy.HOST_SCHEDULED

    def describe(self, content: Image.Image) -> Dict[str, Any]:
        return {"size": list(content.size), "mode": content.mode}

    def handle_tap(self, view: WidgetView) -> bool:
        """
        Fire the view's tap action.

        Returns:
            True if the host app was launched

        Raises:
            PlatformError: If no launcher is configured
        """
        if self.launcher is None:
            raise PlatformError("Desktop platform has no host app launcher configured")
        return self.launcher.launch(view.tap_region.action)

    def _render_image(self, view: WidgetView, family: str, placeholder: bool = False) -> Image.Image:
        if not self.configuration.supports(family) or family not in FAMILY_SIZES:
            raise PlatformError(f"Unsupported widget family: {family}")

        style = self.style
        width, height = FAMILY_SIZES[family]
        image = Image.new("RGB", (width, height), style["background_color"])
        draw = ImageDraw.Draw(image)

        padding = style["padding"]
        max_width = width - 2 * padding
        headline_font = self._load_font(style["font"], style["headline_size"])
        secondary_font = self._load_font(style["font"], style["secondary_size"])

        y = padding
        for element, font, color in (
            (view.headline, headline_font, style["text_color"]),
            (view.secondary, secondary_font, style["secondary_color"]),
        ):
            if placeholder:
                color = style["placeholder_color"]
            # Measure and draw line by line; Pillow cannot measure multiline text
            for line in element.text.split("\n"):
                line = self._fit_text(draw, line, font, max_width)
                bbox = draw.textbbox((0, 0), line or " ", font=font)
                # bbox top can be non-zero for tall ascenders
                draw.text((padding, y - bbox[1]), line, font=font, fill=color)
                y += (bbox[3] - bbox[1]) + LINE_SPACING
            y += style["spacing"] - LINE_SPACING

        return image

    def _fit_text(self, draw: ImageDraw.ImageDraw, text: str, font: Any, max_width: int) -> str:
        """Truncate a single line with an ellipsis so it fits ``max_width``."""
        if draw.textlength(text, font=font) <= max_width:
            return text
        while text and draw.textlength(text + ELLIPSIS, font=font) > max_width:
            text = text[:-1]
        return text + ELLIPSIS

    def _load_font(self, font_name: str, font_size: int):
        """Load a font with caching"""
        cache_key = f"{font_name}_{font_size}"
        if cache_key in self.font_cache:
            return self.font_cache[cache_key]

        font = None

        if "/" in font_name or font_name.endswith((".ttf", ".otf")):
            font_path = os.path.expanduser(font_name)
            try:
                font = ImageFont.truetype(font_path, font_size)
            except OSError as e:
                logger.warning(f"Failed to load font from path '{font_path}': {e}")

        if not font:
            font = self._search_font(font_name, font_size)

        if not font:
            logger.warning(f"Failed to load font '{font_name}', using default")
            font = ImageFont.load_default()

        self.font_cache[cache_key] = font
        return font

    def _search_font(self, font_name: str, font_size: int):
        wanted = font_name.lower().replace(" ", "")
        for font_dir in FONT_DIRS:
            if not os.path.exists(font_dir):
                continue
            for root, _dirs, files in os.walk(font_dir):
                # Exact family name first, then variants
                for file in sorted(files, key=lambda f: (self._normalize(f) != wanted, f)):
                    if not file.endswith((".ttf", ".otf")):
                        continue
                    if wanted not in self._normalize(file):
                        continue
                    font_path = os.path.join(root, file)
                    try:
                        font = ImageFont.truetype(font_path, font_size)
                        logger.debug(f"Loaded font: {font_path}")
                        return font
                    except OSError as e:
                        logger.debug(f"Cannot load font {font_path}: {e}")
        return None

    @staticmethod
    def _normalize(file_name: str) -> str:
        stem = os.path.splitext(file_name)[0]
        return stem.lower().replace(" ", "").replace("-", "")
