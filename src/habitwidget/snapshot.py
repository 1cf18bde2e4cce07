"""
Widget snapshot model and reader.

The host app publishes two optional strings into the shared store. The
reader turns whatever is there (including nothing) into a fully populated
``WidgetSnapshot``; nothing downstream ever sees a missing field.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .utils.errors import safe_execute

if TYPE_CHECKING:
    from .store.base import SharedStore

logger = logging.getLogger(__name__)

# Store keys written by the host app
TITLE_KEY = "widget_title"
CONTENT_KEY = "widget_content"

# Read fallbacks for absent keys
DEFAULT_TITLE = "Today's Habits"
DEFAULT_CONTENT = "No habits for today"

# Static texts shown before any store read
PLACEHOLDER_CONTENT = "No habits yet"
PREVIEW_CONTENT = "Loading..."


@dataclass(frozen=True)
class WidgetSnapshot:
    """
    Display-ready habit summary.

    Attributes:
        title: Short headline, e.g. "3 Left"
        content: Body line, e.g. "Water, Stretch"
    """

    title: str
    content: str

    @classmethod
    def default(cls) -> "WidgetSnapshot":
        """Snapshot produced from an empty store."""
        return cls(title=DEFAULT_TITLE, content=DEFAULT_CONTENT)

    @classmethod
    def placeholder(cls) -> "WidgetSnapshot":
        return cls(title=DEFAULT_TITLE, content=PLACEHOLDER_CONTENT)

    @classmethod
    def preview(cls) -> "WidgetSnapshot":
        return cls(title=DEFAULT_TITLE, content=PREVIEW_CONTENT)


class SnapshotReader:
    """
    Reads the widget keys from a shared store and applies fallbacks.

    Each fallback is applied on its own: a present title never suppresses the
    content fallback, and vice versa. Values that are present are returned
    exactly as stored.

    Example:
        >>> reader = SnapshotReader(MemoryStore(values={"widget_title": "3 Left"}))
        >>> reader.read()
        WidgetSnapshot(title='3 Left', content='No habits for today')
    """

    def __init__(self, store: "SharedStore"):
        """
        Args:
            store: Shared store accessor (read-only)
        """
        self.store = store

    def read(self) -> WidgetSnapshot:
        """
        Read the current snapshot.

        Returns:
            WidgetSnapshot with both fields populated. Never raises.
        """
        return safe_execute(
            self._read, default=WidgetSnapshot.default(), log_level=logging.WARNING
        )

    def _read(self) -> WidgetSnapshot:
        values = self.store.get_many((TITLE_KEY, CONTENT_KEY))
        title = self._resolve(TITLE_KEY, values.get(TITLE_KEY), DEFAULT_TITLE)
        content = self._resolve(CONTENT_KEY, values.get(CONTENT_KEY), DEFAULT_CONTENT)
        return WidgetSnapshot(title=title, content=content)

    def _resolve(self, key: str, value: Optional[str], fallback: str) -> str:
        if value is None:
            logger.debug(f"'{key}' absent from store, using fallback")
            return fallback
        return value
