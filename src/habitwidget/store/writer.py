"""
App-side snapshot publisher.

The host app owns what goes into the snapshot; this writer only guarantees
that each save replaces the suite document in one step.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..snapshot import CONTENT_KEY, TITLE_KEY
from ..utils.errors import StoreError
from .suite import suite_path

logger = logging.getLogger(__name__)

_UNSET = object()


class SnapshotWriter:
    """
    Writes widget keys into a suite document.

    Example:
        >>> writer = SnapshotWriter("group.com.example.habit", "~/.habitwidget/shared")
        >>> writer.save(title="3 Left", content="Water, Stretch")
    """

    def __init__(self, suite: str, directory: Union[str, Path]):
        self.suite = suite
        self.path = suite_path(directory, suite)

    def save(self, title: Any = _UNSET, content: Any = _UNSET) -> Dict[str, str]:
        """
        Save the snapshot fields in one transaction.

        Fields not passed are left as stored; ``None`` removes the key so the
        widget falls back to its default text.

        Returns:
            The document as written

        Raises:
            StoreError: If the document cannot be written
        """
        updates = {}
        if title is not _UNSET:
            updates[TITLE_KEY] = title
        if content is not _UNSET:
            updates[CONTENT_KEY] = content
        return self.save_data(updates)

    def save_data(self, updates: Dict[str, Optional[str]]) -> Dict[str, str]:
        """
        Merge ``updates`` into the stored document and replace it atomically.

        Args:
            updates: Key to string value, or None to remove the key

        Raises:
            StoreError: On invalid values or I/O failure
        """
        for key, value in updates.items():
            if value is not None and not isinstance(value, str):
                raise StoreError(f"Value for '{key}' must be a string, got {type(value).__name__}")

        document = self._load_existing()
        for key, value in updates.items():
            if value is None:
                document.pop(key, None)
            else:
                document[key] = value

        self._replace(document)
        logger.info(f"Published {sorted(updates)} to suite '{self.suite}'")
        return document

    def _load_existing(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            logger.warning(f"Discarding unreadable suite document {self.path}: {e}")
            return {}
        if not isinstance(document, dict):
            return {}
        return document

    def _replace(self, document: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    yaml.safe_dump(document, f, allow_unicode=True, sort_keys=True)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StoreError(f"Cannot write suite document {self.path}: {e}") from e
