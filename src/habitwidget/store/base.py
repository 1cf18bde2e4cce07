"""
Shared store access contract.

The shared store is the only channel between the host app and the widget
host. This package only ever reads from it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from ..utils.errors import error_boundary

logger = logging.getLogger(__name__)


class SharedStore(ABC):
    """
    Read-only accessor for a namespaced key-value store.

    Subclasses implement ``_read_all`` (and optionally ``_read``). The public
    ``get``/``get_many`` never raise: an unreachable or corrupt store reads as
    absent for every key.

    Class Attributes:
        name: Short identifier used in logs
    """

    name: str = "base"

    def __init__(self, suite: str):
        """
        Args:
            suite: Group/suite identifier shared by host app and widget
        """
        self.suite = suite

    @abstractmethod
    def _read_all(self) -> Dict[str, Any]:
        """
        Read the whole suite document in one operation.

        Returns:
            Mapping of key to stored value

        Raises:
            Any exception on unreachable/corrupt storage
        """
        pass

    def _read(self, key: str) -> Any:
        """Read a single raw value (defaults to one full-document read)."""
        return self._read_all().get(key)

    def get(self, key: str) -> Optional[str]:
        """
        Get a string value.

        Args:
            key: Store key

        Returns:
            Stored string, or None when absent, non-string or unreadable
        """
        raw = self._safe_read(key)
        return self._coerce(key, raw)

    def get_many(self, keys: Iterable[str]) -> Dict[str, Optional[str]]:
        """
        Get several string values from a single read of the store.

        All values come from the same stored document, so a pair written
        together by one writer transaction is never observed half-updated.

        Args:
            keys: Store keys

        Returns:
            Mapping of every requested key to its string value or None
        """
        document = self._safe_read_all()
        return {key: self._coerce(key, document.get(key)) for key in keys}

    @error_boundary(default_return=None, log_level=logging.WARNING)
    def _safe_read(self, key: str) -> Any:
        return self._read(key)

    def _safe_read_all(self) -> Dict[str, Any]:
        document = self._guarded_read_all()
        if not isinstance(document, dict):
            if document is not None:
                logger.warning(
                    f"Shared store '{self.suite}' holds {type(document).__name__}, "
                    f"expected a mapping; treating as empty"
                )
            return {}
        return document

    @error_boundary(default_return=None, log_level=logging.WARNING)
    def _guarded_read_all(self) -> Any:
        return self._read_all()

    def _coerce(self, key: str, raw: Any) -> Optional[str]:
        if raw is None:
            return None
        if not isinstance(raw, str):
            logger.debug(f"Ignoring non-string value for '{key}' in '{self.suite}'")
            return None
        return raw

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(suite={self.suite})>"
