"""
In-process shared store, used for previews and tests.
"""

from typing import Any, Dict, Optional

from .base import SharedStore


class MemoryStore(SharedStore):
    """Shared store backed by a plain dictionary."""

    name = "memory"

    def __init__(self, suite: str = "memory", values: Optional[Dict[str, Any]] = None):
        super().__init__(suite)
        self.values: Dict[str, Any] = dict(values or {})

    def _read_all(self) -> Dict[str, Any]:
        # Copy so a reader never sees a mapping mutated under it
        return dict(self.values)

    def _read(self, key: str) -> Any:
        return self.values.get(key)
