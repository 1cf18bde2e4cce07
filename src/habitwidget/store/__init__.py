"""
Shared store access: the persisted key-value handoff between the host app
and the widget host.
"""

from .base import SharedStore
from .memory import MemoryStore
from .suite import SuiteStore
from .writer import SnapshotWriter

__all__ = ["SharedStore", "MemoryStore", "SuiteStore", "SnapshotWriter"]
