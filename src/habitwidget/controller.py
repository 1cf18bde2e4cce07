"""
Timeline/refresh controller.

The widget host calls in on its own schedule; each call is one independent
refresh cycle. The controller holds no state between cycles, so any number of
widget instances can refresh concurrently through the same controller.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from .platforms.base import FAMILY_SMALL, RefreshPolicy, WidgetPlatform
from .renderer import WidgetView
from .snapshot import SnapshotReader, WidgetSnapshot
from .store.base import SharedStore

logger = logging.getLogger(__name__)


class CycleState(Enum):
    """States of one refresh cycle."""

    PLACEHOLDER = "placeholder"
    SNAPSHOT_REQUESTED = "snapshot_requested"
    RENDERED = "rendered"
    CANCELLED = "cancelled"


# Reading cannot fail, so there is no error transition
_TRANSITIONS = {
    CycleState.PLACEHOLDER: {CycleState.SNAPSHOT_REQUESTED, CycleState.CANCELLED},
    CycleState.SNAPSHOT_REQUESTED: {CycleState.RENDERED, CycleState.CANCELLED},
    CycleState.RENDERED: set(),
    CycleState.CANCELLED: set(),
}


class RefreshCycle:
    """
    State machine for a single host-initiated refresh.

    A cycle starts in PLACEHOLDER and moves to SNAPSHOT_REQUESTED when the
    host asks for real data, then to RENDERED. The host may cancel at any
    point before RENDERED; there is nothing to roll back.
    """

    def __init__(self):
        self._state = CycleState.PLACEHOLDER
        self._history: List[CycleState] = [CycleState.PLACEHOLDER]
        self._lock = threading.Lock()

    @property
    def state(self) -> CycleState:
        return self._state

    @property
    def history(self) -> Tuple[CycleState, ...]:
        return tuple(self._history)

    @property
    def cancelled(self) -> bool:
        return self._state is CycleState.CANCELLED

    def advance(self, new_state: CycleState) -> bool:
        """
        Move to ``new_state``.

        Returns:
            False if the cycle was cancelled meanwhile

        Raises:
            RuntimeError: On a transition the state machine does not allow
        """
        with self._lock:
            if self._state is CycleState.CANCELLED:
                return False
            if new_state not in _TRANSITIONS[self._state]:
                raise RuntimeError(
                    f"Invalid refresh transition {self._state.value} -> {new_state.value}"
                )
            self._state = new_state
            self._history.append(new_state)
            return True

    def cancel(self) -> bool:
        """Cancel the cycle; returns False if it already finished."""
        with self._lock:
            if self._state is CycleState.RENDERED:
                return False
            if self._state is not CycleState.CANCELLED:
                self._state = CycleState.CANCELLED
                self._history.append(CycleState.CANCELLED)
            return True


@dataclass(frozen=True)
class TimelineEntry:
    """
    One renderable widget state.

    Attributes:
        date: Render timestamp supplied by the controller's clock
        snapshot: Snapshot the entry was rendered from
        view: Platform-neutral view description
        content: Platform-native view
    """

    date: datetime
    snapshot: WidgetSnapshot
    view: WidgetView
    content: Any


@dataclass(frozen=True)
class Timeline:
    """Entries handed back to the host plus the declared refresh policy."""

    entries: Tuple[TimelineEntry, ...]
    policy: RefreshPolicy

    @property
    def entry(self) -> TimelineEntry:
        return self.entries[0]


class TimelineController:
    """
    Orchestrates store read -> render -> platform view for the widget host.

    Dependencies are injected so the controller runs without a real host:
    the store accessor, the platform adapter and the clock.

    Example:
        >>> controller = TimelineController(MemoryStore(), AndroidPlatform())
        >>> timeline = controller.refresh()
        >>> timeline.entry.snapshot.title
        "Today's Habits"
    """

    def __init__(
        self,
        store: SharedStore,
        platform: WidgetPlatform,
        clock: Optional[Callable[[], datetime]] = None,
        family: str = FAMILY_SMALL,
    ):
        """
        Args:
            store: Shared store accessor
            platform: Target platform adapter
            clock: Returns the render timestamp (default: datetime.now)
            family: Default size family
        """
        self.store = store
        self.platform = platform
        self.reader = SnapshotReader(store)
        self.clock = clock or datetime.now
        self.family = family

    def placeholder(self, family: Optional[str] = None) -> TimelineEntry:
        """
        Entry for host-side previews before any read is possible.

        Does not touch the shared store.
        """
        family = family or self.family
        snapshot = WidgetSnapshot.placeholder()
        view = self.platform.renderer.render(snapshot)
        return TimelineEntry(
            date=self.clock(),
            snapshot=snapshot,
            view=view,
            content=self.platform.produce_placeholder(view, family),
        )

    def preview(self, family: Optional[str] = None) -> TimelineEntry:
        """
        Entry for the host's widget gallery.

        Static like the placeholder; does not touch the shared store.
        """
        family = family or self.family
        snapshot = WidgetSnapshot.preview()
        view = self.platform.renderer.render(snapshot)
        return TimelineEntry(
            date=self.clock(),
            snapshot=snapshot,
            view=view,
            content=self.platform.produce_snapshot_view(view, family),
        )

    def refresh(
        self, family: Optional[str] = None, cycle: Optional[RefreshCycle] = None
    ) -> Optional[Timeline]:
        """
        Run one refresh cycle synchronously.

        Args:
            family: Size family (default: controller family)
            cycle: Cycle to drive; lets the host cancel it from elsewhere

        Returns:
            Timeline with exactly one entry, or None if the cycle was cancelled
        """
        cycle = cycle or RefreshCycle()
        if not cycle.advance(CycleState.SNAPSHOT_REQUESTED):
            logger.debug("Refresh cancelled before reading")
            return None

        snapshot = self.reader.read()
        return self._finish(cycle, snapshot, family or self.family)

    async def refresh_async(
        self, family: Optional[str] = None, cycle: Optional[RefreshCycle] = None
    ) -> Optional[Timeline]:
        """
        Run one refresh cycle, reading the store off the event loop.

        Cancelling the awaiting task cancels the cycle.
        """
        cycle = cycle or RefreshCycle()
        if not cycle.advance(CycleState.SNAPSHOT_REQUESTED):
            logger.debug("Refresh cancelled before reading")
            return None

        loop = asyncio.get_running_loop()
        try:
            snapshot = await loop.run_in_executor(None, self.reader.read)
        except asyncio.CancelledError:
            cycle.cancel()
            raise
        return self._finish(cycle, snapshot, family or self.family)

    def get_timeline(
        self, completion: Callable[[Optional[Timeline]], Any], family: Optional[str] = None
    ) -> None:
        """Completion-callback form of refresh() for callback-driven hosts."""
        completion(self.refresh(family))

    def _finish(self, cycle: RefreshCycle, snapshot: WidgetSnapshot, family: str) -> Optional[Timeline]:
        view = self.platform.renderer.render(snapshot)
        content = self.platform.produce_snapshot_view(view, family)

        if not cycle.advance(CycleState.RENDERED):
            logger.debug("Refresh cancelled before rendering completed")
            return None

        entry = TimelineEntry(date=self.clock(), snapshot=snapshot, view=view, content=content)
        policy = self.platform.refresh_policy()
        logger.debug(
            f"Refreshed {self.platform.name} widget ({family}): "
            f"title={snapshot.title!r}, policy={policy.value}"
        )
        return Timeline(entries=(entry,), policy=policy)
