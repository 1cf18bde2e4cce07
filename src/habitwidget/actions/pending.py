"""
Pending tap actions held on behalf of the widget host.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .base import AppEntryPoint, TapAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingAction:
    """
    A token the widget host holds and fires when the user taps.

    Attributes:
        action: The tap action as registered
        token: Registry-unique id, stable while the action is reused
    """

    action: TapAction
    token: int

    def resolve(self, fill_in: Optional[Dict[str, Any]] = None) -> TapAction:
        """
        Resolve the action a sender would launch.

        Args:
            fill_in: Parameters a sending process tries to add

        Returns:
            The launched action; for immutable actions exactly the registered one
        """
        if not fill_in:
            return self.action
        if self.action.immutable:
            logger.warning(
                f"Ignoring fill-in {sorted(fill_in)} for immutable action to {self.action.target}"
            )
            return self.action
        merged = dict(self.action.parameters)
        merged.update(fill_in)
        return TapAction(
            target=self.action.target,
            request_code=self.action.request_code,
            flags=self.action.flags,
            parameters=tuple(sorted(merged.items())),
        )


class PendingActionRegistry:
    """
    Registry of pending actions keyed by (target, request code).

    With the update-current flag, asking again for the same key returns the
    existing pending action (with its parameters replaced) instead of adding
    a duplicate.
    """

    def __init__(self):
        self._pending: Dict[Tuple[AppEntryPoint, int], PendingAction] = {}
        self._next_token = 1
        self._lock = threading.Lock()

    def get_activity(self, action: TapAction) -> PendingAction:
        """
        Get or create the pending action for ``action``.

        Args:
            action: Tap action description

        Returns:
            PendingAction registered for the action's target and request code
        """
        key = (action.target, action.request_code)
        with self._lock:
            existing = self._pending.get(key)
            if existing is not None and action.update_current:
                if existing.action != action:
                    existing = PendingAction(action=action, token=existing.token)
                    self._pending[key] = existing
                    logger.debug(f"Updated pending action {existing.token} for {action.target}")
                return existing

            pending = PendingAction(action=action, token=self._next_token)
            self._next_token += 1
            if existing is not None:
                logger.warning(f"Replacing pending action for {action.target} without update flag")
            self._pending[key] = pending
            logger.debug(f"Registered pending action {pending.token} for {action.target}")
            return pending

    def get(self, token: int) -> Optional[PendingAction]:
        """Look up a pending action by token."""
        with self._lock:
            for pending in self._pending.values():
                if pending.token == token:
                    return pending
        return None

    def list_pending(self) -> list:
        """List all registered pending actions."""
        with self._lock:
            return list(self._pending.values())

    def __len__(self) -> int:
        return len(self._pending)
