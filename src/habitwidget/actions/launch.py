"""
Desktop fulfilment of the widget tap action: launch the host app.
"""

import logging
import shlex
import subprocess
from typing import Optional

from ..utils.errors import ActionError
from .base import AppEntryPoint, TapAction

logger = logging.getLogger(__name__)


class HostAppLauncher:
    """
    Launches the host app for a tap action.

    Only actions targeting this launcher's own entry point are fulfilled.

    Attributes:
        entry_point: The host app's default entry point
        command: Launch command; when unset the package is started as a
                 desktop application id via gtk-launch
    """

    def __init__(self, entry_point: AppEntryPoint, command: Optional[str] = None):
        self.entry_point = entry_point
        self.command = command

    def launch(self, action: TapAction) -> bool:
        """
        Launch the host app.

        Args:
            action: Resolved tap action

        Returns:
            True if the app process was started

        Raises:
            ActionError: If the action targets another app or carries parameters
        """
        if action.target != self.entry_point:
            raise ActionError(
                f"Tap action targets {action.target}, not host app {self.entry_point}"
            )
        if action.parameters:
            raise ActionError("Host app entry point takes no parameters")

        argv = self._build_argv()
        logger.info(f"Launching host app {self.entry_point}: {argv[0]}")
        try:
            subprocess.Popen(argv, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            return True
        except (FileNotFoundError, PermissionError) as e:
            logger.error(f"Failed to launch host app: {e}")
            return False

    def _build_argv(self) -> list:
        if self.command:
            return shlex.split(self.command)
        return ["gtk-launch", self.entry_point.package]
