"""
File-backed shared store.

Each suite is one YAML document in a directory readable by both the host app
and the widget host. Writers replace the document atomically (see
``SnapshotWriter``), so a read sees either the old or the new document.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .base import SharedStore

logger = logging.getLogger(__name__)

# Suite documents hold a couple of short strings
MAX_SUITE_SIZE = 256 * 1024

SUITE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def validate_suite_name(suite: str) -> None:
    """
    Reject suite identifiers that could escape the store directory.

    Raises:
        ValueError: If suite is not a plain dotted identifier
    """
    if not isinstance(suite, str):
        raise ValueError(f"Invalid suite name: {suite!r} (must be a string)")
    if not suite or not SUITE_NAME_PATTERN.match(suite) or ".." in suite:
        raise ValueError(f"Invalid suite name: {suite!r}")


def suite_path(directory: Union[str, Path], suite: str) -> Path:
    """Path of the YAML document holding ``suite``."""
    validate_suite_name(suite)
    return Path(directory).expanduser() / f"{suite}.yaml"


class SuiteStore(SharedStore):
    """
    Shared store reading ``<directory>/<suite>.yaml``.

    The file is re-read on every call; nothing is cached between refreshes.
    A missing file is an empty store.
    """

    name = "suite"

    def __init__(self, suite: str, directory: Union[str, Path]):
        super().__init__(suite)
        self.path = suite_path(directory, suite)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            logger.debug(f"Suite document not found: {self.path}")
            return {}

        file_size = self.path.stat().st_size
        if file_size > MAX_SUITE_SIZE:
            raise ValueError(
                f"Suite document too large: {file_size} bytes (maximum {MAX_SUITE_SIZE} bytes)"
            )

        with open(self.path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)

        return document if document is not None else {}
