"""
Configuration loader for the habit widget
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from PIL import ImageColor

from ..actions.base import AppEntryPoint
from ..platforms import list_platforms
from ..platforms.base import FAMILY_SIZES
from ..platforms.desktop import DEFAULT_STYLE
from ..store.suite import validate_suite_name
from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Maximum config file size (1MB should be plenty for YAML configs)
MAX_CONFIG_SIZE = 1024 * 1024

DEFAULT_CONFIG: Dict[str, Any] = {
    "store": {
        "suite": "group.com.example.habit",
        "directory": "~/.habitwidget/shared",
    },
    "widget": {
        "kind": "HabitWidget",
        "display_name": "Habit Tracker",
        "description": "Keep track of your today's habits.",
        "families": ["small", "medium"],
        "platform": "desktop",
    },
    "host_app": {
        "entry_point": "com.example.habit/.MainActivity",
        "command": None,
    },
    "host": {
        # Desktop watch loop only; phones schedule refreshes themselves
        "refresh_interval": 1800,
    },
    "style": {},
}


class ConfigLoader:
    """Loads and validates YAML configuration files"""

    def load(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file, or None for defaults

        Returns:
            Validated configuration dictionary with defaults applied

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config file is invalid or too large
        """
        if config_path is None:
            config = self._apply_defaults({})
            self._validate(config)
            return config

        resolved_path = Path(config_path).expanduser().resolve()
        self._validate_config_path(resolved_path)

        if not resolved_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {resolved_path}")

        file_size = resolved_path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"Configuration file too large: {file_size} bytes "
                f"(maximum {MAX_CONFIG_SIZE} bytes)"
            )

        try:
            with open(resolved_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        config = self._apply_defaults(raw)
        self._validate(config)

        logger.info(f"Loaded configuration from {resolved_path}")
        return config

    def _validate_config_path(self, config_path: Path) -> None:
        """
        Validate that the configuration file path is safe to load.

        Raises:
            ConfigurationError: If path is a directory
        """
        if config_path.is_dir():
            raise ConfigurationError(f"Path is a directory, not a file: {config_path}")

        if config_path.suffix.lower() not in [".yaml", ".yml"]:
            logger.warning(
                f"Configuration file has unexpected extension: {config_path.suffix}. "
                f"Expected .yaml or .yml"
            )

        logger.debug(f"Configuration path validated: {config_path}")

    def _apply_defaults(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """Merge user sections over the default configuration"""
        config = copy.deepcopy(DEFAULT_CONFIG)
        for section, values in raw.items():
            if section not in config:
                logger.warning(f"Ignoring unknown configuration section '{section}'")
                continue
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ConfigurationError(f"Section '{section}' must be a dictionary")
            config[section].update(values)
        return config

    def _validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        try:
            validate_suite_name(config["store"]["suite"])
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        widget = config["widget"]
        if widget["platform"] not in list_platforms():
            raise ConfigurationError(
                f"Unknown platform '{widget['platform']}' "
                f"(available: {', '.join(list_platforms())})"
            )

        families = widget["families"]
        if not isinstance(families, list) or not families:
            raise ConfigurationError("'widget.families' must be a non-empty list")
        for family in families:
            if family not in FAMILY_SIZES:
                raise ConfigurationError(f"Unknown widget family: {family}")

        try:
            AppEntryPoint.parse(str(config["host_app"]["entry_point"]))
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        interval = config["host"]["refresh_interval"]
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0:
            raise ConfigurationError("'host.refresh_interval' must be a positive number")

        self._validate_style(config["style"])

    def _validate_style(self, style: Dict[str, Any]) -> None:
        """Validate desktop style values so bad ones fail here, not in every refresh"""
        for key, value in style.items():
            if key not in DEFAULT_STYLE:
                logger.warning(f"Ignoring unknown style key '{key}'")
            elif key.endswith("_color"):
                try:
                    ImageColor.getrgb(value)
                except (ValueError, AttributeError, TypeError) as e:
                    raise ConfigurationError(f"Invalid color for 'style.{key}': {value!r}") from e
            elif key == "font":
                if not isinstance(value, str) or not value:
                    raise ConfigurationError("'style.font' must be a non-empty string")
            else:
                minimum = 1 if key.endswith("_size") else 0
                if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                    raise ConfigurationError(
                        f"'style.{key}' must be an integer of at least {minimum}"
                    )
