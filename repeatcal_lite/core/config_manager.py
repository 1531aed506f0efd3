"""Configuration management for repeatcal_lite."""

from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

from repeatcal_lite.calendar.lite_date_utils import parse_date
from repeatcal_lite.calendar.lite_exceptions import LiteDateParseError

logger = logging.getLogger(__name__)

# Absolute ceiling for generated occurrences when nothing else is configured
DEFAULT_GLOBAL_REPEAT_CAP = date(2025, 10, 30)

# Upper bound on instances produced for a single rule by LiteRepeatExpander
DEFAULT_MAX_OCCURRENCES_PER_RULE = 5000

GLOBAL_REPEAT_CAP_ENV = "REPEATCAL_GLOBAL_REPEAT_CAP"
MAX_OCCURRENCES_ENV = "REPEATCAL_MAX_OCCURRENCES"


class ConfigManager:
    """Manages library configuration from environment variables and .env files."""

    def __init__(self, env_file_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            env_file_path: Optional path to .env file (defaults to .env in current directory)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Load .env file and set environment variables.

        Only sets variables that are not already in the environment.

        Returns:
            List of environment variable keys that were loaded from .env file
        """
        if not self.env_file_path.exists():
            logger.debug("No .env file found at %s", self.env_file_path)
            return []

        set_keys = []

        try:
            content = self.env_file_path.read_text(encoding="utf-8")
        except OSError:
            logger.debug(
                "Failed to read .env file for defaults (continuing): %s",
                str(self.env_file_path),
                exc_info=True,
            )
            return []

        for raw_line in content.splitlines():
            line = raw_line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, val = line.split("=", 1)
            key = key.strip()
            val = val.strip().strip('"').strip("'")

            if key and key not in os.environ:
                os.environ[key] = val
                set_keys.append(key)

        if set_keys:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(set_keys))

        return set_keys

    def build_config_from_env(self) -> dict[str, Any]:
        """Build configuration dictionary from environment variables.

        Recognizes:
        - REPEATCAL_GLOBAL_REPEAT_CAP -> 'global_repeat_cap' (date)
        - REPEATCAL_MAX_OCCURRENCES -> 'max_occurrences_per_rule' (int)

        Returns:
            Configuration dictionary accepted by RepeatExpanderConfig.from_settings
        """
        cfg: dict[str, Any] = {}

        cap = _parse_cap(os.environ.get(GLOBAL_REPEAT_CAP_ENV))
        if cap is not None:
            cfg["global_repeat_cap"] = cap

        max_occurrences = os.environ.get(MAX_OCCURRENCES_ENV)
        if max_occurrences:
            try:
                cfg["max_occurrences_per_rule"] = int(max_occurrences)
            except ValueError:
                logger.warning("Invalid %s=%r; ignoring", MAX_OCCURRENCES_ENV, max_occurrences)

        return cfg

    def load_full_config(self) -> dict[str, Any]:
        """Load .env file and build configuration from environment.

        Returns:
            Configuration dictionary
        """
        self.load_env_file()
        return self.build_config_from_env()


def _parse_cap(raw: str | None) -> date | None:
    if not raw:
        return None
    try:
        return parse_date(raw.strip())
    except LiteDateParseError:
        logger.warning("Invalid %s=%r; ignoring", GLOBAL_REPEAT_CAP_ENV, raw)
        return None


def get_global_repeat_cap() -> date:
    """Return the global repeat cap.

    Reads REPEATCAL_GLOBAL_REPEAT_CAP on every call so tests and deployments can
    pin it without reloading modules; falls back to DEFAULT_GLOBAL_REPEAT_CAP.
    """
    return _parse_cap(os.environ.get(GLOBAL_REPEAT_CAP_ENV)) or DEFAULT_GLOBAL_REPEAT_CAP


def get_config_value(config: Any, key: str, default: Any = None) -> Any:
    """Get configuration value supporting both dict and dataclass-like objects.

    Args:
        config: Configuration object (dict or object with attributes)
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    if isinstance(config, dict):
        return config.get(key, default)
    return getattr(config, key, default)
