"""
Central logging configuration for repeatcal_lite.

Recurrence expansion logs per-event detail at DEBUG; this module keeps the
package quiet in production while letting debug output be switched on through
the environment for troubleshooting.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

LITE_MODULES = [
    "repeatcal_lite",
    "repeatcal_lite.calendar.lite_date_utils",
    "repeatcal_lite.calendar.lite_occurrence",
    "repeatcal_lite.calendar.lite_instance_expander",
    "repeatcal_lite.domain.series_collapse",
    "repeatcal_lite.domain.event_filter",
    "repeatcal_lite.core.config_manager",
]


def build_console_handler(level: int = logging.INFO) -> logging.Handler:
    """Create a stderr handler with the colorized package format.

    Only the level name is colorized; the rest of the line stays neutral.
    """
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))
    return handler


def configure_lite_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure logging levels for repeatcal_lite modules.

    Args:
        debug_mode: Whether to enable debug logging for repeatcal_lite modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        REPEATCAL_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        REPEATCAL_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("REPEATCAL_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("REPEATCAL_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Preserve handlers installed by the host application
    if not root_logger.handlers:
        root_logger.addHandler(build_console_handler(root_level))

    lite_level = logging.DEBUG if final_debug else logging.INFO
    for module in LITE_MODULES:
        logging.getLogger(module).setLevel(lite_level)

    if final_debug:
        root_logger.info("Debug logging enabled for repeatcal_lite modules.")
    else:
        root_logger.info("Production logging configuration applied.")


def reset_logging_to_debug() -> None:
    """Reset the root and all repeatcal_lite loggers to DEBUG for troubleshooting."""
    logging.getLogger().setLevel(logging.DEBUG)
    for module in LITE_MODULES:
        logging.getLogger(module).setLevel(logging.DEBUG)

    logging.getLogger().info("All loggers reset to DEBUG level for troubleshooting")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in LITE_MODULES:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
