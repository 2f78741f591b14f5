"""
Logging Utilities
=================
Level-gated console logging for pricing passes.
"""

from typing import Optional

# Log levels
LOG_LEVEL_SILENT = 0
LOG_LEVEL_ERROR = 1
LOG_LEVEL_WARNING = 2
LOG_LEVEL_INFO = 3
LOG_LEVEL_DEBUG = 4

LOG_LEVEL_NAMES = {
    "silent": LOG_LEVEL_SILENT,
    "error": LOG_LEVEL_ERROR,
    "warning": LOG_LEVEL_WARNING,
    "info": LOG_LEVEL_INFO,
    "debug": LOG_LEVEL_DEBUG,
}

# Global log level (can be set from config)
CURRENT_LOG_LEVEL = LOG_LEVEL_INFO


def set_log_level(level: int):
    """Set global log level."""
    global CURRENT_LOG_LEVEL
    CURRENT_LOG_LEVEL = level


def set_log_level_by_name(name: Optional[str]) -> int:
    """
    Set global log level from a config string ("debug", "info", ...).

    Unknown names fall back to INFO.
    """
    level = LOG_LEVEL_NAMES.get((name or "").strip().lower(), LOG_LEVEL_INFO)
    set_log_level(level)
    return level


def get_log_level() -> int:
    return CURRENT_LOG_LEVEL


def log_error(msg: str):
    """Printed unless SILENT."""
    if CURRENT_LOG_LEVEL >= LOG_LEVEL_ERROR:
        print(f"❌ {msg}")


def log_warning(msg: str):
    """Printed at WARNING level and above."""
    if CURRENT_LOG_LEVEL >= LOG_LEVEL_WARNING:
        print(f"⚠️  {msg}")


def log_info(msg: str):
    """Printed at INFO level and above."""
    if CURRENT_LOG_LEVEL >= LOG_LEVEL_INFO:
        print(msg)


def log_debug(msg: str):
    """Only printed at DEBUG level."""
    if CURRENT_LOG_LEVEL >= LOG_LEVEL_DEBUG:
        print(f"   🔍 {msg}")
