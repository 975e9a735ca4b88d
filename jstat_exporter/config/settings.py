"""Environment defaults for command-line options."""

import os
from typing import Optional

CONFIG_PATH_ENV = "JSTAT_EXPORTER_CONFIG"
LOG_LEVEL_ENV = "LOG_LEVEL"


def config_path_from_env() -> Optional[str]:
    """Config file named by JSTAT_EXPORTER_CONFIG, or None when unset or empty."""
    return os.getenv(CONFIG_PATH_ENV) or None


def log_level_from_env(default: str = "INFO") -> str:
    """Log level named by LOG_LEVEL, upper-cased."""
    return (os.getenv(LOG_LEVEL_ENV) or default).upper()
