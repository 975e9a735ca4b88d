"""JSON logging for the exporter.

Logs go to stderr; stdout is reserved for the exposition text printed by
``--once``.
"""

import logging
import sys
from typing import IO, Optional

from pythonjsonlogger.json import JsonFormatter

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'


def setup_logger(
    name: str = "jstat_exporter",
    level: str = "INFO",
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Configure the exporter logger.

    Fields passed through ``extra`` (the collector adds ``report`` and
    ``status``) appear as top-level JSON keys.

    Args:
        name: Logger name; components log through children of it
        level: One of LOG_LEVELS, case-insensitive
        stream: Destination stream, stderr by default

    Returns:
        logging.Logger: Configured logger instance

    Raises:
        ValueError: If level is not a known level name
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reconfiguring replaces the previous handler
    logger.handlers = []

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter(LOG_FORMAT, timestamp=True))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
