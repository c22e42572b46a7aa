"""Loguru logging configuration for the server and the CLI.

Console output is human-readable by default and switches to one JSON
object per line when ``json_logs`` is set, for log collectors. When a
``log_dir`` is given, dataset loads and backend failures are also kept
in a rotating JSON-lines file.
"""

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level:<8}</level> | {name}:{line} | {message}"
LOG_FILE_NAME = "poll-map.log"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, *, json_logs: bool = False) -> None:
    """Replace Loguru's default sink with the poll map sinks.

    Args:
        log_level: Minimum log level to emit, case-insensitive.
        log_dir: Optional directory for the JSON-lines log file, rotated
            every 24 hours and kept for 7 days.
        json_logs: Serialize console records as JSON.
    """
    level = log_level.upper()
    logger.remove()
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_CONSOLE_FORMAT, colorize=False)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / LOG_FILE_NAME,
            level=level,
            serialize=True,
            rotation="24h",
            retention="7 days",
        )
