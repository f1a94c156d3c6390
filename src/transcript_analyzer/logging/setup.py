"""Dual-handler logging setup: JSON rotating file + human-readable console.

The root logger gets two handlers:
    1. RotatingFileHandler -- JSON lines in ``<log_dir>/analyzer.log``, DEBUG
       by default, so every gateway call and its cost is recorded
    2. StreamHandler -- text, level taken from ``PipelineSettings.log_level``

Chatty third-party loggers (httpx request lines, uvicorn access lines) are
raised to WARNING so the console shows pipeline progress only.

Call setup_logging() once at process startup (CLI run or API server), before
any other code runs. Module code throughout the project should use
logging.getLogger(__name__).
"""

import logging
import logging.handlers
from collections.abc import Iterable
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

LOG_FILE_NAME = "analyzer.log"

QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "uvicorn.access")


def _resolve_level(level: int | str) -> int:
    """Accept ``logging.INFO`` or a name such as ``"info"`` from config."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _json_file_handler(
    log_path: Path, level: int, max_bytes: int, backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        JsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "component",
            },
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def setup_logging(
    log_dir: str = "logs",
    log_level_file: int | str = logging.DEBUG,
    log_level_console: int | str = logging.INFO,
    max_bytes: int = 10_485_760,  # 10MB
    backup_count: int = 5,
    quiet_loggers: Iterable[str] = QUIET_LOGGERS,
) -> Path:
    """Configure dual-handler logging: JSON file + text console.

    Replaces any handlers already on the root logger, so repeated calls do
    not duplicate output.

    Args:
        log_dir: Directory for log files (created if missing).
        log_level_file: Level for the JSON file handler.
        log_level_console: Level for the console handler; level names
            (``"INFO"``, ``"debug"``) are accepted.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of rotated backup files to keep.
        quiet_loggers: Logger names raised to WARNING.

    Returns:
        Path of the JSON log file.

    Raises:
        ValueError: If a level name is not recognised.
    """
    file_level = _resolve_level(log_level_file)
    console_level = _resolve_level(log_level_console)

    log_path = Path(log_dir) / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(file_level, console_level))
    root_logger.handlers.clear()

    root_logger.addHandler(_json_file_handler(log_path, file_level, max_bytes, backup_count))
    root_logger.addHandler(_console_handler(console_level))

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_path
