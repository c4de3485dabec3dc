"""
Centralized logging configuration.

Usage:
    from tile_wfc.logging_config import setup_logging
    setup_logging(logging.DEBUG)  # Call once at startup

All tile_wfc.* loggers write to stderr at the given level and, when a log
file is given, DEBUG and above to that file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB per file
BACKUP_COUNT = 3


def setup_logging(
    console_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the tile_wfc logger namespace.

    Args:
        console_level: Level for stderr output (default: WARNING)
        log_file: Optional path for a rotating DEBUG log

    Returns:
        The package root logger
    """
    root_logger = logging.getLogger("tile_wfc")
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers (for re-initialization)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    ))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=MAX_LOG_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-30s | %(funcName)-20s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(file_handler)

    return root_logger
