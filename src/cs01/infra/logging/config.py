from __future__ import annotations

"""
Logging Configuration Models.

Declares the settings record consumed by configure_logging and the mapping
from textual level names to logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for the CS01 logging subsystem.

    Attributes:
        level: Minimum severity captured ("DEBUG", "INFO", ...).
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size threshold before the log file rotates.
        backup_count: Rotated files kept on disk.
        console_fmt: Format used on the terminal.
        file_fmt: Format used in the log file.
        datefmt: Timestamp format for file entries.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
