from __future__ import annotations

"""
Logging Configuration Model.

What the CLI (or a library caller) asks of the logging subsystem: a
severity, where records go, and which HTTP libraries to keep quiet.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable request for logging initialization.

    Attributes:
        level: Severity name ("DEBUG", "INFO", ...); unknown names mean INFO.
        console: Write records to stderr.
        log_file: Also write records to this rotating file.
        max_bytes: Log file size that triggers a rollover.
        backup_count: Rolled-over files to keep.
        noisy_loggers: Third-party loggers held at WARNING unless level is DEBUG.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    noisy_loggers: Tuple[str, ...] = ("urllib3", "requests")

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str] = None) -> "LoggingConfig":
        """Console logging at INFO, or DEBUG when --debug is given."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)

    @property
    def level_number(self) -> int:
        value = logging.getLevelName(str(self.level or "").strip().upper())
        return value if isinstance(value, int) else logging.INFO
