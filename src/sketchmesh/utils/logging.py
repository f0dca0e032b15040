"""Logging utilities for Sketchmesh."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class OperationStats:
    """Statistics from a series of engine operations."""

    succeeded_count: int = 0
    failed_count: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("sketchmesh")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class OperationLogger:
    """Logger for tracking engine operation outcomes."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def log_start(self, operation: str, stroke_count: int) -> None:
        """Log start of an operation."""
        if self._stats.start_time is None:
            self._stats.start_time = time.time()
        self._logger.debug("Operation started", operation=operation, strokes=stroke_count)

    def log_success(self, operation: str, duration_ms: float, **details: object) -> None:
        """Log a successful operation."""
        self._logger.info(
            "Operation complete",
            operation=operation,
            duration_ms=round(duration_ms, 2),
            **details,
        )
        self._stats.succeeded_count += 1
        self._stats.end_time = time.time()

    def log_failure(self, operation: str, reason: str, message: str) -> None:
        """Log an operation that produced no result."""
        self._logger.warning(
            "Operation produced no result",
            operation=operation,
            reason=reason,
            message=message,
        )
        self._stats.failed_count += 1
        self._stats.failures.append((operation, reason))
        self._stats.end_time = time.time()

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
