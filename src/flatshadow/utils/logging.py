"""Logging utilities for FlatShadow."""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Handlers added by the last configure_logging() call
_handlers: list[logging.Handler] = []


@dataclass
class ProcessingStats:
    """Counters and timings of one batch run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    shadow_paths: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    icon_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_icon_time_ms(self) -> float | None:
        if not self.icon_timings_ms:
            return None
        return sum(self.icon_timings_ms) / len(self.icon_timings_ms)

    @property
    def min_icon_time_ms(self) -> float | None:
        return min(self.icon_timings_ms) if self.icon_timings_ms else None

    @property
    def max_icon_time_ms(self) -> float | None:
        return max(self.icon_timings_ms) if self.icon_timings_ms else None


def _replace_handlers(root: logging.Logger, handlers: list[logging.Handler]) -> None:
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers[:] = handlers
    for handler in handlers:
        root.addHandler(handler)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Events are rendered as JSON by structlog and routed through the stdlib
    root logger to a log file and, unless quiet, to stderr. Calling this
    again replaces the handlers of the previous call.

    Args:
        log_file: Path to log file (timestamped name in the cwd if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, write to the log file only

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        log_file = Path(f"flatshadow_{datetime.now():%Y%m%d_%H%M%S}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level.upper())
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    handlers: list[logging.Handler] = [file_handler]

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level.upper())
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    _replace_handlers(root_logger, handlers)

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

    logger = structlog.get_logger("flatshadow")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)
    return logger


class ProcessingLogger:
    """Logs per-icon events and records them in the run's ProcessingStats.

    Example:
        processing_logger = ProcessingLogger(logger)
        stats = processing_logger.start_run()
        processing_logger.log_icon_skipped("empty.svg", "no drawable paths")
        assert stats.skipped_count == 1
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self.stats = ProcessingStats()

    def start_run(self) -> ProcessingStats:
        """Reset the statistics for a new batch and start its clock."""
        self.stats = ProcessingStats(start_time=time.time())
        return self.stats

    def finish_run(self) -> ProcessingStats:
        """Stop the clock of the current batch."""
        self.stats.end_time = time.time()
        return self.stats

    def log_icon_start(self, icon_name: str) -> None:
        self._logger.debug("Processing icon", icon=icon_name)

    def log_icon_complete(
        self,
        icon_name: str,
        shadow_paths: int,
        duration_ms: float,
    ) -> None:
        """Log a written icon and add it to the counters."""
        self._logger.info(
            "Icon processed",
            icon=icon_name,
            shadow_paths=shadow_paths,
            duration_ms=round(duration_ms, 2),
        )
        self.stats.processed_count += 1
        self.stats.shadow_paths += shadow_paths
        self.stats.icon_timings_ms.append(duration_ms)

    def log_icon_skipped(self, icon_name: str, reason: str) -> None:
        self._logger.debug("Icon skipped", icon=icon_name, reason=reason)
        self.stats.skipped_count += 1

    def log_icon_error(
        self,
        icon_name: str,
        error: Exception | str,
        traceback: str | None = None,
    ) -> None:
        """Log a failed icon; the message is kept for the final report."""
        self._logger.error(
            "Icon processing failed",
            icon=icon_name,
            error=str(error),
            error_type=type(error).__name__ if isinstance(error, Exception) else None,
            traceback=traceback,
        )
        self.stats.error_count += 1
        self.stats.errors.append((icon_name, str(error)))

    def log_shadow_built(self, icon_name: str, input_paths: int, shadow_paths: int) -> None:
        self._logger.debug(
            "Shadow built",
            icon=icon_name,
            input_paths=input_paths,
            shadow_paths=shadow_paths,
        )

    def log_cancelled(self, pending: int) -> None:
        """Log a user cancellation and mark the run as cancelled."""
        self._logger.info("Cancellation requested by user", pending=pending)
        self.stats.was_cancelled = True
        self.stats.cancelled_count = pending
