"""Logging utilities for imagebridge."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class FilterStats:
    """Statistics accumulated while applying filters."""

    filters_applied: int = 0
    skipped_count: int = 0
    stages_run: int = 0
    centroids_found: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    total_duration_ms: float = 0.0

    @property
    def avg_filter_time_ms(self) -> float | None:
        """Average duration of a successful filter run."""
        if self.filters_applied == 0:
            return None
        return self.total_duration_ms / self.filters_applied


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
        quiet: If True, suppress console output except errors

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

    console_handler = logging.StreamHandler()
    console_handler.setLevel(
        logging.ERROR if quiet else getattr(logging, console_level.upper())
    )
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

    logger = structlog.get_logger("imagebridge")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class FilterLogger:
    """Logger for tracking filter runs and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = FilterStats()

    def log_filter_start(self, filter_name: str, dims: tuple[int, ...]) -> None:
        """Log start of a filter run."""
        self._logger.debug("Applying filter", filter=filter_name, dims=list(dims))

    def log_stage(self, filter_name: str, stage: str, duration_ms: float) -> None:
        """Log a completed engine stage."""
        self._logger.debug(
            "Stage complete",
            filter=filter_name,
            stage=stage,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.stages_run += 1

    def log_filter_complete(
        self,
        filter_name: str,
        centroid_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful filter run."""
        self._logger.info(
            "Filter applied",
            filter=filter_name,
            centroids=centroid_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.filters_applied += 1
        self._stats.centroids_found += centroid_count
        self._stats.total_duration_ms += duration_ms

    def log_filter_skipped(self, filter_name: str) -> None:
        """Log a selector value with no filter behind it."""
        self._logger.debug("No filter applied", filter=filter_name)
        self._stats.skipped_count += 1

    def log_filter_error(self, filter_name: str, error: Exception) -> None:
        """Log failed filter run."""
        self._logger.error(
            "Filter failed",
            filter=filter_name,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.error_count += 1
        self._stats.errors.append((filter_name, str(error)))

    @property
    def stats(self) -> FilterStats:
        """Get current filter statistics."""
        return self._stats
