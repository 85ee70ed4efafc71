"""Logging utilities for Scriptsmith."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from one font generation run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    contours_emitted: int = 0
    union_fallbacks: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)

    @property
    def min_glyph_time_ms(self) -> float | None:
        return min(self.glyph_timings_ms) if self.glyph_timings_ms else None

    @property
    def max_glyph_time_ms(self) -> float | None:
        return max(self.glyph_timings_ms) if self.glyph_timings_ms else None

    def merge(self, other: "ProcessingStats") -> None:
        """Fold the counters of another run (e.g. a style variant) into this one."""
        self.processed_count += other.processed_count
        self.skipped_count += other.skipped_count
        self.error_count += other.error_count
        self.contours_emitted += other.contours_emitted
        self.union_fallbacks += other.union_fallbacks
        self.errors.extend(other.errors)
        self.glyph_timings_ms.extend(other.glyph_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
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
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
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

    logger = structlog.get_logger("scriptsmith")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking glyph generation progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("scriptsmith")
        self._stats = ProcessingStats()

    def log_glyph_start(self, char: str) -> None:
        """Log start of glyph processing."""
        self._logger.debug("Processing glyph", glyph=char)

    def log_glyph_complete(
        self,
        char: str,
        contours: int,
        advance_width: int,
        duration_ms: float,
    ) -> None:
        """Log successful glyph processing."""
        self._logger.info(
            "Glyph processed",
            glyph=char,
            contours=contours,
            advance_width=advance_width,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.contours_emitted += contours
        self._stats.glyph_timings_ms.append(duration_ms)

    def log_glyph_skipped(self, char: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.debug("Glyph skipped", glyph=char, reason=reason)
        self._stats.skipped_count += 1

    def log_glyph_error(
        self,
        char: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log glyph processing error; the glyph is left out of the font."""
        self._logger.warning(
            "Glyph processing failed, glyph omitted",
            glyph=char,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((char, str(error)))

    def log_union_fallback(self, char: str, reason: str) -> None:
        """Log that a glyph kept its overlapping, un-unioned rings."""
        self._logger.warning("Union failed, using raw rings", glyph=char, reason=reason)
        self._stats.union_fallbacks += 1

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
