"""Logging utilities for Floorsketch."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class SessionStats:
    """Statistics from a drawing session."""

    points_placed: int = 0
    points_rejected: int = 0
    areas_committed: int = 0
    splits_detected: int = 0
    splits_cancelled: int = 0
    splits_aborted: int = 0
    edges_deleted: int = 0
    rejections: list[tuple[str, str]] = field(default_factory=list)

    @property
    def split_count(self) -> int:
        """Splits that reached commit."""
        return self.splits_detected - self.splits_cancelled


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

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
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)
        _installed_handlers.append(console_handler)

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

    logger = structlog.get_logger("floorsketch")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class SessionLogger:
    """Logger for tracking drawing session events and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger("floorsketch.session")
        self._stats = SessionStats()

    def log_point_placed(self, x: float, y: float, snap: str | None) -> None:
        """Log an accepted vertex."""
        self._logger.debug("Point placed", x=round(x, 2), y=round(y, 2), snap=snap)
        self._stats.points_placed += 1

    def log_point_rejected(self, x: float, y: float, code: str, reason: str) -> None:
        """Log a vertex or path rejected by validation."""
        self._logger.info("Input rejected", x=round(x, 2), y=round(y, 2), code=code, reason=reason)
        self._stats.points_rejected += 1
        self._stats.rejections.append((code, reason))

    def log_split_detected(self, kind: str, removed: list[int], areas: list[float]) -> None:
        """Log a split plan entering classification."""
        self._logger.info(
            "Split detected",
            kind=kind,
            removed=removed,
            areas=[round(a, 1) for a in areas],
        )
        self._stats.splits_detected += 1

    def log_split_cancelled(self) -> None:
        self._logger.info("Split cancelled")
        self._stats.splits_cancelled += 1

    def log_split_aborted(self, error: Exception) -> None:
        """Log a split aborted by an internal invariant violation."""
        self._logger.error(
            "Split aborted",
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.splits_aborted += 1

    def log_areas_committed(self, areas: list[tuple[int, str, float]]) -> None:
        """Log areas added to the store."""
        self._logger.info(
            "Areas committed",
            areas=[(area_id, label, round(size, 1)) for area_id, label, size in areas],
        )
        self._stats.areas_committed += len(areas)

    def log_edge_deleted(self, area_id: int, edge_index: int, reopened_points: int) -> None:
        self._logger.info(
            "Edge deleted",
            area=area_id,
            edge=edge_index,
            reopened_points=reopened_points,
        )
        self._stats.edges_deleted += 1

    @property
    def stats(self) -> SessionStats:
        """Get current session statistics."""
        return self._stats
