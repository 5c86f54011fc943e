"""Logging utilities for PlotPaths."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class ProcessingStats:
    """Statistics from a render run."""

    shapes_count: int = 0
    segments_count: int = 0
    paths_count: int = 0
    dropped_count: int = 0
    iteration_cap_hits: int = 0
    unused_nodes: int = 0
    document_width: float = 0.0
    document_height: float = 0.0
    steps: list[tuple[str, float]] = field(default_factory=list)
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
    """Configure structured logging over the standard library.

    Calling this again replaces the handlers installed by the previous call.

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

    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

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

    logger = structlog.get_logger("plotpaths")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking render steps and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("plotpaths")
        self._stats = ProcessingStats()

    def log_step(self, step: str, duration_ms: float, **details: object) -> None:
        """Log a completed pipeline step."""
        self._logger.debug(
            "Step complete",
            step=step,
            duration_ms=round(duration_ms, 2),
            **details,
        )
        self._stats.steps.append((step, duration_ms))

    def log_shapes(self, shape_count: int, segment_count: int) -> None:
        """Log the generated shape geometry."""
        self._logger.info("Shapes generated", shapes=shape_count, segments=segment_count)
        self._stats.shapes_count += shape_count
        self._stats.segments_count += segment_count

    def log_paths(
        self,
        path_count: int,
        iterations: int,
        hit_iteration_cap: bool,
        unused_nodes: int,
    ) -> None:
        """Log flow-line extraction results."""
        self._logger.info(
            "Flow lines extracted",
            paths=path_count,
            iterations=iterations,
            unused_nodes=unused_nodes,
        )
        if hit_iteration_cap:
            self._logger.warning(
                "Path search stopped at iteration cap",
                iterations=iterations,
                unused_nodes=unused_nodes,
            )
            self._stats.iteration_cap_hits += 1
        self._stats.paths_count += path_count
        self._stats.unused_nodes += unused_nodes

    def log_dropped(self, count: int, reason: str) -> None:
        """Log geometry dropped from the output."""
        if count:
            self._logger.debug("Geometry dropped", count=count, reason=reason)
        self._stats.dropped_count += count

    def log_export(self, document_bytes: int, width: float, height: float) -> None:
        """Log document serialization."""
        self._logger.info(
            "Document exported",
            bytes=document_bytes,
            width=round(width, 2),
            height=round(height, 2),
        )
        self._stats.document_width = width
        self._stats.document_height = height

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
