"""
Structured logging configuration.

Also provides a tracker that logs each task run with its outcome and timing.
"""
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generator, Optional

import structlog
from structlog.types import Processor

from runstr.core.config import settings

_HANDLER_NAME = "runstr"


def setup_logging() -> None:
    """Configure structured logging for the application."""

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        # JSON format for production
        renderer = structlog.processors.JSONRenderer()
    else:
        # Console format for development
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    # Configure root logger, replacing our handler on repeated setup
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


# ========================================
# Task run tracking
# ========================================

@dataclass
class TaskRunLog:
    """Structured record of one task run."""
    task: str
    requested: str
    run_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    start_time: float = 0.0
    end_time: float = 0.0
    success: bool = True
    error_type: Optional[str] = None

    @property
    def duration_ms(self) -> float:
        if self.start_time and self.end_time:
            return round((self.end_time - self.start_time) * 1000, 2)
        return 0.0


@contextmanager
def track_task(
    logger: structlog.stdlib.BoundLogger,
    task: str,
    requested: Optional[str] = None,
) -> Generator[TaskRunLog, None, None]:
    """
    Log the start and outcome of a task run.

    Usage:
        with track_task(logger, "parse_note", requested="running_notes"):
            result = handler(params)
    """
    log = TaskRunLog(task=task, requested=requested or task)
    log.start_time = time.time()
    logger.debug("Task started", run_id=log.run_id, task=log.task, requested=log.requested)

    try:
        yield log
    except Exception as e:
        log.success = False
        log.error_type = type(e).__name__
        raise
    finally:
        log.end_time = time.time()
        logger.info(
            "Task finished",
            run_id=log.run_id,
            task=log.task,
            requested=log.requested,
            success=log.success,
            error_type=log.error_type,
            duration_ms=log.duration_ms,
        )
