import logging
from typing import Any

import structlog

LOG_LEVELS: tuple[str, ...] = ("debug", "info", "warning", "error")


def configure_logging(level: str = "info") -> None:
    """Configures structlog to output one JSON object per line to stdout."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,  # Add log level
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),  # Add stack info for exceptions
            structlog.processors.dict_tracebacks,  # Formats exception info
            structlog.processors.JSONRenderer(),  # Render the log entry as JSON
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(**kwargs: Any) -> Any:
    """Returns a logger with the given context bound, i.e. get_logger(module=__name__)."""
    return structlog.get_logger().bind(**kwargs)
