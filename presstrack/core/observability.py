"""
Observability Infrastructure

Structured logging setup shared by the ledger, the analytics services and the
regeneration tracker. Modules log through ``logging.getLogger(__name__)``;
this module routes those records through structlog's renderers.
"""

import logging
import sys
from typing import Any

import structlog

from .config import Settings, settings


def setup_structured_logging(config: Settings | None = None) -> None:
    """Configure structured logging with JSON or console output."""
    config = config or settings

    log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if config.LOG_FORMAT == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=config.ENVIRONMENT == "local"
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Standard library records (logging.getLogger) go through the same renderer
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(handlers=[handler], level=log_level, force=True)

    if config.LOG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    else:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
