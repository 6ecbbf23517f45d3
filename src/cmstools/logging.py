"""Logging configuration for cmstools."""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Emit structlog events as JSON lines through the stdlib root logger.

    Events below ``level`` are dropped by the bound logger before any
    processor runs.
    """
    threshold = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=threshold, format="%(asctime)s %(levelname)s %(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        cache_logger_on_first_use=False,
    )
