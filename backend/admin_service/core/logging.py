"""Logging helpers for the Admin Service."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog
from structlog.typing import EventDict, FilteringBoundLogger, Processor

from .config import Settings, get_settings


def add_service_name(service_name: str) -> Processor:
    """Tag every event with the emitting service."""

    def processor(logger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Set up standard and structured logging.

    Safe to call again: loggers are not cached, so already imported module
    loggers pick up the new level and renderer.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_service_name(settings.service_name),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if settings.node_env == "production"
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Return a configured logger."""
    return structlog.get_logger(name)
