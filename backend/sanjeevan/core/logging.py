"""
Logging configuration for the prescription record service.

Sets up structlog on top of the standard library logger so module loggers can
be obtained with ``structlog.get_logger(__name__)``.
"""

import logging
import sys
import time
from typing import Any, Dict

import structlog
from structlog.stdlib import LoggerFactory
from structlog.types import Processor

from sanjeevan.core.config import Environment, settings


def configure_logging(log_level: str = settings.LOG_LEVEL) -> None:
    """
    Configure structured logging for the application.

    Development gets the console renderer, every other environment emits JSON.

    Args:
        log_level: Logging level name to use
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level.upper(),
    )

    def timestamper(logger: Any, name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict["timestamp"] = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime())
        return event_dict

    def add_service_info(logger: Any, name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict["service"] = settings.PROJECT_NAME
        event_dict["version"] = settings.VERSION
        return event_dict

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        timestamper,
        add_service_info,
        structlog.processors.format_exc_info,
    ]

    if settings.ENVIRONMENT == Environment.DEVELOPMENT:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend([
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ])

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
