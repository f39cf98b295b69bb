"""
Structured logging for court_rotation.

Library modules call ``get_logger(__name__)`` and emit event-style messages with
key/value context. Applications embedding the engine call ``setup_logging`` once.
"""
from __future__ import annotations
import logging
import sys
from typing import Any, Optional

import structlog


def add_component(logger: logging.Logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Tag every event with the package name."""
    event_dict.setdefault("component", "court_rotation")
    return event_dict


def setup_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure structlog for the engine.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_format: JSON lines when True, coloured console output otherwise
    """
    level = getattr(logging, log_level.upper())
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    shared = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_component,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors = shared + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared + [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)
