"""
Logging utilities for Matrix protocol components.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger for a component."""
    return structlog.get_logger(name)


class AgentLogger:
    """Component-specific logger with context."""

    def __init__(self, agent_name: str, **context: Any):
        self.logger = structlog.get_logger(agent_name).bind(**context)
        self.agent_name = agent_name

    def info(self, message: str, **context: Any) -> None:
        """Log info message."""
        self.logger.info(message, agent=self.agent_name, **context)

    def warning(self, message: str, **context: Any) -> None:
        """Log warning message."""
        self.logger.warning(message, agent=self.agent_name, **context)

    def error(self, message: str, **context: Any) -> None:
        """Log error message."""
        self.logger.error(message, agent=self.agent_name, **context)

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message."""
        self.logger.debug(message, agent=self.agent_name, **context)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
) -> None:
    """Configure structured logging for the application."""

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors: list[Processor] = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings() -> None:
    """Configure logging from the monitoring section of the settings."""
    from .config import get_config

    monitoring = get_config().monitoring
    configure_logging(level=monitoring.log_level, json_format=monitoring.json_logs)


# Configure on import from settings
configure_from_settings()
