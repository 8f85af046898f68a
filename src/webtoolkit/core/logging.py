"""Structured logging for webtoolkit.

The toolkit logs through structlog and never configures logging on import.
Applications that want the toolkit's formatting call ``configure_logging``
once at startup; otherwise structlog's defaults apply.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, FilteringBoundLogger, Processor

from webtoolkit.core.config import ToolkitConfig, get_config


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' field to 'message' for JSON consumers."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _renderers(log_format: str) -> list[Processor]:
    if log_format == "console":
        return [
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]
    return [
        structlog.processors.format_exc_info,
        rename_message_field,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(config: ToolkitConfig | None = None) -> None:
    """Configure structured logging.

    Args:
        config: Optional config instance. If not provided, loads from environment.
            ``log_format`` picks console or JSON output, ``log_level`` the
            minimum level for both structlog and stdlib loggers.
    """
    if config is None:
        config = get_config()

    level = getattr(logging, config.log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderers(config.log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # Standard logging for third-party libraries (httpx, multipart)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger bound to ``name``.

    Args:
        name: Logger name, usually ``__name__``. Defaults to 'webtoolkit'.
    """
    return structlog.get_logger().bind(logger=name or "webtoolkit")
