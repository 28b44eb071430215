"""Structured logging configuration for content import.

structlog events are handed to the standard library logging tree and
rendered by ``ProcessorFormatter``, so the console and an optional log
file both receive the same structured records.
"""

import logging
import sys
from typing import Optional

import structlog

from content_import.core.config import ImportConfig

HANDLER_PREFIX = "content_import."


def _renderer(json_format: bool, colors: bool) -> structlog.types.Processor:
    if json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=colors)


def _formatter(
    shared_processors: list,
    json_format: bool,
    colors: bool,
) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            _renderer(json_format, colors),
        ],
    )


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Configure structured logging for the import surface.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Whether to output logs in JSON format
        log_file: Optional file path for log output
    """
    log_level = getattr(logging, level.upper())

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    root = logging.getLogger()
    for handler in list(root.handlers):
        if (handler.get_name() or "").startswith(HANDLER_PREFIX):
            root.removeHandler(handler)
            handler.close()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.set_name(HANDLER_PREFIX + "stream")
    stream_handler.setFormatter(
        _formatter(shared_processors, json_format, colors=sys.stdout.isatty())
    )
    root.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.set_name(HANDLER_PREFIX + "file")
        file_handler.setFormatter(
            _formatter(shared_processors, json_format, colors=False)
        )
        root.addHandler(file_handler)

    root.setLevel(log_level)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from(config: ImportConfig) -> None:
    """Configure logging from an ``ImportConfig``."""
    configure_logging(
        level=config.log_level,
        json_format=config.log_json,
        log_file=config.log_file,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
