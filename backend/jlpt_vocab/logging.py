"""Structured logging setup.

Store failures are logged as JSON events with enough context (operation,
page, batch range) to diagnose them; callers only ever see a generic
failure message.
"""

from typing import Any

import logging

import structlog
from structlog import contextvars as structlog_contextvars

from .config import settings


def _drop_empty_fields(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Remove keys whose value is None so optional context stays out of the line."""

    return {key: value for key, value in event_dict.items() if value is not None}


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure stdlib logging and structlog for the whole application."""
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json_output is None else json_output

    # Message-only format so uvicorn lines and our JSON lines look alike.
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if use_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog_contextvars.merge_contextvars,
            _drop_empty_fields,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


logger = structlog.get_logger()
