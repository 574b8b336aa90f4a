"""Structlog-based logging configuration with stdlib bridge.

Provides:
- configure_logging(): one-shot structlog + stdlib setup
- get_logger(): returns bound structlog logger
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

import structlog

from task_board.infrastructure.config.app_settings import AppSettings
from task_board.infrastructure.observability.logging.log_schema_processor import (
    build_log_schema_processor,
)

SERVICE_NAME = "task-board"
_DEPLOYED_ENVS = ("qa", "staging", "prod", "production")

_CONFIGURED = False


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """One-shot structlog + stdlib bridge configuration.

    Safe to call multiple times; only the first invocation takes effect.
    Renderer is selected by settings.log_format (json|console) or settings.env.
    """
    global _CONFIGURED  # noqa: PLW0603
    if _CONFIGURED:
        return
    _CONFIGURED = True

    settings = settings or AppSettings()
    renderer = _select_renderer(settings.log_format, settings.env)
    # Nested schema for JSON output only
    schema: list[Any] = []
    if isinstance(renderer, structlog.processors.JSONRenderer):
        schema.append(build_log_schema_processor(SERVICE_NAME, settings.env))
    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Stdlib bridge: logging.getLogger() output goes through the same renderer
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *schema,
            renderer,
        ],
    )
    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger pre-bound with context_component."""
    # Initial values keep the proxy lazy until configure_logging() has run
    return structlog.get_logger(component, context_component=component)


def _select_renderer(log_format: Optional[str], env: str) -> Any:
    """Choose renderer based on the configured format or environment."""
    fmt = (log_format or "").lower()
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=True)

    if env.lower() in _DEPLOYED_ENVS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)

