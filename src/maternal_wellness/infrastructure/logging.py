"""Structured logging configuration using structlog.

This module provides production-ready logging with:
- JSON output for production (machine-parseable)
- Console output for development (human-readable)
- Context variable binding so every event of a questionnaire session
  carries its session id

Never pass raw answers, mood notes, or user ids as log fields; use
``maternal_wellness.infrastructure.hashing.user_ref`` for identities.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

    from maternal_wellness.config import LoggingSettings


def setup_logging(settings: LoggingSettings | None = None, stream: TextIO | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        settings: Logging settings. If None, uses defaults from config.
        stream: Output stream, stdout by default. The CLI passes stderr so
            its JSON output stays machine-readable.
    """
    if settings is None:
        from maternal_wellness.config import get_settings  # noqa: PLC0415

        settings = get_settings().logging

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if settings.include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    processors.append(structlog.processors.StackInfoRenderer())

    if settings.include_caller:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    if settings.format == "json":
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(ensure_ascii=False),
            ]
        )
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=getattr(logging, settings.level),
        force=True,
    )

    # Request lines are logged by our own middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__).

    Returns:
        Configured structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_context(**kwargs: str | int | float | bool) -> None:
    """Bind context variables for the current execution context.

    Args:
        **kwargs: Key-value pairs added to every subsequent log event.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Unbind context variables.

    Args:
        *keys: Keys to unbind.
    """
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()


def with_context(
    **context_vars: str | int | float | bool,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator binding log context for the duration of a call.

    Context is removed when the function returns or raises.

    Args:
        **context_vars: Context variables to bind.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        from functools import wraps  # noqa: PLC0415

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bind_context(**context_vars)
            try:
                return func(*args, **kwargs)
            finally:
                unbind_context(*context_vars.keys())

        return wrapper

    return decorator
