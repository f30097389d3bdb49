"""Structured logging for fallible.

Every library logger lives under the ``fallible`` stdlib logger, which carries
a NullHandler until configure_logging() attaches a structlog
ProcessorFormatter to it. Events are processed by a fixed structlog chain, so
the library never touches the global structlog configuration and never
reconfigures the root logger.

Error reasons may be passed as objects (``error=exc``); they are rendered
as ``error`` (repr) and ``error_type`` (class name) before hooks and
renderers see them.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'LOGGER_NAME',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

LOGGER_NAME = 'fallible'

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

type LogHook = Callable[[dict[str, Any]], None]


def _describe_error(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render an ``error`` object as its repr plus ``error_type``."""
    error = event_dict.get('error')
    if error is not None and not isinstance(error, str):
        event_dict['error_type'] = type(error).__name__
        event_dict['error'] = repr(error)
    return event_dict


def _event_processors() -> list[Any]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _describe_error,
        _run_hooks,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    stream: Any = None,
) -> logging.Handler:
    """Send fallible's events to a stream, rendered by structlog.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
            Unknown names mean INFO.
        json_output: Render JSON lines (True) or console output (False).
        stream: Target stream, stderr by default.

    Returns:
        The installed handler.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.format_exc_info,
            _renderer(json_output),
        ],
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    for existing in logger.handlers[:]:
        if not isinstance(existing, logging.NullHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def get_logger(name: str = LOGGER_NAME) -> Any:
    """Get a structlog logger for a module of this package.

    Args:
        name: Logger name, usually the calling module's ``__name__``. It has
            to sit under ``fallible`` for configure_logging() to apply.

    Returns:
        A structlog BoundLogger proxy.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_event_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


# --- Logging Hooks ---

_log_hooks: list[LogHook] = []


def add_log_hook(hook: LogHook) -> None:
    """Register a hook to be called with a copy of each emitted event dict."""
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Remove a previously registered log hook."""
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    """Remove all registered log hooks."""
    _log_hooks.clear()


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in _log_hooks:
        try:
            hook(event_dict.copy())
        except Exception:  # noqa: S112
            continue
    return event_dict
