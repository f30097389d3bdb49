"""@catches, @default_catches and @catches_any method decorators."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fallible.intercept.core import Handler, intercept
from fallible.intercept.filters import MatchAny, MatchType

__all__ = ['catches', 'catches_any', 'default_catches']


def _label(method: Any) -> str:
    return getattr(method, '__name__', None) or repr(method)


def catches[R](
    error_type: type[BaseException] | tuple[type[BaseException], ...],
    handler: Handler[R],
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that recovers a method from error_type failures.

    The method is wrapped once, when the class body runs. On failure the
    handler is called as ``handler(error, method_name, instance, *args, **kwargs)``.
    Stacked decorators see failures innermost first; anything the inner one
    does not accept reaches the outer one.

    Args:
        error_type: Exception class (or tuple of classes) to recover from.
        handler: Recovery function; its return value replaces the result.

    Example:
        ```python
        class Repository:
            @catches(KeyError, lambda err, name, repo, key: None)
            def get(self, key: str) -> str:
                return self._rows[key]
        ```
    """
    def decorator(method: Callable[..., Any]) -> Callable[..., Any]:
        return intercept(method, error_type, handler, label=_label(method))

    return decorator


def default_catches[R](handler: Handler[R]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that recovers a method from any Exception.

    Non-exception rejection reasons from thenables are not accepted; use
    catches_any for those.
    """
    def decorator(method: Callable[..., Any]) -> Callable[..., Any]:
        return intercept(method, MatchType((Exception,)), handler, label=_label(method))

    return decorator


def catches_any[R](handler: Handler[R]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that recovers a method from any failure at all."""
    def decorator(method: Callable[..., Any]) -> Callable[..., Any]:
        return intercept(method, MatchAny(), handler, label=_label(method))

    return decorator
