"""Interception wrapper: route raised and rejected failures to one handler.

A wrapped callable keeps its signature. Whatever it does (return a value,
raise, return a coroutine, a future or a thenable that later rejects), a
failure accepted by the filter ends in exactly one handler call, and any
other failure propagates unchanged.

Example:
    ```python
    import json

    from fallible import default_catcher

    parse = default_catcher(json.loads, lambda err, ctx, text: {})
    parse('{"a": 1}')  # {'a': 1}
    parse('{ bad')  # {}
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

import wrapt

from fallible._logging import get_logger
from fallible.intercept.filters import ErrorFilter, MatchAny, as_filter, matches
from fallible.shapes import Immediate, Pending, rejection_reason, to_outcome

__all__ = ['Handler', 'catcher', 'default_catcher', 'intercept']

_logger = get_logger(__name__)

type Handler[R] = Callable[..., R]
"""Called as ``handler(error, context, *args, **kwargs)``.

When the wrapper carries a label (the decorator form) the label is passed
first: ``handler(error, label, context, *args, **kwargs)``.
"""


def intercept[R](
    func: Callable[..., Any],
    error_filter: ErrorFilter | type[BaseException] | tuple[type[BaseException], ...] | None,
    handler: Handler[R],
    *,
    label: str | None = None,
) -> Callable[..., Any]:
    """Wrap func so that accepted failures are recovered by handler.

    Args:
        func: The callable to wrap. May be sync, async, or return a thenable.
        error_filter: Which failures to recover from. None matches anything
            a program can recover from; see as_filter().
        handler: Recovery function. Its return value replaces the failed
            result; when the failure was asynchronous and the handler returns
            an awaitable, that is awaited too.
        label: Optional diagnostic label passed to the handler ahead of the
            context.

    Returns:
        A wrapper with func's metadata. For a plain return value it returns
        that value; for anything pending it returns a coroutine.

    Raises:
        TypeError: If handler is not callable or the filter is malformed.
    """
    if not callable(handler):
        raise TypeError(f'handler must be callable, got {handler!r}')
    accepted = as_filter(error_filter)
    name = label or getattr(func, '__qualname__', None) or repr(func)

    def recover(reason: Any, instance: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        _logger.debug('intercept.recovered', function=name, error=reason)
        if label is None:
            return handler(reason, instance, *args, **kwargs)
        return handler(reason, label, instance, *args, **kwargs)

    async def settle(
        awaitable: Awaitable[Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        try:
            return await awaitable
        except BaseException as exc:
            reason = rejection_reason(exc)
            if not matches(accepted, reason):
                _logger.debug('intercept.propagated', function=name, error=reason)
                raise
            recovered = recover(reason, instance, args, kwargs)
            if inspect.isawaitable(recovered):
                return await recovered
            return recovered

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        try:
            response = wrapped(*args, **kwargs)
        except BaseException as exc:
            reason = rejection_reason(exc)
            if not matches(accepted, reason):
                _logger.debug('intercept.propagated', function=name, error=reason)
                raise
            return recover(reason, instance, args, kwargs)

        match to_outcome(response):
            case Pending(awaitable=awaitable):
                return settle(awaitable, instance, args, kwargs)
            case Immediate(value=value):
                return value

    return wrapper(func)


def catcher[R](
    func: Callable[..., Any],
    error_type: type[BaseException] | tuple[type[BaseException], ...] | None,
    handler: Handler[R],
) -> Callable[..., Any]:
    """Wrap func, recovering only from error_type and its subclasses.

    Passing None as error_type recovers from anything, like default_catcher.

    Example:
        ```python
        def divide(a: float, b: float) -> float:
            return a / b

        safe_divide = catcher(divide, ZeroDivisionError, lambda *_: math.inf)
        safe_divide(4, 2)  # 2.0
        safe_divide(4, 0)  # inf
        ```
    """
    return intercept(func, error_type, handler)


def default_catcher[R](func: Callable[..., Any], handler: Handler[R]) -> Callable[..., Any]:
    """Wrap func, recovering from any failure, including non-exception rejections."""
    return intercept(func, MatchAny(), handler)
