"""result_try: run any callable and capture its outcome as a Result."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from fallible.intercept.core import intercept
from fallible.intercept.filters import MatchAny
from fallible.result import Err, Ok
from fallible.shapes import Immediate, Pending, to_outcome

__all__ = ['result_try']

type ErrorCase[E] = E | Callable[..., E]


async def _settled(value: Any) -> Any:
    match to_outcome(value):
        case Pending(awaitable=awaitable):
            return await awaitable
        case Immediate(value=plain):
            return plain


async def result_try[E](
    func: Callable[..., Any],
    args: Sequence[Any] = (),
    error_case: ErrorCase[E] | None = None,
) -> Ok[Any] | Err[Any]:
    """Call ``func(*args)`` and return Ok of its (awaited) value, or Err.

    Sync functions, coroutine functions and functions returning thenables
    are all supported.

    Args:
        func: The callable to run.
        args: Positional arguments for func.
        error_case: What to put in Err on failure. A callable is called as
            ``error_case(error, *args)``; any other non-None value is used
            as-is; None keeps the original error.

    Example:
        ```python
        def subtract(a: int, b: int) -> int:
            if a < b:
                raise ValueError('a < b')
            return a - b

        await result_try(subtract, (5, 7))  # Err(error=ValueError('a < b'))
        await result_try(subtract, (5, 7), lambda err, a, b: f'{a} < {b}')
        # Err(error='5 < 7')
        ```
    """
    def to_err(error: Any, _context: Any, *call_args: Any) -> Err[Any]:
        if callable(error_case):
            return Err(error_case(error, *call_args))
        if error_case is not None:
            return Err(error_case)
        return Err(error)

    async def run(*call_args: Any) -> Ok[Any]:
        return Ok(await _settled(func(*call_args)))

    return await intercept(run, MatchAny(), to_err)(*args)
