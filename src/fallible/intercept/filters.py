"""Error filters deciding which failures a handler may recover from."""

from __future__ import annotations

from typing import Any

import msgspec

from fallible.shapes import is_platform_error

__all__ = ['ErrorFilter', 'MatchAny', 'MatchType', 'as_filter', 'matches']


class MatchAny(msgspec.Struct, frozen=True):
    """Accept every failure a program is expected to recover from.

    That is every Exception and every non-exception rejection reason (a
    thenable may reject with a string or a dict). Interpreter signals that
    only derive from BaseException (KeyboardInterrupt, SystemExit,
    asyncio.CancelledError, GeneratorExit) are never accepted.
    """

    def accepts(self, reason: Any) -> bool:
        if isinstance(reason, BaseException):
            return isinstance(reason, Exception)
        return True


class MatchType(msgspec.Struct, frozen=True):
    """Accept instances of the declared exception types and their subclasses."""

    types: tuple[type[BaseException], ...]

    def __post_init__(self) -> None:
        if not self.types:
            raise ValueError('MatchType needs at least one exception type')
        for tp in self.types:
            if not (isinstance(tp, type) and issubclass(tp, BaseException)):
                raise TypeError(f'{tp!r} is not an exception class')

    def accepts(self, reason: Any) -> bool:
        return isinstance(reason, self.types)


type ErrorFilter = MatchAny | MatchType


def as_filter(
    error_filter: ErrorFilter | type[BaseException] | tuple[type[BaseException], ...] | None,
) -> ErrorFilter:
    """Normalize a filter argument.

    None means MatchAny, an exception class or a tuple of them means
    MatchType, and an existing filter is returned as-is.

    Raises:
        TypeError: For anything else.
    """
    if error_filter is None:
        return MatchAny()
    if isinstance(error_filter, MatchAny | MatchType):
        return error_filter
    if isinstance(error_filter, type):
        return MatchType((error_filter,))
    if isinstance(error_filter, tuple):
        return MatchType(error_filter)
    raise TypeError(
        f'Expected an exception class, a tuple of them or a filter, got {error_filter!r}'
    )


def matches(error_filter: ErrorFilter, reason: Any) -> bool:
    """Return True if reason may be handed to a recovery handler.

    Platform error objects (numeric errorCode plus message) are always
    eligible, whatever the filter.
    """
    return error_filter.accepts(reason) or is_platform_error(reason)
