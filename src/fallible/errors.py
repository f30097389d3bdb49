"""Exception types raised by Option, Result and the interception layer."""

from __future__ import annotations

from typing import Any

__all__ = [
    'EmptyOptionError',
    'FallibleError',
    'FlattenError',
    'InvalidSomeError',
    'OptionError',
    'ThenableRejection',
    'UnwrapError',
]


class FallibleError(Exception):
    """Base class for errors raised by fallible itself."""


# --- Option Errors ---


class OptionError(FallibleError):
    """Misuse of an Option value."""


class EmptyOptionError(OptionError, RuntimeError):
    """Raised when a value is requested from Nothing."""

    def __init__(self, message: str = 'Called unwrap on Nothing') -> None:
        super().__init__(message)


class InvalidSomeError(OptionError, ValueError):
    """Raised when Some is constructed with None."""

    def __init__(self) -> None:
        super().__init__('Some() cannot be called with None, use option() or Nothing')


class FlattenError(OptionError, TypeError):
    """Raised when flatten() is called on Some holding a non-Some value."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f'Cannot flatten a non-option value: {value!r}')


# --- Result Errors ---


class UnwrapError(FallibleError, RuntimeError):
    """Raised when unwrapping the wrong Result variant.

    Err payloads that are exceptions are raised directly; this wraps payloads
    that cannot be raised on their own.
    """

    def __init__(self, error: Any, message: str | None = None) -> None:
        self.error = error
        super().__init__(message or f'Called unwrap on Err: {error!r}')


# --- Async Errors ---


class ThenableRejection(FallibleError):  # noqa: N818
    """A thenable rejected with a value that is not an exception.

    The original reason is kept on ``reason`` so handlers receive exactly what
    the thenable rejected with.
    """

    __slots__ = ('_reason',)

    def __init__(self, reason: Any) -> None:
        self._reason = reason
        super().__init__(f'Thenable rejected with {reason!r}')

    @property
    def reason(self) -> Any:
        """The rejection reason as delivered by the thenable."""
        return self._reason
