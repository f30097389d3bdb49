"""Option type: Some[T] | Nothing for optional values.

``option()`` is the smart constructor: it classifies ``None`` as Nothing and
everything else as Some, and accepts a zero-argument producer in place of a
value. ``Some(None)`` is rejected; absence is always spelled ``Nothing``.

Examples:
    >>> option(5)
    Some(value=5)
    >>> option(None) is Nothing
    True
    >>> option({'a': 1}).map(lambda d: d.get('b'))
    Nothing
"""

from __future__ import annotations

import copy
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from fallible._config import get_config
from fallible._logging import get_logger
from fallible.errors import EmptyOptionError, FlattenError, InvalidSomeError

if TYPE_CHECKING:
    from fallible.result import Err, Ok

__all__ = [
    'Nothing',
    'NothingType',
    'Option',
    'Some',
    'ValueOrFn',
    'from_nullable',
    'is_option',
    'option',
]

_logger = get_logger(__name__)

_MISSING: Any = object()

type ValueOrFn[T] = T | Callable[[], T]


def _value_of[T](value: ValueOrFn[T]) -> T:
    """Call value if it is a producer, else return it unchanged."""
    if callable(value):
        return value()
    return value


def _has_string_conversion(value: object) -> bool:
    # object itself is last in every MRO
    return any(
        '__str__' in vars(klass) or '__repr__' in vars(klass)
        for klass in type(value).__mro__[:-1]
    )


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a non-None value of type T.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
    """

    value: T

    kind = 'some'

    def __post_init__(self) -> None:
        if self.value is None:
            raise InvalidSomeError

    def __str__(self) -> str:
        if _has_string_conversion(self.value):
            return str(self.value)
        return f'Some({self.value!r})'

    def is_some(self, expected: Any = _MISSING) -> TypeIs[Some[T]]:
        """Return True, comparing against ``expected`` when one is given.

        The comparison is strict: the types must match exactly as well as the
        values, so ``Some(1).is_some(True)`` and ``Some(0).is_some(False)``
        are both False.
        """
        if expected is _MISSING:
            return True
        return type(self.value) is type(expected) and self.value == expected

    def is_none(self) -> TypeIs[NothingType]:
        """Never true for Some."""
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_or(self, default: ValueOrFn[T]) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the fallback function."""
        return self.value

    def unwrap_or_none(self) -> T | None:
        """Return the contained value."""
        return self.value

    def expect(self, _msg: str) -> T:
        """Return the contained value, ignoring the message."""
        return self.value

    def map[U](self, f: Callable[[T], U | None]) -> Some[U] | NothingType:
        """Apply f to the value and classify the output.

        A ``None`` returned by f becomes Nothing, so lookups can be chained
        without checking each step.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some of the result, or Nothing if f returned None.
        """
        return from_nullable(f(self.value))

    def flat_map[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Chain a lookup that may itself come back empty.

        The Option returned by f is the result; nothing is re-wrapped.
        """
        return f(self.value)

    async def flat_map_async[U](
        self, f: Callable[[T], Awaitable[Some[U] | NothingType]]
    ) -> Some[U] | NothingType:
        """Await an Option-returning coroutine function applied to the value."""
        return await f(self.value)

    def map_or[U](
        self, f: Callable[[T], U | None], default: ValueOrFn[U | None]
    ) -> Some[U] | NothingType:
        """Map the value, falling back to ``default`` when f returns None.

        Args:
            f: Function to apply to the Some value.
            default: Value (or producer of a value) used when f returns None.

        Returns:
            Some of f's result, else option of the default.
        """
        mapped = from_nullable(f(self.value))
        if mapped.is_none():
            return from_nullable(_value_of(default))
        return mapped

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Return self if the predicate holds for the value, else Nothing."""
        if predicate(self.value):
            return self
        return Nothing

    def ok_or[E](self, _err: ValueOrFn[E]) -> Ok[T]:
        """Convert to Result, returning Ok(value)."""
        from fallible.result import Ok

        return Ok(self.value)

    def ok_or_else[E](self, _f: Callable[[], E]) -> Ok[T]:
        """Convert to Result, returning Ok(value)."""
        from fallible.result import Ok

        return Ok(self.value)

    def flatten[U](self: Some[Some[U]]) -> Some[U]:
        """Remove one level of nesting from ``Some(Some(x))``.

        Raises:
            FlattenError: If the contained value is not Some.
        """
        if isinstance(self.value, Some):
            return self.value
        raise FlattenError(self.value)

    def match[R](self, *, some: Callable[[T], R], none: Callable[[], R]) -> R:  # noqa: ARG002
        """Call ``some`` with the contained value."""
        return some(self.value)

    def clone(self) -> Some[T]:
        """Return a new Some holding a deep copy of the value."""
        return Some(copy.deepcopy(self.value))

    def to_json(self) -> T:
        """Return the value, so Some serializes as what it holds."""
        return self.value


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """The absent case of Option.

    Use the ``Nothing`` constant; every operation that produces absence
    returns that same object.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.unwrap_or(0)
        0
        >>> str(Nothing)
        'none'
    """

    kind = 'none'

    def __repr__(self) -> str:
        return 'Nothing'

    def __str__(self) -> str:
        return 'none'

    def __copy__(self) -> NothingType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> NothingType:
        return self

    def __reduce__(self) -> str:
        # unpickles as the module-level singleton
        return 'Nothing'

    def __reduce_ex__(self, protocol: int) -> str:
        return self.__reduce__()

    def is_some(self, expected: Any = _MISSING) -> TypeIs[Some[Any]]:  # noqa: ARG002
        """Return False, whatever ``expected`` is."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True since this is Nothing."""
        return True

    def unwrap(self) -> NoReturn:
        """Raise since Nothing has no value.

        Raises:
            EmptyOptionError: Always.
        """
        raise EmptyOptionError

    def unwrap_or[T](self, default: ValueOrFn[T]) -> T:
        """Return the default, calling it first if it is a producer."""
        return _value_of(default)

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value."""
        return f()

    def unwrap_or_none(self) -> None:
        """Return None."""
        return None

    def expect(self, msg: str) -> NoReturn:
        """Raise EmptyOptionError with a custom message."""
        raise EmptyOptionError(msg)

    def map(self, _f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing without calling the function."""
        return self

    def flat_map(self, _f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing without calling the function."""
        return self

    async def flat_map_async(self, _f: Callable[[Any], Awaitable[Any]]) -> NothingType:
        """Resolve to Nothing without calling the function."""
        return self

    def map_or[U](
        self, _f: Callable[[Any], Any], default: ValueOrFn[U | None]
    ) -> Some[U] | NothingType:
        """Return option of the default."""
        return from_nullable(_value_of(default))

    def filter(self, _predicate: Callable[[Any], bool]) -> NothingType:
        """Nothing stays Nothing."""
        return self

    def ok_or[E](self, err: ValueOrFn[E]) -> Err[E]:
        """Turn absence into Err(err).

        Args:
            err: The error value, or a producer of it.
        """
        from fallible.result import Err

        return Err(_value_of(err))

    def ok_or_else[E](self, f: Callable[[], E]) -> Err[E]:
        """Convert to Result, computing the error."""
        from fallible.result import Err

        return Err(f())

    def flatten(self) -> NothingType:
        """Nothing is already flat."""
        return self

    def match[R](self, *, some: Callable[[Any], R], none: Callable[[], R]) -> R:  # noqa: ARG002
        """Call ``none``."""
        return none()

    def clone(self) -> NothingType:
        """Return Nothing itself."""
        return self

    def to_json(self) -> None:
        """Return None, so Nothing serializes as null."""
        return None

    def to_some[T](self, value: ValueOrFn[T | None]) -> Some[T] | NothingType:
        """Build a new Option from value through option()."""
        return option(value)


Nothing: NothingType = NothingType()
"""The one NothingType instance; compare with ``is``."""


type Option[T] = Some[T] | NothingType


def from_nullable[T](value: T | None) -> Some[T] | NothingType:
    """Return Nothing for None, else Some(value). Callables are not invoked."""
    if value is None:
        return Nothing
    return Some(value)


def _describe(producer: Callable[..., Any]) -> str:
    return getattr(producer, '__qualname__', None) or repr(producer)


def option[T](value: ValueOrFn[T | None]) -> Some[T] | NothingType:
    """Build an Option from a value or a zero-argument producer.

    A producer is called once. If it raises, the failure is logged and
    treated as absence, unless absorb_producer_errors is disabled in the
    configuration, in which case the exception propagates.

    Args:
        value: A value, None, or a callable producing either.

    Returns:
        Nothing when the value (or the produced value) is None, else Some.

    Examples:
        >>> option(lambda: int('7'))
        Some(value=7)
        >>> option(lambda: int('x'))
        Nothing
    """
    if not callable(value):
        return from_nullable(value)
    try:
        produced = value()
    except Exception as exc:
        if not get_config().absorb_producer_errors:
            raise
        _logger.warning(
            'option.producer_failed',
            producer=_describe(value),
            error=exc,
            exc_info=exc,
        )
        return Nothing
    return from_nullable(produced)


def is_option(value: object) -> TypeIs[Some[Any] | NothingType]:
    """Return True if value is Some or Nothing."""
    return isinstance(value, Some | NothingType)
