"""Result values: Ok carries a success, Err carries a failure payload.

Err payloads are not restricted to exceptions; any value describing the
failure will do. Unwrapping an Err raises the payload when it is an
exception and UnwrapError otherwise.

Examples:
    >>> Ok(2).map(lambda x: x + 1)
    Ok(value=3)
    >>> Err('missing').unwrap_or(0)
    0
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from fallible.errors import UnwrapError

if TYPE_CHECKING:
    from fallible.option import NothingType, Some

__all__ = ['Err', 'Ok', 'Result', 'collect', 'is_result']


def _raise_error(error: Any) -> NoReturn:
    if isinstance(error, BaseException):
        raise error
    raise UnwrapError(error)


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """A successful outcome holding ``value``.

    Unlike Some, Ok may hold None: "succeeded with nothing to report" is a
    legitimate success.
    """

    value: T

    kind = 'ok'

    def is_ok(self) -> TypeIs[Ok[T]]:
        """True; narrows the type to Ok for checkers."""
        return True

    def is_err(self) -> TypeIs[Err[Any]]:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:  # noqa: ARG002
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raise, there is no error to return.

        Raises:
            UnwrapError: Always, carrying the Ok value.
        """
        raise UnwrapError(self.value, f'Called unwrap_err on Ok: {self.value!r}')

    def expect(self, _msg: str) -> T:
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U] | Err[Exception]:
        """Transform the value with f.

        If f raises, the exception is captured and returned as Err, so a
        mapping step can never escape the Result chain.

        Examples:
            >>> Ok(1).map(lambda x: x / 0).is_err()
            True
        """
        try:
            return Ok(f(self.value))
        except Exception as exc:
            return Err(exc)

    def map_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        return self

    def flat_map[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Chain a step that itself returns a Result; its Result is returned as-is."""
        return f(self.value)

    async def flat_map_async[U, E](
        self, f: Callable[[T], Awaitable[Ok[U] | Err[E]]]
    ) -> Ok[U] | Err[E]:
        """Like flat_map, awaiting the step."""
        return await f(self.value)

    def or_else(self, _f: Callable[[Any], Any]) -> Ok[T]:
        return self

    def to_option(self) -> Some[T] | NothingType:
        """Some(value), or Nothing when the value is None."""
        from fallible.option import from_nullable

        return from_nullable(self.value)

    def match[R](self, *, ok: Callable[[T], R], err: Callable[[Any], R]) -> R:  # noqa: ARG002
        return ok(self.value)

    def to_json(self) -> T:
        """The value itself; Ok serializes as what it holds."""
        return self.value


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """A failed outcome holding ``error``, which may be any value."""

    error: E

    kind = 'error'

    def is_ok(self) -> TypeIs[Ok[Any]]:
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """True; narrows the type to Err for checkers."""
        return True

    def unwrap(self) -> NoReturn:
        """Raise the failure.

        Raises:
            E: The payload itself when it is an exception.
            UnwrapError: For any other payload, available as ``.error``.
        """
        _raise_error(self.error)

    def unwrap_or[T](self, default: T) -> T:
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Derive a fallback value from the error payload."""
        return f(self.error)

    def unwrap_err(self) -> E:
        return self.error

    def expect(self, msg: str) -> NoReturn:
        """Raise UnwrapError whose message starts with msg."""
        raise UnwrapError(self.error, f'{msg}: {self.error!r}')

    def map(self, _f: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Transform the payload, e.g. to turn an exception into a message."""
        return Err(f(self.error))

    def flat_map(self, _f: Callable[[Any], Any]) -> Err[E]:
        return self

    async def flat_map_async(self, _f: Callable[[Any], Awaitable[Any]]) -> Err[E]:
        return self

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Recover by handing the payload to f, which returns a new Result."""
        return f(self.error)

    def to_option(self) -> NothingType:
        """Nothing; the payload is dropped."""
        from fallible.option import Nothing

        return Nothing

    def match[R](self, *, ok: Callable[[Any], R], err: Callable[[E], R]) -> R:  # noqa: ARG002
        return err(self.error)

    def to_json(self) -> NoReturn:
        """Raise like unwrap(); a failure has no JSON value."""
        _raise_error(self.error)


type Result[T, E = Exception] = Ok[T] | Err[E]


def is_result(value: object) -> TypeIs[Ok[Any] | Err[Any]]:
    """Return True if value is Ok or Err."""
    return isinstance(value, Ok | Err)


def collect[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Gather Ok values into one list, stopping at the first Err.

    Examples:
        >>> collect(Ok(n) for n in range(3))
        Ok(value=[0, 1, 2])
        >>> collect([Ok(1), Err('fail'), Err('later')])
        Err(error='fail')
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
