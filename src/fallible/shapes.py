"""Value-shape predicates and the AsyncOutcome variant.

Every value returned by an intercepted callable is classified once by
to_outcome() into either Immediate (a plain value) or Pending (something that
has to be awaited). Native awaitables, concurrent futures and thenables are
all adapted to a plain awaitable here, so the recovery logic only ever
branches on the variant.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
from collections.abc import Awaitable, Generator, Mapping
from typing import Any, TypeIs

import msgspec

from fallible.errors import ThenableRejection

__all__ = [
    'AsyncOutcome',
    'Immediate',
    'Pending',
    'ThenableBridge',
    'is_native_future',
    'is_pending',
    'is_platform_error',
    'is_platform_thenable',
    'is_thenable',
    'rejection_reason',
    'to_outcome',
]


# --- Predicates ---


def is_native_future(obj: object) -> bool:
    """Return True for awaitables and concurrent.futures.Future instances."""
    return inspect.isawaitable(obj) or isinstance(obj, concurrent.futures.Future)


def is_thenable(obj: object) -> bool:
    """Return True if obj exposes a callable ``then``.

    Classes are excluded: a class defining ``then`` is not itself a pending
    computation.
    """
    if obj is None or isinstance(obj, type):
        return False
    return callable(getattr(obj, 'then', None))


def is_platform_thenable(obj: object) -> bool:
    """Return True if obj is a thenable that also exposes a callable ``catch``."""
    return is_thenable(obj) and callable(getattr(obj, 'catch', None))


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_platform_error(obj: object) -> bool:
    """Return True for platform error objects: numeric errorCode plus str message.

    Both mappings (``{'errorCode': 5, 'message': '...'}``) and objects exposing
    the same attributes are recognized.
    """
    if isinstance(obj, Mapping):
        return _is_number(obj.get('errorCode')) and isinstance(obj.get('message'), str)
    return _is_number(getattr(obj, 'errorCode', None)) and isinstance(
        getattr(obj, 'message', None), str
    )


def rejection_reason(exc: BaseException) -> Any:
    """Return what a computation actually failed with.

    Thenable rejections with non-exception reasons travel as ThenableRejection;
    this unwraps them. Any other exception is returned unchanged.
    """
    if isinstance(exc, ThenableRejection):
        return exc.reason
    return exc


# --- Thenable bridge ---


def _settle(future: asyncio.Future[Any], value: Any, reason: Any, rejected: bool) -> None:
    if future.done():
        return
    if not rejected:
        future.set_result(value)
    elif isinstance(reason, BaseException) and not isinstance(reason, StopIteration):
        future.set_exception(reason)
    else:
        future.set_exception(ThenableRejection(reason))


class ThenableBridge:
    """Awaitable adapter over a thenable.

    Platform thenables (``then`` and ``catch``) are bridged with
    ``then(resolve)`` and ``catch(reject)``; generic thenables with
    ``then(resolve, reject)``. Only the first settlement counts, and the
    callbacks may be invoked from any thread.
    """

    __slots__ = ('_platform', '_thenable')

    def __init__(self, thenable: Any, *, platform: bool = False) -> None:
        self._thenable = thenable
        self._platform = platform

    def __repr__(self) -> str:
        kind = 'platform' if self._platform else 'generic'
        return f'ThenableBridge({self._thenable!r}, {kind})'

    def _subscribe(self, future: asyncio.Future[Any]) -> None:
        loop = future.get_loop()

        def resolve(value: Any = None, *_: Any) -> None:
            loop.call_soon_threadsafe(_settle, future, value, None, False)

        def reject(reason: Any = None, *_: Any) -> None:
            loop.call_soon_threadsafe(_settle, future, None, reason, True)

        if self._platform:
            self._thenable.then(resolve)
            self._thenable.catch(reject)
        else:
            self._thenable.then(resolve, reject)

    def __await__(self) -> Generator[Any, None, Any]:
        future = asyncio.get_running_loop().create_future()
        self._subscribe(future)
        result = yield from future.__await__()
        # resolving with a thenable or awaitable adopts its outcome
        while is_thenable(result) or is_native_future(result):
            if result is self._thenable:
                raise TypeError('Thenable resolved with itself')
            match to_outcome(result):
                case Pending(awaitable=awaitable):
                    result = yield from _as_generator(awaitable)
                case Immediate(value=value):
                    result = value
        return result


def _as_generator(awaitable: Awaitable[Any]) -> Generator[Any, None, Any]:
    async def wait() -> Any:
        return await awaitable

    return wait().__await__()


async def _await_concurrent(future: concurrent.futures.Future[Any]) -> Any:
    return await asyncio.wrap_future(future)


# --- AsyncOutcome ---


class Immediate[T](msgspec.Struct, frozen=True, gc=False):
    """A value that is already available."""

    value: T


class Pending[T](msgspec.Struct, frozen=True):
    """A computation that settles later; await ``awaitable`` to observe it."""

    awaitable: Awaitable[T]


type AsyncOutcome[T] = Immediate[T] | Pending[T]


def is_pending(outcome: AsyncOutcome[Any]) -> TypeIs[Pending[Any]]:
    """Return True if the outcome still has to be awaited."""
    return isinstance(outcome, Pending)


def to_outcome(obj: Any) -> AsyncOutcome[Any]:
    """Classify a returned value into exactly one AsyncOutcome.

    Order: native future, platform thenable, generic thenable, plain value.
    """
    if isinstance(obj, concurrent.futures.Future):
        return Pending(_await_concurrent(obj))
    if inspect.isawaitable(obj):
        return Pending(obj)
    if is_platform_thenable(obj):
        return Pending(ThenableBridge(obj, platform=True))
    if is_thenable(obj):
        return Pending(ThenableBridge(obj))
    return Immediate(obj)
