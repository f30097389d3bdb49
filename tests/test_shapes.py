"""Tests for value-shape predicates and AsyncOutcome classification."""

import asyncio
import concurrent.futures
import threading

import pytest

from fallible import ThenableRejection
from fallible.shapes import (
    Immediate,
    Pending,
    ThenableBridge,
    is_native_future,
    is_pending,
    is_platform_error,
    is_platform_thenable,
    is_thenable,
    rejection_reason,
    to_outcome,
)
from tests.helpers import GenericThenable, PlatformThenable


class TestPredicates:
    """Tests for the is_* predicates."""

    async def test_native_future(self):
        """Coroutines, asyncio futures and concurrent futures are native."""

        async def work():
            return 1

        coro = work()
        assert is_native_future(coro)
        await coro

        future = asyncio.get_running_loop().create_future()
        assert is_native_future(future)
        assert is_native_future(concurrent.futures.Future())
        assert not is_native_future(1)

    def test_thenable(self):
        """Objects with a callable then are thenables."""
        assert is_thenable(GenericThenable())
        assert is_thenable(PlatformThenable())
        assert not is_thenable(object())
        assert not is_thenable(None)

    def test_thenable_class_is_not_thenable(self):
        """A class defining then is not a pending value itself."""
        assert not is_thenable(GenericThenable)

    def test_non_callable_then(self):
        """A then attribute that is not callable does not count."""

        class Data:
            then = 'later'

        assert not is_thenable(Data())

    def test_platform_thenable(self):
        """Platform thenables expose catch as well."""
        assert is_platform_thenable(PlatformThenable())
        assert not is_platform_thenable(GenericThenable())

    def test_platform_error_mapping(self):
        """Mappings with numeric errorCode and str message match."""
        assert is_platform_error({'errorCode': 404, 'message': 'not found'})
        assert is_platform_error({'errorCode': 1.5, 'message': ''})
        assert not is_platform_error({'errorCode': '404', 'message': 'x'})
        assert not is_platform_error({'errorCode': True, 'message': 'x'})
        assert not is_platform_error({'message': 'x'})

    def test_platform_error_object(self):
        """Objects exposing the same attributes match."""

        class PlatformFailure(Exception):
            def __init__(self):
                super().__init__('denied')
                self.errorCode = 403  # noqa: N815
                self.message = 'denied'

        assert is_platform_error(PlatformFailure())
        assert not is_platform_error(ValueError('x'))

    def test_rejection_reason(self):
        """ThenableRejection is unwrapped, other exceptions are kept."""
        error = ValueError('x')
        assert rejection_reason(error) is error
        assert rejection_reason(ThenableRejection('boom')) == 'boom'


class TestToOutcome:
    """Tests for to_outcome classification."""

    def test_plain_value_is_immediate(self):
        """Plain values are Immediate."""
        outcome = to_outcome(5)
        assert outcome == Immediate(5)
        assert not is_pending(outcome)

    def test_none_is_immediate(self):
        """None is a plain value."""
        assert to_outcome(None) == Immediate(None)

    async def test_coroutine_is_pending(self):
        """Coroutines are Pending and awaited as-is."""

        async def work():
            return 3

        outcome = to_outcome(work())
        assert is_pending(outcome)
        assert await outcome.awaitable == 3

    async def test_generic_thenable_is_bridged(self):
        """Generic thenables are bridged through then(ok, err)."""
        thenable = GenericThenable('done')
        outcome = to_outcome(thenable)
        assert isinstance(outcome, Pending)
        assert isinstance(outcome.awaitable, ThenableBridge)
        assert await outcome.awaitable == 'done'
        assert thenable.subscriptions == 1

    async def test_platform_thenable_uses_catch(self):
        """Platform thenables are bridged through then() and catch()."""
        thenable = PlatformThenable(reason='nope', fail=True)
        outcome = to_outcome(thenable)
        with pytest.raises(ThenableRejection) as info:
            await outcome.awaitable
        assert info.value.reason == 'nope'
        assert thenable.then_calls == 1
        assert thenable.catch_calls == 1

    async def test_concurrent_future_is_pending(self):
        """concurrent.futures.Future results are awaited on the loop."""
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            outcome = to_outcome(pool.submit(lambda: 11))
            assert is_pending(outcome)
            assert await outcome.awaitable == 11


class TestThenableBridge:
    """Tests for ThenableBridge settlement rules."""

    async def test_exception_reason_is_raised(self):
        """Exception reasons are raised unchanged."""
        error = KeyError('k')
        with pytest.raises(KeyError) as info:
            await ThenableBridge(GenericThenable(reason=error, fail=True))
        assert info.value is error

    async def test_first_settlement_wins(self):
        """Later resolve/reject calls are ignored."""

        class Fickle:
            def then(self, on_ok, on_err):
                on_ok('first')
                on_err(ValueError('late'))
                on_ok('second')

        assert await ThenableBridge(Fickle()) == 'first'

    async def test_settles_from_another_thread(self):
        """Callbacks may fire from a foreign thread."""

        class Threaded:
            def then(self, on_ok, on_err):
                threading.Timer(0.01, on_ok, args=('from thread',)).start()

        assert await ThenableBridge(Threaded()) == 'from thread'

    async def test_then_raising_rejects(self):
        """An exception raised by then() itself surfaces on await."""

        class Broken:
            def then(self, on_ok, on_err):
                raise RuntimeError('then failed')

        with pytest.raises(RuntimeError, match='then failed'):
            await ThenableBridge(Broken())
