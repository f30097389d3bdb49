"""Test doubles shared across fallible tests."""

from __future__ import annotations

import asyncio
from typing import Any


class ExtendedError(Exception):
    """Subclass used to exercise type filters."""


class OtherError(Exception):
    """Unrelated exception type used to exercise filter mismatches."""


class GenericThenable:
    """Thenable exposing only ``then(on_ok, on_err)``; settles on the next loop turn."""

    def __init__(self, value: Any = None, *, reason: Any = None, fail: bool = False) -> None:
        self.value = value
        self.reason = reason
        self.fail = fail
        self.subscriptions = 0

    def then(self, on_ok, on_err=None):
        self.subscriptions += 1
        loop = asyncio.get_running_loop()
        if self.fail:
            loop.call_soon(on_err, self.reason)
        else:
            loop.call_soon(on_ok, self.value)
        return self


class PlatformThenable:
    """Pseudo-future exposing ``then(on_ok)`` and ``catch(on_err)`` separately."""

    def __init__(self, value: Any = None, *, reason: Any = None, fail: bool = False) -> None:
        self.value = value
        self.reason = reason
        self.fail = fail
        self.then_calls = 0
        self.catch_calls = 0

    def then(self, on_ok, on_err=None):
        self.then_calls += 1
        if not self.fail:
            asyncio.get_running_loop().call_soon(on_ok, self.value)
        return self

    def catch(self, on_err):
        self.catch_calls += 1
        if self.fail:
            asyncio.get_running_loop().call_soon(on_err, self.reason)
        return self
