"""Tagged variants for ad hoc labeled unions.

Example:
    ```python
    loaded = one_of('success', 'Data loaded')
    failed = one_of('error', ValueError('Failed to load data'))

    failed.match(
        success=lambda text: f'ok: {text}',
        error=lambda err: f'failed: {err}',
    )
    # 'failed: Failed to load data'
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import msgspec

__all__ = ['Variant', 'one_of']


class Variant[T](msgspec.Struct, frozen=True):
    """One labeled case of a union.

    Attributes:
        type: The label identifying the case.
        value: The value carried by the case.
    """

    type: str
    value: T

    def match[R](self, **handlers: Callable[[Any], R]) -> R:
        """Call the handler named after this variant's label.

        Raises:
            KeyError: If no handler is given for the label.
        """
        try:
            handler = handlers[self.type]
        except KeyError:
            raise KeyError(f'No handler for variant {self.type!r}') from None
        return handler(self.value)

    def is_(self, label: str) -> bool:
        """Return True if this variant carries the given label."""
        return self.type == label

    def map[U](self, f: Callable[[T], U]) -> Variant[U]:
        """Transform the value, keeping the label."""
        return Variant(self.type, f(self.value))

    def to_builtins(self) -> dict[str, Any]:
        """Return ``{'type': label, 'value': value}``."""
        return {'type': self.type, 'value': self.value}


def one_of[T](label: str, value: T) -> Variant[T]:
    """Create a variant of a labeled union."""
    return Variant(label, value)
