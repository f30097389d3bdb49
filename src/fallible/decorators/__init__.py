"""Decorators: @catches, @default_catches and @catches_any."""

from fallible.decorators.catches import catches, catches_any, default_catches

__all__ = [
    'catches',
    'catches_any',
    'default_catches',
]
