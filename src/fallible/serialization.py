"""JSON serialization with transparent Options.

Some serializes as the value it holds and Nothing as null, wherever they sit
in an object graph. The round trip is lossy: null decodes as None and cannot
be told apart from a literal None.

Example:
    ```python
    import json

    from fallible import Nothing, option
    from fallible.serialization import encode, json_default

    json.dumps({'x': Nothing}, default=json_default)  # '{"x": null}'
    encode({'x': option(5)})  # b'{"x":5}'
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import msgspec

from fallible.one_of import Variant
from fallible.option import NothingType, Some
from fallible.result import Err, Ok

__all__ = ['encode', 'json_default', 'to_builtins']

_encoder = msgspec.json.Encoder()


def json_default(obj: Any) -> Any:
    """``default=`` hook for json.dumps.

    Raises:
        TypeError: For objects it does not know, as json.dumps expects.
    """
    if isinstance(obj, Some | NothingType | Ok | Err):
        return obj.to_json()
    if isinstance(obj, Variant):
        return obj.to_builtins()
    if isinstance(obj, msgspec.Struct):
        return {field: getattr(obj, field) for field in obj.__struct_fields__}
    raise TypeError(f'Object of type {type(obj).__name__} is not JSON serializable')


def _unwrap(obj: Any) -> Any:
    if isinstance(obj, Some | NothingType | Ok | Err):
        return _unwrap(obj.to_json())
    if isinstance(obj, Variant):
        return _unwrap(obj.to_builtins())
    if isinstance(obj, Mapping):
        return {key: _unwrap(value) for key, value in obj.items()}
    if isinstance(obj, list | tuple | set | frozenset):
        return [_unwrap(item) for item in obj]
    if isinstance(obj, msgspec.Struct):
        return {
            field: _unwrap(getattr(obj, field)) for field in obj.__struct_fields__
        }
    return obj


def to_builtins(obj: Any) -> Any:
    """Convert obj to builtin types, replacing Options by their JSON value."""
    return msgspec.to_builtins(_unwrap(obj))


def encode(obj: Any) -> bytes:
    """Encode obj as JSON bytes with Options made transparent."""
    return _encoder.encode(to_builtins(obj))
