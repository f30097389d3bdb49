"""fallible: Result and Option types plus error interception for Python 3.13+.

Flat imports (preferred):
    from fallible import Result, Ok, Err, Option, Some, Nothing, option
    from fallible import catcher, default_catcher, catches, default_catches

Submodule imports (for organization):
    from fallible.option import Some, Nothing, option
    from fallible.result import Ok, Err
    from fallible.intercept import intercept, MatchAny, MatchType
    from fallible.decorators import catches
    from fallible.shapes import to_outcome
"""

# Configuration
from fallible._config import FallibleConfig, get_config, init, reset_config

# Logging
from fallible._logging import configure_logging, get_logger

# Decorators
from fallible.decorators import catches, catches_any, default_catches

# Errors
from fallible.errors import (
    EmptyOptionError,
    FallibleError,
    FlattenError,
    InvalidSomeError,
    OptionError,
    ThenableRejection,
    UnwrapError,
)

# Interception
from fallible.intercept import (
    ErrorFilter,
    MatchAny,
    MatchType,
    catcher,
    default_catcher,
    intercept,
)

# Tagged variants
from fallible.one_of import Variant, one_of

# Option types
from fallible.option import (
    Nothing,
    NothingType,
    Option,
    Some,
    from_nullable,
    is_option,
    option,
)

# Result types
from fallible.result import Err, Ok, Result, collect, is_result

# Serialization
from fallible.serialization import encode, json_default, to_builtins

# Try helper
from fallible.try_ import result_try

__all__ = [
    'EmptyOptionError',
    'Err',
    'ErrorFilter',
    'FallibleConfig',
    'FallibleError',
    'FlattenError',
    'InvalidSomeError',
    'MatchAny',
    'MatchType',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'OptionError',
    'Result',
    'Some',
    'ThenableRejection',
    'UnwrapError',
    'Variant',
    'catcher',
    'catches',
    'catches_any',
    'collect',
    'configure_logging',
    'default_catcher',
    'default_catches',
    'encode',
    'from_nullable',
    'get_config',
    'get_logger',
    'init',
    'intercept',
    'is_option',
    'is_result',
    'json_default',
    'one_of',
    'option',
    'reset_config',
    'result_try',
    'to_builtins',
]
