"""Interception: catcher, default_catcher and the filters they use."""

from fallible.intercept.core import Handler, catcher, default_catcher, intercept
from fallible.intercept.filters import ErrorFilter, MatchAny, MatchType, as_filter, matches

__all__ = [
    'ErrorFilter',
    'Handler',
    'MatchAny',
    'MatchType',
    'as_filter',
    'catcher',
    'default_catcher',
    'intercept',
    'matches',
]
