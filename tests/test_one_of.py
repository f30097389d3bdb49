"""Tests for one_of tagged variants."""

import pytest

from fallible import Variant, one_of


class TestOneOf:
    """Tests for Variant construction and dispatch."""

    def test_fields(self):
        """one_of stores the label and the value."""
        loaded = one_of('success', 'Data loaded')
        assert loaded.type == 'success'
        assert loaded.value == 'Data loaded'
        assert isinstance(loaded, Variant)

    def test_match_dispatches_on_label(self):
        """match calls the handler named after the label."""
        failed = one_of('error', ValueError('Failed to load data'))
        result = failed.match(
            success=lambda text: f'ok: {text}',
            error=lambda err: f'failed: {err}',
        )
        assert result == 'failed: Failed to load data'

    def test_missing_handler(self):
        """A label without a handler raises KeyError."""
        with pytest.raises(KeyError, match='loading'):
            one_of('loading', None).match(success=lambda _: 1)

    def test_is(self):
        """is_ compares labels."""
        assert one_of('a', 1).is_('a')
        assert not one_of('a', 1).is_('b')

    def test_map_keeps_label(self):
        """map transforms only the value."""
        assert one_of('count', 2).map(lambda x: x + 1) == one_of('count', 3)

    def test_immutable(self):
        """Variants are frozen."""
        with pytest.raises(AttributeError):
            one_of('a', 1).value = 2  # type: ignore[misc]

    def test_structural_matching(self):
        """Variants work with the match statement."""
        match one_of('success', 5):
            case Variant(type='success', value=value):
                assert value == 5
            case _:
                pytest.fail('no match')

    def test_to_builtins(self):
        """to_builtins exposes type and value."""
        assert one_of('a', [1]).to_builtins() == {'type': 'a', 'value': [1]}
