"""Tests for fallible configuration."""

from fallible import FallibleConfig, get_config, init, reset_config


class TestFallibleConfig:
    """Tests for FallibleConfig defaults."""

    def test_defaults(self):
        """The dataclass defaults leave logging alone and absorb producer errors."""
        config = FallibleConfig()
        assert config.log_level is None
        assert config.json_logs is True
        assert config.absorb_producer_errors is True


class TestEnvironment:
    """Tests for FALLIBLE_* environment detection."""

    def test_get_config_reads_environment(self, monkeypatch):
        """get_config builds the configuration lazily from the environment."""
        monkeypatch.setenv('FALLIBLE_ABSORB_PRODUCER_ERRORS', 'false')
        monkeypatch.setenv('FALLIBLE_JSON_LOGS', 'no')
        config = get_config()
        assert config.absorb_producer_errors is False
        assert config.json_logs is False
        assert config.log_level is None

    def test_get_config_is_cached(self, monkeypatch):
        """The environment is read once until reset_config."""
        first = get_config()
        monkeypatch.setenv('FALLIBLE_ABSORB_PRODUCER_ERRORS', '0')
        assert get_config() is first
        reset_config()
        assert get_config().absorb_producer_errors is False

    def test_truthy_values(self, monkeypatch):
        """Truthy spellings are accepted case-insensitively."""
        for raw in ('1', 'TRUE', 'yes', 'On'):
            monkeypatch.setenv('FALLIBLE_JSON_LOGS', raw)
            reset_config()
            assert get_config().json_logs is True

    def test_unknown_value_uses_default(self, monkeypatch):
        """Unrecognized values fall back to the default."""
        monkeypatch.setenv('FALLIBLE_ABSORB_PRODUCER_ERRORS', 'maybe')
        assert get_config().absorb_producer_errors is True


class TestInit:
    """Tests for init()."""

    def test_explicit_arguments_win(self, monkeypatch):
        """Explicit arguments override the environment."""
        monkeypatch.setenv('FALLIBLE_ABSORB_PRODUCER_ERRORS', 'false')
        config = init(absorb_producer_errors=True)
        assert config.absorb_producer_errors is True
        assert get_config() is config

    def test_environment_fills_gaps(self, monkeypatch):
        """Arguments left as None come from the environment."""
        monkeypatch.setenv('FALLIBLE_ABSORB_PRODUCER_ERRORS', 'off')
        assert init().absorb_producer_errors is False

    def test_reset(self):
        """reset_config discards the configuration set by init."""
        init(absorb_producer_errors=False)
        reset_config()
        assert get_config().absorb_producer_errors is True
