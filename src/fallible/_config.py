"""Library configuration: FallibleConfig, init() and environment detection."""

from __future__ import annotations

import os
from dataclasses import dataclass

from fallible._logging import configure_logging, get_logger

__all__ = [
    'FallibleConfig',
    'get_config',
    'init',
    'reset_config',
]

_FALSY = frozenset({'0', 'false', 'no', 'off'})
_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})

_logger = get_logger(__name__)


@dataclass(frozen=True)
class FallibleConfig:
    """Configuration for fallible.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Render logs as JSON when logging is configured.
        absorb_producer_errors: When True, an exception raised by a producer
            passed to option() is logged and turned into Nothing. When False
            it propagates to the caller.
    """

    log_level: str | None = None
    json_logs: bool = True
    absorb_producer_errors: bool = True


# Global configuration (set by init() or lazily from the environment)
_config: FallibleConfig | None = None


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.environ.get(name, '').strip().lower()
    if not raw:
        return default
    if raw in _FALSY:
        return False
    if raw in _TRUTHY:
        return True
    _logger.warning('config.unknown_flag', variable=name, value=raw, default=default)
    return default


def _config_from_env() -> FallibleConfig:
    """Build a configuration from FALLIBLE_* environment variables."""
    return FallibleConfig(
        log_level=os.environ.get('FALLIBLE_LOG_LEVEL') or None,
        json_logs=_env_flag('FALLIBLE_JSON_LOGS', True),
        absorb_producer_errors=_env_flag('FALLIBLE_ABSORB_PRODUCER_ERRORS', True),
    )


def init(
    log_level: str | None = None,
    *,
    json_logs: bool | None = None,
    absorb_producer_errors: bool | None = None,
) -> FallibleConfig:
    """Initialize fallible with the given configuration.

    Arguments left as None fall back to the FALLIBLE_* environment variables,
    then to the FallibleConfig defaults.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_logs: Emit JSON (True) or console (False) logs.
        absorb_producer_errors: See FallibleConfig.

    Returns:
        The FallibleConfig that was set.

    Example:
        ```python
        import fallible

        fallible.init(log_level='DEBUG', absorb_producer_errors=False)
        ```
    """
    global _config  # noqa: PLW0603

    env = _config_from_env()
    _config = FallibleConfig(
        log_level=log_level if log_level is not None else env.log_level,
        json_logs=json_logs if json_logs is not None else env.json_logs,
        absorb_producer_errors=(
            absorb_producer_errors
            if absorb_producer_errors is not None
            else env.absorb_producer_errors
        ),
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_logs)

    return _config


def get_config() -> FallibleConfig:
    """Get the current configuration.

    Unlike init(), reading the configuration never touches logging setup.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = _config_from_env()
    return _config


def reset_config() -> None:
    """Forget the current configuration so the next read uses the environment."""
    global _config  # noqa: PLW0603

    _config = None
