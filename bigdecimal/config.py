"""Process-wide configuration for BigDecimal construction and division.

The active configuration is a frozen DecimalConfig held in a single module
slot. Readers call get_config() and see whatever object was last written.
Writers go through set_config(), which swaps the reference under a lock;
set the configuration at startup, before decimals are built concurrently
elsewhere.

Initial values come from the environment:
- BIGDECIMAL_PRECISION: significant-digit cap (default: 5000)
- BIGDECIMAL_ALWAYS_TRUNCATE: truncate every new value (default: false)
- BIGDECIMAL_ALWAYS_NORMALIZE: normalize every new value (default: true)
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, replace

import structlog

logger = structlog.get_logger()

DEFAULT_PRECISION = 5000

_TRUE_VALUES = ("true", "1", "yes")


@dataclass(frozen=True)
class DecimalConfig:
    """Settings applied whenever a BigDecimal is constructed.

    Attributes:
        precision: Maximum significant digits kept when truncating. Also caps
            the number of digits division produces.
        always_truncate: If True, every new value is truncated to `precision`
            significant digits. Takes priority over always_normalize.
        always_normalize: If True (and always_truncate is False), trailing
            zeros of every new value are folded into the exponent.
    """

    precision: int = DEFAULT_PRECISION
    always_truncate: bool = False
    always_normalize: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise TypeError(f"precision must be int, got {type(self.precision).__name__}")
        if self.precision < 1:
            raise ValueError(f"precision must be positive, got {self.precision}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DecimalConfig:
        """Build a config from BIGDECIMAL_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ValueError: If BIGDECIMAL_PRECISION is not a positive integer
        """
        env = os.environ if environ is None else environ
        precision = int(env.get("BIGDECIMAL_PRECISION", str(DEFAULT_PRECISION)))
        always_truncate = env.get("BIGDECIMAL_ALWAYS_TRUNCATE", "false").lower() in _TRUE_VALUES
        always_normalize = env.get("BIGDECIMAL_ALWAYS_NORMALIZE", "true").lower() in _TRUE_VALUES
        return cls(
            precision=precision,
            always_truncate=always_truncate,
            always_normalize=always_normalize,
        )


# Library defaults, independent of the environment
DEFAULT_DECIMAL_CONFIG = DecimalConfig()

_config: DecimalConfig = DecimalConfig.from_env()
_lock = threading.Lock()


def get_config() -> DecimalConfig:
    """Return the active configuration."""
    return _config


def set_config(config: DecimalConfig | None = None, **changes: int | bool) -> DecimalConfig:
    """Replace the active configuration.

    Either pass a full DecimalConfig, or keyword changes applied on top of the
    active one (e.g. ``set_config(precision=50)``).

    Returns:
        The configuration that was active before the call
    """
    global _config
    with _lock:
        previous = _config
        new = config if config is not None else previous
        if changes:
            new = replace(new, **changes)
        _config = new
    logger.info(
        "decimal_config_updated",
        precision=new.precision,
        always_truncate=new.always_truncate,
        always_normalize=new.always_normalize,
    )
    return previous


@contextmanager
def config_override(**changes: int | bool) -> Iterator[DecimalConfig]:
    """Temporarily apply configuration changes for the duration of a block.

    Not isolated per thread: other threads observe the override too.
    """
    previous = set_config(**changes)
    try:
        yield get_config()
    finally:
        set_config(previous)
