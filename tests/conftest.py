"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest

from bigdecimal import DEFAULT_DECIMAL_CONFIG, DecimalConfig, get_config, set_config


@pytest.fixture(autouse=True)
def default_config() -> Iterator[DecimalConfig]:
    """Run every test under the library defaults, whatever the environment says."""
    previous = set_config(DEFAULT_DECIMAL_CONFIG)
    yield get_config()
    set_config(previous)


@pytest.fixture
def precision_10() -> Iterator[DecimalConfig]:
    """Precision capped at 10 significant digits."""
    set_config(precision=10)
    yield get_config()


@pytest.fixture
def truncating_10() -> Iterator[DecimalConfig]:
    """Every new value truncated to 10 significant digits."""
    set_config(precision=10, always_truncate=True)
    yield get_config()


@pytest.fixture
def raw_values() -> Iterator[DecimalConfig]:
    """Neither truncation nor normalization on construction."""
    set_config(always_truncate=False, always_normalize=False)
    yield get_config()
