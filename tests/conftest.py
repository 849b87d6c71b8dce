"""Shared fixtures."""

import pytest

from interval_lab.parallel import ParallelConfig, set_parallel_config


@pytest.fixture(autouse=True)
def reset_parallel_config():
    """Restore the process-wide parallel default after every test."""
    yield
    set_parallel_config(ParallelConfig())


@pytest.fixture
def always_parallel() -> ParallelConfig:
    """Configuration that forks for any complexity."""
    return ParallelConfig(threshold=0, enabled=True, max_workers=4)


@pytest.fixture
def always_sequential() -> ParallelConfig:
    """Configuration that never forks."""
    return ParallelConfig(enabled=False)
