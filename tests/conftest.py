# tests/conftest.py

import pytest

from ulid_workers.metrics import reset_counters


def _zero_bytes(n: int) -> bytes:
    return bytes(n)


@pytest.fixture(autouse=True)
def _reset_metrics():
    reset_counters()
    yield
    reset_counters()


@pytest.fixture
def zero_random():
    """Random source that always returns zero bytes."""
    return _zero_bytes


@pytest.fixture
def frozen_clock():
    """Clock stuck at the ULID README example time."""
    return lambda: 1469918176385
