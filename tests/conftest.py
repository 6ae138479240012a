"""
Shared pytest fixtures.
"""

import pytest


class FixedRandom:
    """Random source returning a fixed value in [0, 1)."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_random():
    """Factory for random sources pinned to one value."""
    return FixedRandom


@pytest.fixture
def draws(fixed_random):
    """Evenly spaced random sources covering [0, 1)."""
    def _draws(n: int):
        return [fixed_random(i / n) for i in range(n)]
    return _draws
