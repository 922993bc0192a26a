"""Pytest configuration for path tracer tests.

Provides seeded and scripted random sources so sampling code can be tested
deterministically.
"""

import random

import pytest


class ScriptedRng:
    """Stands in for random.Random, returning a fixed script of values.

    `uniform(a, b)` and `random()` both consume the next scripted value, which
    lets tests force a particular random vector.
    """

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def _next(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value

    def uniform(self, a, b):
        return self._next()

    def random(self):
        return self._next()


@pytest.fixture
def rng():
    """A seeded random source."""
    return random.Random(1234)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRng instances."""
    return ScriptedRng

