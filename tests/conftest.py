"""
Main pytest configuration for fuzzycache tests.

Fixtures for deterministic randomness, a controllable clock and backends.
"""

import os
import random

import pytest

# Set test environment variables before importing package modules
os.environ["ENVIRONMENT"] = "test"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "DEBUG"

from fuzzycache.infrastructure.backends.memory import InMemoryBackend
from fuzzycache.services.cache.cache_store import CacheStore


class FrozenClock:
    """Clock returning a fixed epoch time until advanced."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def rng():
    """Seeded random source for reproducible fuzzing."""
    return random.Random(1234)


@pytest.fixture
def clock():
    """Controllable clock."""
    return FrozenClock()


@pytest.fixture
def memory_backend(clock):
    """In-memory backend sharing the test clock."""
    return InMemoryBackend(clock=clock)


@pytest.fixture
def cache_store(memory_backend, rng, clock):
    """Cache store over the in-memory backend with no prefix."""
    return CacheStore(memory_backend, rng=rng, clock=clock)
