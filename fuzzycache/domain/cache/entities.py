"""
Cache Domain Entities

Core domain entity for cache management. A CacheEntry wraps one cached
value together with its freshness metadata and owns the lifetime fuzzing
and stale-while-revalidate rules.
"""

import math
import random
import time
from numbers import Real
from typing import Any, Callable, Optional

from .value_objects import (
    ABSENT,
    DEFAULT_FUZZ_FACTOR,
    DEFAULT_LIFETIME_SECONDS,
    CacheEntryState,
    CacheEnvelope,
)

_default_rng = random.Random()


def _validate_fuzz_factor(factor: Any) -> float:
    if isinstance(factor, bool) or not isinstance(factor, Real):
        raise ValueError("Fuzz factor must be a number")
    if not 0 <= factor <= 1:
        raise ValueError("Fuzz factor must be between 0 and 1")
    return float(factor)


def _validate_seconds(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"{name} must be a number of seconds")
    if value < 0:
        raise ValueError(f"{name} cannot be negative")
    if not math.isfinite(value) or value != int(value):
        raise ValueError(f"{name} must be a whole number of seconds")
    return int(value)


def fuzz(duration: int, factor: float = DEFAULT_FUZZ_FACTOR, rng: Optional[random.Random] = None) -> int:
    """
    Randomly perturb a duration by up to ``ceil(duration * factor)``.

    A spread is drawn uniformly from ``[0, ceil(duration * factor)]`` and
    then, with equal probability, subtracted from or added to the duration.

    Args:
        duration: Duration in seconds
        factor: Fractional jitter between 0 and 1
        rng: Random source, the module-level generator when omitted

    Returns:
        Fuzzed duration in seconds
    """
    if isinstance(duration, bool) or not isinstance(duration, Real):
        raise ValueError("Duration must be a number of seconds")
    if duration < 0:
        raise ValueError("Duration cannot be negative")
    factor = _validate_fuzz_factor(factor)
    if rng is None:
        rng = _default_rng

    spread = math.ceil(duration * factor)
    change = rng.randint(0, spread)
    if rng.randint(0, 1):
        return duration - change
    return duration + change


class CacheEntry:
    """
    Cache entry entity.

    Represents an item either read from, or about to be written to, the cache.
    The payload is ``ABSENT`` when the cache holds no data for the key.
    """

    fuzz = staticmethod(fuzz)

    def __init__(
        self,
        key: str,
        data: Any = ABSENT,
        *,
        lifetime_seconds: int = DEFAULT_LIFETIME_SECONDS,
        fuzz_factor: float = DEFAULT_FUZZ_FACTOR,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Build an entry from the key and whatever the backend returned.

        ``data`` is either an envelope mapping (anything with a ``payload``
        field) or a raw payload, which covers values cached before the
        envelope format existed.
        """
        self._key = str(key)
        self._payload: Any = ABSENT
        self._lifetime_seconds = _validate_seconds(lifetime_seconds, "Lifetime")
        self._best_before_seconds: Optional[int] = None
        self._stored_at: Optional[int] = None
        self._fuzz_factor = _validate_fuzz_factor(fuzz_factor)
        self._rng = rng
        self._clock = clock or time.time

        if CacheEnvelope.is_envelope(data):
            envelope = CacheEnvelope.from_mapping(data)
            self.set_payload(envelope.payload)
            self.set_best_before_seconds(envelope.best_before)
            self.set_stored_at(envelope.stored_at)
        else:
            self.set_payload(data)

    def __repr__(self) -> str:
        return (
            f"CacheEntry(key={self._key!r}, payload={self._payload!r}, "
            f"lifetime_seconds={self._lifetime_seconds}, "
            f"best_before_seconds={self._best_before_seconds}, "
            f"stored_at={self._stored_at})"
        )

    # Validity

    def is_expired(self) -> bool:
        """Check if the cache holds no data for this entry."""
        return self._payload is ABSENT

    def is_valid(self) -> bool:
        """Check if the cache holds data for this entry."""
        return not self.is_expired()

    def is_stale(self, now: Optional[float] = None) -> bool:
        """
        Check if the entry should be revalidated.

        A stale entry is still usable, but a fresh value should be computed
        soon. Without both a best-before window and a stored time there is
        nothing to measure, so staleness falls back to validity.
        """
        if self._best_before_seconds is None or self._stored_at is None:
            return self._payload is ABSENT

        stale_at = self._stored_at + self._best_before_seconds
        if now is None:
            now = self._clock()
        return stale_at <= now

    def get_state(self, now: Optional[float] = None) -> CacheEntryState:
        """Get current freshness state of the entry."""
        if self.is_expired():
            return CacheEntryState.ABSENT
        if self.is_stale(now):
            return CacheEntryState.STALE
        return CacheEntryState.FRESH

    # Payload and envelope

    def get_payload(self) -> Any:
        return self._payload

    def set_payload(self, payload: Any) -> "CacheEntry":
        self._payload = payload
        return self

    def get_envelope(self) -> dict:
        """Get the unfuzzed three-field envelope persisted to the backend."""
        return CacheEnvelope(
            payload=self._payload,
            best_before=self._best_before_seconds,
            stored_at=self._stored_at,
        ).to_dict()

    def get_key(self) -> str:
        return self._key

    def set_key(self, key: str) -> "CacheEntry":
        self._key = str(key)
        return self

    # Lifetimes

    def get_lifetime_seconds(self) -> int:
        """
        Get the lifetime in seconds.

        The lifetime is only fuzzed when there is no best-before window;
        otherwise the best-before value is the one jittered and the
        lifetime is reported exactly.
        """
        if self._best_before_seconds is None:
            return fuzz(self._lifetime_seconds, self._fuzz_factor, self._rng)
        return self._lifetime_seconds

    def set_lifetime_seconds(self, seconds: int) -> "CacheEntry":
        self._lifetime_seconds = _validate_seconds(seconds, "Lifetime")
        return self

    def get_best_before_seconds(self) -> Optional[int]:
        """Get the fuzzed best-before window, or None when unset."""
        if self._best_before_seconds is None:
            return None
        return fuzz(self._best_before_seconds, self._fuzz_factor, self._rng)

    def set_best_before_seconds(self, seconds: Optional[int]) -> "CacheEntry":
        if seconds is not None:
            seconds = _validate_seconds(seconds, "Best before")
        self._best_before_seconds = seconds
        return self

    def get_fuzz_factor(self) -> float:
        return self._fuzz_factor

    def set_fuzz_factor(self, factor: float) -> "CacheEntry":
        self._fuzz_factor = _validate_fuzz_factor(factor)
        return self

    # Stored time

    def get_stored_at(self) -> Optional[int]:
        return self._stored_at

    def set_stored_at(self, timestamp: Optional[int]) -> "CacheEntry":
        self._stored_at = int(timestamp) if timestamp is not None else None
        return self
