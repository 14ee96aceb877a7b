"""
Cache Value Objects

Immutable value objects for the cache domain: the absent-payload sentinel,
the persisted envelope and the freshness state of an entry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


# Defaults applied to new cache entries
DEFAULT_LIFETIME_SECONDS = 60
DEFAULT_FUZZ_FACTOR = 0.05

# Envelope field names
BEST_BEFORE_FIELD = "bestBefore"
STORED_AT_FIELD = "storedAt"
PAYLOAD_FIELD = "payload"
LEGACY_STORED_AT_FIELD = "storedTime"


class _Absent:
    """Marker type for "no data in the cache"."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_Absent":
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def is_absent(value: Any) -> bool:
    """Check whether a value is the absent sentinel (identity, never truthiness)."""
    return value is ABSENT


class CacheEntryState(str, Enum):
    """Freshness state of a cache entry."""

    ABSENT = "absent"
    FRESH = "fresh"
    STALE = "stale"


@dataclass(frozen=True)
class CacheEnvelope:
    """
    Persisted cache envelope.

    Always carries all three fields, even when best-before and stored-at
    are unset, so that a decode/encode round trip is lossless.
    """

    payload: Any = ABSENT
    best_before: Optional[int] = None
    stored_at: Optional[int] = None

    @staticmethod
    def is_envelope(data: Any) -> bool:
        """Check whether raw backend data is shaped like an envelope."""
        return isinstance(data, Mapping) and PAYLOAD_FIELD in data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CacheEnvelope":
        """Decode an envelope mapping, accepting the legacy stored-time field."""
        if not cls.is_envelope(data):
            raise ValueError("Cache envelope must contain a payload field")

        stored_at = data.get(STORED_AT_FIELD)
        if stored_at is None:
            stored_at = data.get(LEGACY_STORED_AT_FIELD)

        return cls(
            payload=data[PAYLOAD_FIELD],
            best_before=data.get(BEST_BEFORE_FIELD),
            stored_at=stored_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Encode to the three-field persisted structure."""
        return {
            BEST_BEFORE_FIELD: self.best_before,
            STORED_AT_FIELD: self.stored_at,
            PAYLOAD_FIELD: self.payload,
        }
