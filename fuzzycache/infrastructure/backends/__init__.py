"""Process-local cache backends."""

from .memory import InMemoryBackend

__all__ = ["InMemoryBackend"]
