"""Paste storage package for netpaste."""
from typing import Any, Optional

from .base import PasteStore
from .keygen import KEY_ALPHABET, KEY_LENGTH, KeyGenerationExhausted, KeyGenerator
from .memory_backend import MemoryPasteStore

__all__ = [
    "PasteStore",
    "MemoryPasteStore",
    "KeyGenerator",
    "KeyGenerationExhausted",
    "KEY_ALPHABET",
    "KEY_LENGTH",
    "create_store",
]


def create_store(backend: str = "memory", key_max_attempts: Optional[int] = None, **options: Any) -> PasteStore:
    """Build a paste store for `backend`.

    Only the in-memory backend exists; persistence is out of scope. Extra
    options are passed to the KeyGenerator (e.g. a seeded `rng` in tests).
    """
    if backend != "memory":
        raise ValueError(f"Unknown paste store backend: {backend!r}")
    generator = KeyGenerator(max_attempts=key_max_attempts, **options)
    return MemoryPasteStore(key_generator=generator)
