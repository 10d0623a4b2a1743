"""Paste store interface definitions.

Defines the PasteStore abstract class shared by both transports. A store
owns key minting: callers hand over content and get back the key it was
filed under, they never choose keys themselves.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional


class PasteStore(ABC):
    """Abstract paste store.

    Implementations must be thread-safe: the ingestion server calls `set`
    from one thread per connection while HTTP workers call `get`.
    """

    @abstractmethod
    def set(self, content: bytes) -> str:
        """Store `content` under a freshly minted key and return the key.

        Minting and insertion happen as one atomic step, so no caller
        can observe a key without its content.
        """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the content stored under `key`, or None.

        Unknown, empty or malformed keys are a normal miss, not an error.
        """

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored pastes."""

    def __len__(self) -> int:
        return self.count()
