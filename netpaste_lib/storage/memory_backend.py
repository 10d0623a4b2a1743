"""Memory-backed paste store

Pastes live in a plain dict `{<key>: <bytes>}` for the lifetime of the
process. One lock guards both the dict and the key generator's taken-set.
"""
import logging
from threading import Lock
from typing import Dict, Optional

from .base import PasteStore
from .keygen import KeyGenerator

logger = logging.getLogger(__name__)


class MemoryPasteStore(PasteStore):
    def __init__(self, key_generator: Optional[KeyGenerator] = None):
        # Lock, not RLock: no method re-enters while holding it.
        self._lock = Lock()
        self._pastes: Dict[str, bytes] = {}
        self._keys = key_generator if key_generator is not None else KeyGenerator()

    def set(self, content: bytes) -> str:
        content = bytes(content)
        with self._lock:
            key = self._keys.generate()
            self._pastes[key] = content
        logger.debug("Stored %d bytes under key %s", len(content), key)
        return key

    def get(self, key: str) -> Optional[bytes]:
        if not isinstance(key, str):
            return None
        with self._lock:
            return self._pastes.get(key)

    def count(self) -> int:
        with self._lock:
            return len(self._pastes)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._pastes
