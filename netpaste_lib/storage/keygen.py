"""Short paste key generation.

Keys are drawn from a small lowercase alphabet so they are easy to type
after a `nc` upload. Collisions are resolved by redrawing against the set
of keys this generator has already handed out.
"""
import random
from typing import Optional, Set

KEY_ALPHABET = "abcdefghijklmnopqrstuvwxyz123456789"
KEY_LENGTH = 6


class KeyGenerationExhausted(RuntimeError):
    """Raised when a capped generator could not find a free key."""


class KeyGenerator:
    """Produce keys that were never produced before by the same instance.

    The generator is not synchronized; the owning store serializes access.
    With `max_attempts=None` the redraw loop has no upper bound, trading
    bounded latency for never returning a duplicate.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        length: int = KEY_LENGTH,
        alphabet: str = KEY_ALPHABET,
        max_attempts: Optional[int] = None,
    ):
        if length < 1:
            raise ValueError("key length must be positive")
        if not alphabet:
            raise ValueError("key alphabet must not be empty")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be positive or None")
        self._rng = rng or random.Random()
        self._length = length
        self._alphabet = alphabet
        self._max_attempts = max_attempts
        self._taken: Set[str] = set()

    def generate(self) -> str:
        attempts = 0
        while self._max_attempts is None or attempts < self._max_attempts:
            attempts += 1
            key = "".join(self._rng.choice(self._alphabet) for _ in range(self._length))
            if key not in self._taken:
                self._taken.add(key)
                return key
        raise KeyGenerationExhausted(
            f"No free key found after {self._max_attempts} attempts ({len(self._taken)} keys taken)"
        )

    def is_taken(self, key: str) -> bool:
        return key in self._taken

    def __len__(self) -> int:
        return len(self._taken)
