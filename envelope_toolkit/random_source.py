"""
Random byte sources used for keys, nonces and IVs.

This module provides:
- RandomSource: Abstract interface every engine draws randomness from
- SystemRandomSource: OS CSPRNG (default, production)
- SeededRandomSource: Reproducible generator for golden-output tests
- read_random: Read exactly n bytes, translating failures to RandomnessError
"""

from __future__ import annotations

import random
import secrets
import threading
from abc import ABC, abstractmethod
from typing import Optional

from .errors import RandomnessError


class RandomSource(ABC):
    """
    Abstract source of random bytes.

    Implementations must be safe to call from several threads at once.
    """

    @abstractmethod
    def read(self, n: int) -> bytes:
        """Return exactly n random bytes."""
        ...


class SystemRandomSource(RandomSource):
    """Operating system CSPRNG via the secrets module."""

    __slots__ = ()

    def read(self, n: int) -> bytes:
        return secrets.token_bytes(n)

    def __repr__(self) -> str:
        return "SystemRandomSource()"


class SeededRandomSource(RandomSource):
    """
    Deterministic byte generator seeded by the caller.

    Produces the same byte stream for the same seed, which makes envelopes
    reproducible in tests. NOT cryptographically secure: never use it to
    protect real data.
    """

    def __init__(self, seed: int | bytes | str) -> None:
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def read(self, n: int) -> bytes:
        with self._lock:
            return self._rng.randbytes(n)

    def __repr__(self) -> str:
        return "SeededRandomSource([SEED REDACTED])"


_DEFAULT_SOURCE = SystemRandomSource()


def default_random_source() -> RandomSource:
    """Return the process-wide system random source."""
    return _DEFAULT_SOURCE


def read_random(source: Optional[RandomSource], n: int) -> bytes:
    """
    Read exactly n bytes from source (system source if None).

    Raises:
        RandomnessError: If the source fails or returns the wrong length
    """
    if source is None:
        source = _DEFAULT_SOURCE

    try:
        data = source.read(n)
    except Exception as e:
        raise RandomnessError(f"Random source failed: {e}") from e

    if not isinstance(data, (bytes, bytearray)) or len(data) != n:
        raise RandomnessError(
            f"Random source returned short read: expected {n} bytes"
        )
    return bytes(data)
