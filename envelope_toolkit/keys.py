"""
Key provider: symmetric keys and RSA key pairs.

This module provides:
- SecureKey: Redacted key wrapper with best-effort zeroization
- AsymmetricKeyPair: RSA private/public key pair
- generate_symmetric_key: Random key bytes from a RandomSource
- generate_key_pair / generate_key_pair_async: RSA key pair generation
- load_public_key: Parse a PEM public key shared by a peer

The toolkit never stores keys. Private keys have no serializer here; public
keys may be exported as PEM and shared freely.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Final, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import EncodingError, KeyGenerationError, KeySizeError
from .random_source import RandomSource, read_random

logger = logging.getLogger(__name__)

AES_128_KEY_SIZE: Final[int] = 16
AES_192_KEY_SIZE: Final[int] = 24
AES_256_KEY_SIZE: Final[int] = 32
AES_KEY_SIZES: Final[tuple[int, ...]] = (AES_128_KEY_SIZE, AES_192_KEY_SIZE, AES_256_KEY_SIZE)

RSA_MODULUS_BITS: Final[int] = 2048
RSA_PUBLIC_EXPONENT: Final[int] = 65537


class SecureKey:
    """
    Secure key wrapper with automatic memory cleanup on deletion.

    Uses bytearray internally for mutable zeroing in __del__.
    Note: Python's garbage collector doesn't guarantee immediate cleanup,
    so this is best-effort zeroization.
    """

    __slots__ = ("_bytes",)

    def __init__(self, key_bytes: bytes | bytearray) -> None:
        if not isinstance(key_bytes, (bytes, bytearray)):
            raise KeySizeError("Key must be bytes or bytearray")
        self._bytes = bytearray(key_bytes)

    @classmethod
    def generate(
        cls,
        size_bytes: int = AES_256_KEY_SIZE,
        random_source: Optional[RandomSource] = None,
    ) -> SecureKey:
        """Generate a random key of size_bytes."""
        return cls(generate_symmetric_key(size_bytes, random_source))

    def as_bytes(self) -> bytes:
        """Return key as immutable bytes."""
        return bytes(self._bytes)

    def __len__(self) -> int:
        return len(self._bytes)

    def __repr__(self) -> str:
        """Redacted representation to prevent accidental key disclosure."""
        return "SecureKey([REDACTED])"

    def __del__(self) -> None:
        """Zero memory on deletion (best-effort)."""
        if hasattr(self, "_bytes"):
            for i in range(len(self._bytes)):
                self._bytes[i] = 0


SymmetricKey = Union[bytes, bytearray, SecureKey]


def key_bytes(key: SymmetricKey) -> bytes:
    """Return raw bytes for any accepted symmetric key type."""
    if isinstance(key, SecureKey):
        return key.as_bytes()
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise KeySizeError(f"Key must be bytes, bytearray or SecureKey, got {type(key).__name__}")


def aes_key_bytes(key: SymmetricKey) -> bytes:
    """
    Return raw key bytes after checking the length is a valid AES key size.

    Raises:
        KeySizeError: If the key is not 16, 24 or 32 bytes
    """
    raw = key_bytes(key)
    if len(raw) not in AES_KEY_SIZES:
        raise KeySizeError(
            f"Invalid key size: expected one of {AES_KEY_SIZES}, got {len(raw)}"
        )
    return raw


def generate_symmetric_key(
    size_bytes: int = AES_256_KEY_SIZE,
    random_source: Optional[RandomSource] = None,
) -> bytes:
    """
    Generate a random symmetric key.

    Args:
        size_bytes: Key length in bytes (any positive size; AES needs 16/24/32)
        random_source: Source of randomness (system CSPRNG if None)

    Returns:
        size_bytes random bytes

    Raises:
        KeySizeError: If size_bytes is not a positive integer
        RandomnessError: If the random source fails
    """
    if isinstance(size_bytes, bool) or not isinstance(size_bytes, int) or size_bytes <= 0:
        raise KeySizeError(f"Key size must be a positive integer, got {size_bytes!r}")
    return read_random(random_source, size_bytes)


@dataclass(frozen=True)
class AsymmetricKeyPair:
    """RSA key pair. The private key is never serialized by the toolkit."""

    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey

    @property
    def modulus_bits(self) -> int:
        return self.public_key.key_size

    def public_key_pem(self) -> bytes:
        """Export the public key as SubjectPublicKeyInfo PEM."""
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def __repr__(self) -> str:
        return f"AsymmetricKeyPair(modulus_bits={self.modulus_bits}, private_key=[REDACTED])"


def generate_key_pair(modulus_bits: int = RSA_MODULUS_BITS) -> AsymmetricKeyPair:
    """
    Generate an RSA key pair.

    Prime search makes this noticeably slower than every other operation and
    its duration is not bounded. Keep it off latency-sensitive paths (see
    generate_key_pair_async).

    Raises:
        KeyGenerationError: If the backend rejects the size or fails
    """
    logger.debug("Generating RSA key pair: modulus_bits=%s", modulus_bits)
    try:
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=modulus_bits,
        )
    except Exception as e:
        raise KeyGenerationError(f"RSA key generation failed: {e}") from e

    return AsymmetricKeyPair(private_key=private_key, public_key=private_key.public_key())


async def generate_key_pair_async(modulus_bits: int = RSA_MODULUS_BITS) -> AsymmetricKeyPair:
    """Run generate_key_pair in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(generate_key_pair, modulus_bits)


def load_public_key(pem: bytes | str) -> rsa.RSAPublicKey:
    """
    Load an RSA public key from PEM.

    Raises:
        EncodingError: If the PEM is malformed or not an RSA public key
    """
    if isinstance(pem, str):
        pem = pem.encode("ascii", errors="replace")

    try:
        public_key = serialization.load_pem_public_key(pem)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise EncodingError(f"Invalid public key PEM: {e}") from e

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise EncodingError("Public key is not an RSA key")
    return public_key
