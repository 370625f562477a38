"""
RSA-OAEP public-key encryption for small payloads.

OAEP uses SHA-256 for both the hash and MGF1, with an empty label.
Ciphertext is raw bytes, exactly the modulus length (256 bytes for a
2048-bit key). Callers base64-encode it when they need text.

Decryption failures are reported as a single DecryptionError with a fixed
message and no chained cause, whatever went wrong, so that callers cannot
be turned into a padding oracle.
"""

from __future__ import annotations

import logging
from typing import Final, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .envelope import as_bytes
from .errors import CryptoError, DecryptionError, PlaintextTooLargeError
from .keys import AsymmetricKeyPair

logger = logging.getLogger(__name__)

HASH_SIZE: Final[int] = 32  # SHA-256 digest length

PublicKeyLike = Union[rsa.RSAPublicKey, AsymmetricKeyPair]
PrivateKeyLike = Union[rsa.RSAPrivateKey, AsymmetricKeyPair]


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def _public(key: PublicKeyLike) -> rsa.RSAPublicKey:
    if isinstance(key, AsymmetricKeyPair):
        return key.public_key
    if isinstance(key, rsa.RSAPublicKey):
        return key
    raise CryptoError(f"Expected an RSA public key, got {type(key).__name__}")


def _private(key: PrivateKeyLike) -> rsa.RSAPrivateKey:
    if isinstance(key, AsymmetricKeyPair):
        return key.private_key
    if isinstance(key, rsa.RSAPrivateKey):
        return key
    raise CryptoError(f"Expected an RSA private key, got {type(key).__name__}")


def modulus_size(key: rsa.RSAPublicKey | rsa.RSAPrivateKey) -> int:
    """Modulus length in bytes."""
    return (key.key_size + 7) // 8


def max_plaintext_size(public_key: PublicKeyLike) -> int:
    """Largest plaintext OAEP-SHA256 can carry: k - 2*hLen - 2 (190 for 2048-bit)."""
    return modulus_size(_public(public_key)) - 2 * HASH_SIZE - 2


class RsaOaepCipher:
    """RSA-OAEP-SHA256 encryption. Stateless; one instance can be shared."""

    __slots__ = ()

    def encrypt(self, public_key: PublicKeyLike, plaintext: bytes | str) -> bytes:
        """
        Encrypt plaintext to the holder of public_key.

        Raises:
            PlaintextTooLargeError: If plaintext exceeds max_plaintext_size
        """
        key = _public(public_key)
        data = as_bytes(plaintext)

        limit = max_plaintext_size(key)
        if len(data) > limit:
            raise PlaintextTooLargeError(
                f"Plaintext too large for RSA-OAEP: {len(data)} bytes exceeds {limit}"
            )

        try:
            ciphertext = key.encrypt(data, _oaep())
        except ValueError as e:
            raise CryptoError(f"RSA encryption error: {e}") from e

        logger.debug("RSA-OAEP encrypt: modulus_bits=%d plaintext_len=%d", key.key_size, len(data))
        return ciphertext

    def decrypt(self, private_key: PrivateKeyLike, ciphertext: bytes) -> bytes:
        """
        Decrypt an OAEP ciphertext.

        Raises:
            DecryptionError: On any failure (the cause is never reported)
        """
        key = _private(private_key)

        if not isinstance(ciphertext, (bytes, bytearray)) or len(ciphertext) != modulus_size(key):
            raise DecryptionError("Decryption failed")

        try:
            return key.decrypt(bytes(ciphertext), _oaep())
        except ValueError:
            raise DecryptionError("Decryption failed") from None

    def decrypt_text(self, private_key: PrivateKeyLike, ciphertext: bytes) -> str:
        """Decrypt and decode the plaintext as UTF-8."""
        plaintext = self.decrypt(private_key, ciphertext)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError:
            raise DecryptionError("Decryption failed") from None


_default_cipher = RsaOaepCipher()


def encrypt(public_key: PublicKeyLike, plaintext: bytes | str) -> bytes:
    """See RsaOaepCipher.encrypt."""
    return _default_cipher.encrypt(public_key, plaintext)


def decrypt(private_key: PrivateKeyLike, ciphertext: bytes) -> bytes:
    """See RsaOaepCipher.decrypt."""
    return _default_cipher.decrypt(private_key, ciphertext)
