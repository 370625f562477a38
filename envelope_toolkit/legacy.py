"""
Legacy AES-CFB stream encryption (UNAUTHENTICATED).

Envelope format: hex(iv[16]) || hex(ciphertext), lowercase.

Kept for throughput comparison against AesGcmCipher only. There is no
authentication tag: a modified envelope decrypts to modified plaintext
without any error. Use aead.AesGcmCipher for anything that needs integrity.
"""

from __future__ import annotations

import logging
from typing import Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

try:
    from cryptography.hazmat.decrepit.ciphers.modes import CFB
except ImportError:  # cryptography < 46 keeps CFB in primitives
    from cryptography.hazmat.primitives.ciphers.modes import CFB

from .envelope import IV_SIZE, LegacyEnvelope, as_bytes
from .keys import SymmetricKey, aes_key_bytes
from .random_source import RandomSource, read_random

logger = logging.getLogger(__name__)


class AesCfbCipher:
    """
    AES-CFB keystream cipher with a random IV per call.

    Same call shape as AesGcmCipher, weaker contract: no tamper detection.
    IV reuse under one key is not detected either.
    """

    __slots__ = ("_random_source",)

    def __init__(self, random_source: Optional[RandomSource] = None) -> None:
        self._random_source = random_source

    def encrypt(self, plaintext: bytes | str, key: SymmetricKey) -> str:
        """
        Encrypt plaintext with AES-CFB.

        Returns:
            Lowercase hex envelope: iv || ciphertext (ciphertext is the
            same length as the plaintext)

        Raises:
            KeySizeError: If key is not 16, 24 or 32 bytes
            RandomnessError: If IV generation fails
        """
        raw_key = aes_key_bytes(key)
        data = as_bytes(plaintext)
        iv = read_random(self._random_source, IV_SIZE)

        encryptor = Cipher(algorithms.AES(raw_key), CFB(iv)).encryptor()
        ciphertext = encryptor.update(data) + encryptor.finalize()

        logger.debug("AES-CFB encrypt: key_bits=%d plaintext_len=%d", len(raw_key) * 8, len(data))
        return LegacyEnvelope(iv=iv, ciphertext=ciphertext).to_hex()

    def decrypt(self, envelope: str, key: SymmetricKey) -> bytes:
        """
        Decrypt a hex envelope produced by encrypt.

        No integrity check is performed.

        Raises:
            KeySizeError: If key is not 16, 24 or 32 bytes
            EncodingError: If envelope is under 32 hex characters or not hex
        """
        raw_key = aes_key_bytes(key)
        parsed = LegacyEnvelope.from_hex(envelope)

        decryptor = Cipher(algorithms.AES(raw_key), CFB(parsed.iv)).decryptor()
        plaintext = decryptor.update(parsed.ciphertext) + decryptor.finalize()

        logger.debug("AES-CFB decrypt: key_bits=%d plaintext_len=%d", len(raw_key) * 8, len(plaintext))
        return plaintext


_default_cipher = AesCfbCipher()


def encrypt(plaintext: bytes | str, key: SymmetricKey) -> str:
    """Encrypt with the system random source. See AesCfbCipher.encrypt."""
    return _default_cipher.encrypt(plaintext, key)


def decrypt(envelope: str, key: SymmetricKey) -> bytes:
    """See AesCfbCipher.decrypt."""
    return _default_cipher.decrypt(envelope, key)
