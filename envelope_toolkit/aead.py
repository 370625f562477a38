"""
AES-GCM authenticated encryption with hex envelopes.

Envelope format: hex(nonce[12]) || hex(ciphertext || tag[16]), lowercase.

A fresh nonce is drawn from the cipher's RandomSource for every call and is
never caller-supplied. Any change to nonce, ciphertext or tag, or a wrong key,
fails with AuthenticationError.
"""

from __future__ import annotations

import logging
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .envelope import NONCE_SIZE, TAG_SIZE, AeadEnvelope, as_bytes
from .errors import AuthenticationError, CryptoError, EncodingError
from .keys import SymmetricKey, aes_key_bytes
from .random_source import RandomSource, read_random

logger = logging.getLogger(__name__)


class AesGcmCipher:
    """
    AES-GCM authenticated encryption (128/192/256-bit keys).

    Usage:
        cipher = AesGcmCipher()
        envelope = cipher.encrypt(b"Hello, world!", key)
        plaintext = cipher.decrypt(envelope, key)

    Pass a SeededRandomSource to get reproducible nonces in tests.
    """

    __slots__ = ("_random_source",)

    def __init__(self, random_source: Optional[RandomSource] = None) -> None:
        self._random_source = random_source

    def seal(self, plaintext: bytes | str, key: SymmetricKey) -> AeadEnvelope:
        """
        Encrypt plaintext and return the parsed envelope.

        Raises:
            KeySizeError: If key is not 16, 24 or 32 bytes
            RandomnessError: If nonce generation fails
        """
        raw_key = aes_key_bytes(key)
        data = as_bytes(plaintext)
        nonce = read_random(self._random_source, NONCE_SIZE)

        try:
            ciphertext = AESGCM(raw_key).encrypt(nonce, data, None)
        except Exception as e:
            raise CryptoError(f"Encryption error: {e}") from e

        logger.debug("AES-GCM seal: key_bits=%d plaintext_len=%d", len(raw_key) * 8, len(data))
        return AeadEnvelope(nonce=nonce, ciphertext=ciphertext)

    def open(self, envelope: AeadEnvelope, key: SymmetricKey) -> bytes:
        """
        Verify and decrypt a parsed envelope.

        Raises:
            KeySizeError: If key is not 16, 24 or 32 bytes
            AuthenticationError: If the tag does not verify
        """
        raw_key = aes_key_bytes(key)

        if len(envelope.nonce) != NONCE_SIZE or len(envelope.ciphertext) < TAG_SIZE:
            raise AuthenticationError("Message authentication failed")

        try:
            plaintext = AESGCM(raw_key).decrypt(envelope.nonce, envelope.ciphertext, None)
        except InvalidTag:
            # Generic error to prevent oracle attacks
            raise AuthenticationError("Message authentication failed") from None

        logger.debug("AES-GCM open: key_bits=%d plaintext_len=%d", len(raw_key) * 8, len(plaintext))
        return plaintext

    def encrypt(self, plaintext: bytes | str, key: SymmetricKey) -> str:
        """
        Encrypt plaintext with AES-GCM.

        Args:
            plaintext: Data to encrypt (str is encoded as UTF-8, may be empty)
            key: 16, 24 or 32 byte key

        Returns:
            Lowercase hex envelope: nonce || ciphertext || tag

        Raises:
            KeySizeError: If key size is invalid
            RandomnessError: If nonce generation fails
        """
        return self.seal(plaintext, key).to_hex()

    def decrypt(self, envelope: str, key: SymmetricKey) -> bytes:
        """
        Decrypt a hex envelope produced by encrypt.

        Raises:
            KeySizeError: If key size is invalid
            EncodingError: If envelope is under 24 hex characters or not hex
            AuthenticationError: If the tag does not verify
        """
        aes_key_bytes(key)
        return self.open(AeadEnvelope.from_hex(envelope), key)

    def decrypt_text(self, envelope: str, key: SymmetricKey) -> str:
        """Decrypt and decode the plaintext as UTF-8."""
        plaintext = self.decrypt(envelope, key)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"Plaintext is not valid UTF-8: {e}") from e


_default_cipher = AesGcmCipher()


def encrypt(plaintext: bytes | str, key: SymmetricKey) -> str:
    """Encrypt with the system random source. See AesGcmCipher.encrypt."""
    return _default_cipher.encrypt(plaintext, key)


def decrypt(envelope: str, key: SymmetricKey) -> bytes:
    """See AesGcmCipher.decrypt."""
    return _default_cipher.decrypt(envelope, key)
