"""
Hex envelope formats.

This module provides:
- AeadEnvelope: nonce || ciphertext || tag, hex encoded
- LegacyEnvelope: iv || ciphertext, hex encoded

Wire format is lowercase hex with no separators. Decoding is strict:
whitespace, separators and odd lengths are rejected.
"""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from typing import Final

from .errors import EncodingError

NONCE_SIZE: Final[int] = 12  # 96 bits (standard for AES-GCM)
TAG_SIZE: Final[int] = 16  # 128 bits (authentication tag)
IV_SIZE: Final[int] = 16  # AES block size

NONCE_HEX_LEN: Final[int] = NONCE_SIZE * 2
IV_HEX_LEN: Final[int] = IV_SIZE * 2


def as_bytes(data: bytes | bytearray | str) -> bytes:
    """Return data as bytes, encoding str payloads as UTF-8."""
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise EncodingError(f"Data must be bytes or str, got {type(data).__name__}")


def decode_hex(text: str | bytes) -> bytes:
    """
    Decode a hex string.

    Raises:
        EncodingError: If text contains anything other than hex digit pairs
    """
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError, TypeError) as e:
        raise EncodingError(f"Invalid hex encoding: {e}") from e


def _split_prefix(text: str | bytes, prefix_len: int, what: str) -> tuple[bytes, bytes]:
    if not isinstance(text, (str, bytes)):
        raise EncodingError(f"Envelope must be str or bytes, got {type(text).__name__}")
    if len(text) < prefix_len:
        raise EncodingError(
            f"Envelope too short: expected at least {prefix_len} hex characters "
            f"for the {what}, got {len(text)}"
        )
    return decode_hex(text[:prefix_len]), decode_hex(text[prefix_len:])


@dataclass(frozen=True)
class AeadEnvelope:
    """
    AES-GCM envelope.

    The ciphertext includes the 16-byte authentication tag appended by AESGCM.
    """

    nonce: bytes  # 12 bytes
    ciphertext: bytes  # Ciphertext + 16-byte auth tag

    def to_hex(self) -> str:
        """Encode as hex(nonce) || hex(ciphertext || tag)."""
        return self.nonce.hex() + self.ciphertext.hex()

    @classmethod
    def from_hex(cls, text: str | bytes) -> AeadEnvelope:
        """
        Parse an AEAD envelope.

        The ciphertext part is not length-checked here; a part shorter than
        the tag fails authentication at decrypt time.

        Raises:
            EncodingError: If shorter than the nonce prefix or not valid hex
        """
        nonce, ciphertext = _split_prefix(text, NONCE_HEX_LEN, "nonce")
        return cls(nonce=nonce, ciphertext=ciphertext)


@dataclass(frozen=True)
class LegacyEnvelope:
    """AES-CFB envelope. Carries no authentication tag."""

    iv: bytes  # 16 bytes
    ciphertext: bytes

    def to_hex(self) -> str:
        """Encode as hex(iv) || hex(ciphertext)."""
        return self.iv.hex() + self.ciphertext.hex()

    @classmethod
    def from_hex(cls, text: str | bytes) -> LegacyEnvelope:
        """
        Parse a legacy envelope.

        Raises:
            EncodingError: If shorter than the IV prefix or not valid hex
        """
        iv, ciphertext = _split_prefix(text, IV_HEX_LEN, "IV")
        return cls(iv=iv, ciphertext=ciphertext)
