"""
Exception classes for envelope toolkit operations.

Every engine operation either returns its result or raises exactly one of the
CryptoError subclasses below. Messages never include key material.
"""

from __future__ import annotations


class ToolkitError(Exception):
    """Base exception for all envelope toolkit operations."""

    pass


class ConfigError(ToolkitError):
    """Configuration value missing or invalid."""

    pass


class CryptoError(ToolkitError):
    """Cryptographic operation failed."""

    pass


class KeySizeError(CryptoError):
    """Supplied key length is not supported by the chosen cipher."""

    pass


class RandomnessError(CryptoError):
    """Secure random source is exhausted or unavailable."""

    pass


class EncodingError(CryptoError):
    """Envelope is shorter than its required prefix or is not valid hex."""

    pass


class AuthenticationError(CryptoError):
    """AEAD tag verification failed (tampered data or wrong key)."""

    pass


class PlaintextTooLargeError(CryptoError):
    """Plaintext exceeds the OAEP capacity of the public key."""

    pass


class DecryptionError(CryptoError):
    """Asymmetric decryption failed. The cause is deliberately not reported."""

    pass


class KeyGenerationError(CryptoError):
    """Key pair generation failed."""

    pass
