"""
Envelope Toolkit

Small cryptographic envelope functions. Every call takes its key from the
caller and returns a transportable encoding.

Quick Start
-----------
```python
from envelope_toolkit import aead, asymmetric, integrity
from envelope_toolkit import generate_key_pair, generate_symmetric_key

key = generate_symmetric_key(32)
envelope = aead.encrypt(b"Hello, world!", key)   # hex(nonce) || hex(ct || tag)
assert aead.decrypt(envelope, key) == b"Hello, world!"

pair = generate_key_pair()
ciphertext = asymmetric.encrypt(pair.public_key, b"Hello, world!")
assert asymmetric.decrypt(pair.private_key, ciphertext) == b"Hello, world!"

tag = integrity.mac(key, b"important message")
assert integrity.verify_mac(key, b"important message", tag)
```

Key Features
------------
- **AES-GCM**: Authenticated encryption, hex envelopes, fresh nonce per call
- **RSA-OAEP-SHA256**: Public-key encryption of small payloads
- **SHA-256 / HMAC-SHA256**: Checksums and constant-time MAC verification
- **AES-CFB (legacy)**: Unauthenticated, kept for throughput comparison only
- **Injectable randomness**: Seeded sources for reproducible test envelopes
"""

__version__ = "0.1.0"

# =============================================================================
# Engine Modules
# =============================================================================

from . import aead, asymmetric, integrity, legacy

# =============================================================================
# Crypto Exports
# =============================================================================

from .aead import AesGcmCipher
from .asymmetric import RsaOaepCipher, max_plaintext_size
from .envelope import IV_SIZE, NONCE_SIZE, TAG_SIZE, AeadEnvelope, LegacyEnvelope
from .integrity import checksum, checksum_file, mac, verify_mac
from .keys import (
    AES_KEY_SIZES,
    AsymmetricKeyPair,
    SecureKey,
    generate_key_pair,
    generate_key_pair_async,
    generate_symmetric_key,
    load_public_key,
)
from .legacy import AesCfbCipher
from .random_source import RandomSource, SeededRandomSource, SystemRandomSource

# =============================================================================
# Error Exports
# =============================================================================

from .errors import (
    AuthenticationError,
    ConfigError,
    CryptoError,
    DecryptionError,
    EncodingError,
    KeyGenerationError,
    KeySizeError,
    PlaintextTooLargeError,
    RandomnessError,
    ToolkitError,
)

# =============================================================================
# Configuration & Logging
# =============================================================================

from .config import ToolkitSettings
from .log import RedactingFilter, configure_logging

# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Version
    "__version__",
    # Engine modules
    "aead",
    "asymmetric",
    "integrity",
    "legacy",
    # Crypto
    "AES_KEY_SIZES",
    "NONCE_SIZE",
    "TAG_SIZE",
    "IV_SIZE",
    "AesGcmCipher",
    "AesCfbCipher",
    "RsaOaepCipher",
    "AeadEnvelope",
    "LegacyEnvelope",
    "AsymmetricKeyPair",
    "SecureKey",
    "generate_symmetric_key",
    "generate_key_pair",
    "generate_key_pair_async",
    "load_public_key",
    "max_plaintext_size",
    "checksum",
    "checksum_file",
    "mac",
    "verify_mac",
    "RandomSource",
    "SystemRandomSource",
    "SeededRandomSource",
    # Errors
    "ToolkitError",
    "ConfigError",
    "CryptoError",
    "KeySizeError",
    "RandomnessError",
    "EncodingError",
    "AuthenticationError",
    "PlaintextTooLargeError",
    "DecryptionError",
    "KeyGenerationError",
    # Configuration & logging
    "ToolkitSettings",
    "configure_logging",
    "RedactingFilter",
]
