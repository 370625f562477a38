"""
Content checksums and keyed message authentication.

checksum: SHA-256, lowercase hex (64 chars)
mac:      HMAC-SHA256, lowercase hex (64 chars)

Both are pure functions of their inputs.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
from typing import BinaryIO

from .envelope import as_bytes
from .keys import SymmetricKey, key_bytes


def checksum(data: bytes | str) -> str:
    """Return the hex SHA-256 digest of data (str is encoded as UTF-8)."""
    return hashlib.sha256(as_bytes(data)).hexdigest()


def checksum_file(file: BinaryIO | str, chunk_size: int = 8192) -> str:
    """
    Stream a file through SHA-256.

    Args:
        file: File path or binary file-like object
        chunk_size: Read chunk size

    Returns:
        Same hex digest checksum() gives for the file's bytes
    """
    hasher = hashlib.sha256()

    if isinstance(file, str):
        with open(file, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                hasher.update(chunk)
    else:
        for chunk in iter(lambda: file.read(chunk_size), b""):
            hasher.update(chunk)

    return hasher.hexdigest()


def _mac_digest(key: SymmetricKey, data: bytes | str) -> bytes:
    return hmac.new(key_bytes(key), as_bytes(data), hashlib.sha256).digest()


def mac(key: SymmetricKey, data: bytes | str) -> str:
    """Return the hex HMAC-SHA256 tag of data under key."""
    return _mac_digest(key, data).hex()


def verify_mac(key: SymmetricKey, data: bytes | str, tag: str) -> bool:
    """
    Check a hex HMAC-SHA256 tag.

    The comparison is constant-time in the tag content. A tag that is not
    valid hex never verifies.
    """
    try:
        expected_tag = binascii.unhexlify(tag)
    except (binascii.Error, ValueError, TypeError):
        return False

    return hmac.compare_digest(_mac_digest(key, data), expected_tag)
