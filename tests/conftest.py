"""
Pytest configuration and fixtures for envelope toolkit tests.
"""

from __future__ import annotations

import pytest

from envelope_toolkit import (
    AsymmetricKeyPair,
    SeededRandomSource,
    generate_key_pair,
    generate_symmetric_key,
)


@pytest.fixture
def zero_key() -> bytes:
    """32 zero-valued bytes."""
    return bytes(32)


@pytest.fixture(params=[16, 24, 32], ids=["aes128", "aes192", "aes256"])
def aes_key(request: pytest.FixtureRequest) -> bytes:
    """A random key for each supported AES key size."""
    return generate_symmetric_key(request.param)


@pytest.fixture
def seeded_source() -> SeededRandomSource:
    """Reproducible random source."""
    return SeededRandomSource(1234)


@pytest.fixture(scope="session")
def key_pair() -> AsymmetricKeyPair:
    """2048-bit RSA key pair, generated once per session (prime search is slow)."""
    return generate_key_pair(2048)


@pytest.fixture(scope="session")
def other_key_pair() -> AsymmetricKeyPair:
    """A second, unrelated 2048-bit RSA key pair."""
    return generate_key_pair(2048)
