"""Tests for AES-GCM envelopes."""

from __future__ import annotations

import pytest

from envelope_toolkit import aead
from envelope_toolkit import (
    AeadEnvelope,
    AesGcmCipher,
    AuthenticationError,
    EncodingError,
    KeySizeError,
    RandomSource,
    RandomnessError,
    SecureKey,
    SeededRandomSource,
)


class FixedRandomSource(RandomSource):
    """Returns the same bytes on every read."""

    def __init__(self, value: bytes) -> None:
        self.value = value

    def read(self, n: int) -> bytes:
        return self.value[:n]


class FailingRandomSource(RandomSource):
    def read(self, n: int) -> bytes:
        raise OSError("entropy source unavailable")


def flip_bit(envelope: str, bit: int) -> str:
    raw = bytearray(bytes.fromhex(envelope))
    raw[bit // 8] ^= 1 << (bit % 8)
    return raw.hex()


class TestRoundTrip:
    def test_hello_world_zero_key(self, zero_key):
        """Scenario A: 32 zero bytes, "Hello, world!"."""
        envelope = aead.encrypt("Hello, world!", zero_key)
        assert aead.decrypt(envelope, zero_key) == b"Hello, world!"

    def test_all_key_sizes(self, aes_key):
        plaintext = b"\x00\x01binary\xffdata" * 10
        assert aead.decrypt(aead.encrypt(plaintext, aes_key), aes_key) == plaintext

    def test_empty_plaintext(self, zero_key):
        envelope = aead.encrypt(b"", zero_key)
        # nonce (24 hex) + tag (32 hex), no ciphertext body
        assert len(envelope) == 24 + 32
        assert aead.decrypt(envelope, zero_key) == b""

    def test_decrypt_text(self, zero_key):
        cipher = AesGcmCipher()
        envelope = cipher.encrypt("héllo wörld", zero_key)
        assert cipher.decrypt_text(envelope, zero_key) == "héllo wörld"

    def test_decrypt_text_rejects_non_utf8(self, zero_key):
        cipher = AesGcmCipher()
        envelope = cipher.encrypt(b"\xff\xfe", zero_key)
        with pytest.raises(EncodingError):
            cipher.decrypt_text(envelope, zero_key)

    def test_secure_key_accepted(self):
        key = SecureKey.generate(32)
        assert aead.decrypt(aead.encrypt(b"data", key), key) == b"data"

    def test_large_plaintext(self, zero_key):
        plaintext = bytes(range(256)) * 4096
        assert aead.decrypt(aead.encrypt(plaintext, zero_key), zero_key) == plaintext


class TestEnvelopeFormat:
    def test_lowercase_hex_layout(self, zero_key):
        envelope = aead.encrypt(b"Hello, world!", zero_key)
        assert envelope == envelope.lower()
        assert len(envelope) == 2 * (12 + 13 + 16)
        bytes.fromhex(envelope)

    def test_fresh_nonce_per_call(self, zero_key):
        first = aead.encrypt(b"same", zero_key)
        second = aead.encrypt(b"same", zero_key)
        assert first != second
        assert first[:24] != second[:24]

    def test_nist_vector_empty_plaintext(self):
        """GCM test case 1: zero key, zero IV, empty plaintext."""
        cipher = AesGcmCipher(FixedRandomSource(bytes(12)))
        envelope = cipher.encrypt(b"", bytes(16))
        assert envelope == "000000000000000000000000" + "58e2fccefa7e3061367f1d57a4e7455a"

    def test_nist_vector_zero_block(self):
        """GCM test case 2: zero key, zero IV, one zero block."""
        cipher = AesGcmCipher(FixedRandomSource(bytes(12)))
        envelope = cipher.encrypt(bytes(16), bytes(16))
        assert envelope == (
            "000000000000000000000000"
            "0388dace60b6a392f328c2b971b2fe78"
            "ab6e47d42cec13bdf53a67b21257bddf"
        )
        assert cipher.decrypt(envelope, bytes(16)) == bytes(16)

    def test_seeded_source_is_reproducible(self, zero_key):
        first = AesGcmCipher(SeededRandomSource(42)).encrypt(b"golden", zero_key)
        second = AesGcmCipher(SeededRandomSource(42)).encrypt(b"golden", zero_key)
        assert first == second
        assert first[:24] == SeededRandomSource(42).read(12).hex()

    def test_seal_open(self, zero_key):
        cipher = AesGcmCipher()
        sealed = cipher.seal(b"parsed", zero_key)
        assert isinstance(sealed, AeadEnvelope)
        assert len(sealed.nonce) == 12
        assert cipher.open(AeadEnvelope.from_hex(sealed.to_hex()), zero_key) == b"parsed"


class TestTamperDetection:
    def test_every_bit_flip_fails(self, zero_key):
        envelope = aead.encrypt(b"Hello, world!", zero_key)
        for bit in range(len(envelope) * 4):
            with pytest.raises(AuthenticationError):
                aead.decrypt(flip_bit(envelope, bit), zero_key)

    def test_wrong_key_fails(self, zero_key):
        envelope = aead.encrypt(b"Hello, world!", zero_key)
        with pytest.raises(AuthenticationError):
            aead.decrypt(envelope, b"\x01" * 32)

    def test_truncated_tag_fails(self, zero_key):
        envelope = aead.encrypt(b"Hello, world!", zero_key)
        with pytest.raises(AuthenticationError):
            aead.decrypt(envelope[:-2], zero_key)

    def test_nonce_only_fails_authentication(self, zero_key):
        with pytest.raises(AuthenticationError):
            aead.decrypt("00" * 12, zero_key)

    def test_error_message_is_generic(self, zero_key):
        envelope = aead.encrypt(b"secret", zero_key)
        with pytest.raises(AuthenticationError) as exc_info:
            aead.decrypt(envelope, b"\x02" * 32)
        assert str(exc_info.value) == "Message authentication failed"


class TestErrors:
    def test_short_envelope(self, zero_key):
        """Scenario B: 10-character envelope."""
        with pytest.raises(EncodingError):
            aead.decrypt("0123456789", zero_key)

    def test_invalid_hex(self, zero_key):
        envelope = aead.encrypt(b"Hello", zero_key)
        with pytest.raises(EncodingError):
            aead.decrypt("zz" + envelope[2:], zero_key)

    def test_odd_length_hex(self, zero_key):
        envelope = aead.encrypt(b"Hello", zero_key)
        with pytest.raises(EncodingError):
            aead.decrypt(envelope + "a", zero_key)

    def test_separators_rejected(self, zero_key):
        envelope = aead.encrypt(b"Hello", zero_key)
        with pytest.raises(EncodingError):
            aead.decrypt(envelope[:24] + " " + envelope[24:], zero_key)

    @pytest.mark.parametrize("size", [0, 8, 15, 17, 31, 33, 64])
    def test_bad_key_size_encrypt(self, size):
        with pytest.raises(KeySizeError):
            aead.encrypt(b"data", bytes(size))

    def test_bad_key_size_decrypt(self, zero_key):
        envelope = aead.encrypt(b"data", zero_key)
        with pytest.raises(KeySizeError):
            aead.decrypt(envelope, bytes(20))

    def test_key_must_be_bytes(self):
        with pytest.raises(KeySizeError):
            aead.encrypt(b"data", "0" * 32)

    def test_random_source_failure(self, zero_key):
        with pytest.raises(RandomnessError):
            AesGcmCipher(FailingRandomSource()).encrypt(b"data", zero_key)

    def test_random_source_short_read(self, zero_key):
        with pytest.raises(RandomnessError):
            AesGcmCipher(FixedRandomSource(bytes(4))).encrypt(b"data", zero_key)
