"""
Security tests for ShaVault.

Tests specifically for:
- Internal consistency faults (framing and HMAC invariants)
- Invalid input types
- Avalanche behaviour
"""

import random

import pytest

import shavault.core_crypto
import shavault.core_crypto.hmac_sha256 as hmac_module
import shavault.core_crypto.sha256 as sha256_module
from shavault.core_crypto.compression import compress_block, process_message_block
from shavault.core_crypto.engine import Sha256
from shavault.core_crypto.errors import InternalConsistencyError, FramingError, HmacError
from shavault.core_crypto.hmac_sha256 import hmac_sha256, normalize_key
from shavault.core_crypto.sha256 import init_state, process_all_blocks, sha256


class TestFramingFaults:
    """Malformed buffers fail fast with FramingError."""

    def test_unpadded_buffer_rejected(self):
        """A buffer that is not a multiple of 64 bytes is refused."""
        with pytest.raises(FramingError):
            process_all_blocks(b"\x00" * 63)

    def test_short_block_rejected(self):
        """Compression requires exactly 64 bytes."""
        with pytest.raises(FramingError):
            compress_block(init_state(), b"\x00" * 63)

    def test_long_block_rejected(self):
        """Compression does not silently ignore extra bytes."""
        with pytest.raises(FramingError):
            compress_block(init_state(), b"\x00" * 65)

    def test_block_read_past_end_rejected(self):
        """Reading a block that would run past the buffer end is refused."""
        with pytest.raises(FramingError):
            process_message_block(init_state(), b"\x00" * 64, 1)
        with pytest.raises(FramingError):
            process_message_block(init_state(), b"\x00" * 128, 128)

    def test_framing_error_is_internal_fault(self):
        """Framing faults are internal faults, not input errors."""
        assert issubclass(FramingError, InternalConsistencyError)
        assert not issubclass(FramingError, ValueError)


class TestHmacFaults:
    """A broken hash primitive is detected by the HMAC invariants."""

    def test_short_inner_hash_detected(self, monkeypatch):
        """Inner hash of the wrong size raises HmacError."""
        monkeypatch.setattr(hmac_module, "sha256", lambda data: b"\x00" * 31)
        with pytest.raises(HmacError):
            hmac_sha256(b"key", b"message")

    def test_bad_hashed_key_length_detected(self, monkeypatch):
        """A hashed long key that is over one block raises HmacError."""
        monkeypatch.setattr(hmac_module, "sha256", lambda data: b"\x00" * 65)
        with pytest.raises(HmacError):
            normalize_key(b"k" * 100)

    def test_engine_propagates_hmac_fault(self, monkeypatch):
        """The engine's hmac aborts on a broken inner hash."""
        monkeypatch.setattr(hmac_module, "sha256", lambda data: b"\x00" * 31)
        with pytest.raises(HmacError):
            Sha256().hmac(b"key", b"message")

    def test_package_exposes_submodules(self):
        """Submodule names on the package are modules, not same-named functions."""
        assert shavault.core_crypto.hmac_sha256 is hmac_module
        assert shavault.core_crypto.sha256 is sha256_module
        assert hasattr(hmac_module, "sha256")
        assert hasattr(sha256_module, "pad_message")

    def test_hmac_error_is_internal_fault(self):
        """HMAC faults are internal faults, not input errors."""
        assert issubclass(HmacError, InternalConsistencyError)
        assert not issubclass(HmacError, ValueError)

    @pytest.mark.parametrize("length", [0, 1, 63, 64, 65, 1000])
    def test_valid_keys_never_fault(self, length):
        """Any key length is valid input."""
        assert len(hmac_sha256(b"\xff" * length, b"")) == 32


class TestInvalidTypes:
    """Non-bytes input is a caller error (TypeError)."""

    def test_str_message_rejected(self):
        """Text must be encoded first."""
        with pytest.raises(TypeError):
            sha256("abc")

    def test_int_message_rejected(self):
        """Integers are not messages."""
        with pytest.raises(TypeError):
            sha256(12345)

    def test_none_message_rejected(self):
        """None is not a message."""
        with pytest.raises(TypeError):
            sha256(None)

    def test_str_key_rejected(self):
        """HMAC keys must be bytes-like."""
        with pytest.raises(TypeError):
            hmac_sha256("key", b"message")

    def test_str_hmac_message_rejected(self):
        """HMAC messages must be bytes-like."""
        with pytest.raises(TypeError):
            hmac_sha256(b"key", "message")


class TestAvalanche:
    """Single-bit changes produce different digests."""

    def test_single_bit_flip_changes_digest(self):
        """Flipping any sampled bit changes the SHA-256 digest."""
        rng = random.Random(20240501)
        message = bytes(rng.randrange(256) for _ in range(150))
        original = sha256(message)

        for _ in range(32):
            bit = rng.randrange(len(message) * 8)
            flipped = bytearray(message)
            flipped[bit // 8] ^= 1 << (bit % 8)
            assert sha256(bytes(flipped)) != original, f"bit {bit} did not change digest"

    def test_small_change_flips_many_output_bits(self):
        """A one-character change flips a large share of output bits."""
        a = int.from_bytes(sha256(b"avalanche"), "big")
        b = int.from_bytes(sha256(b"avalanchf"), "big")
        changed = bin(a ^ b).count("1")
        assert 64 < changed < 192

    def test_hmac_key_bit_flip_changes_tag(self):
        """Flipping one key bit changes the HMAC tag."""
        key = bytearray(b"k" * 64)
        original = hmac_sha256(bytes(key), b"payload")
        key[10] ^= 0x01
        assert hmac_sha256(bytes(key), b"payload") != original

    def test_trailing_zero_bytes_change_digest(self):
        """Trailing zero bytes are not absorbed by padding."""
        assert sha256(b"abc") != sha256(b"abc\x00")
        assert sha256(b"") != sha256(b"\x00")
