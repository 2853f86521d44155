"""
HMAC-SHA256 Implementation

Implements RFC 2104 keyed-hashing on top of the from-scratch SHA-256:

    HMAC(K, text) = H((K' XOR opad) || H((K' XOR ipad) || text))

where K' is the key hashed (if longer than the block size) and then
zero-padded to exactly one block.

Test vectors: RFC 4231 and the HMAC article on Wikipedia.
"""

import hmac as _hmac
import logging

from .compression import BLOCK_SIZE
from .errors import HmacError
from .sha256 import DIGEST_SIZE, _as_bytes, sha256


logger = logging.getLogger(__name__)

# Inner and outer padding bytes (RFC 2104)
IPAD = 0x36
OPAD = 0x5C


def normalize_key(key: bytes) -> bytes:
    """
    Bring a key to exactly one block (64 bytes).

    Keys longer than the block are replaced by their SHA-256 digest; shorter
    keys are right-padded with zero bytes.

    Raises:
        HmacError: If the normalized key is not exactly 64 bytes
    """
    key = _as_bytes(key, "key")

    if len(key) > BLOCK_SIZE:
        logger.debug("HMAC key longer than %d bytes, hashing it", BLOCK_SIZE)
        key = sha256(key)

    if len(key) < BLOCK_SIZE:
        key = key + b'\x00' * (BLOCK_SIZE - len(key))

    if len(key) != BLOCK_SIZE:
        raise HmacError(
            f"Normalized HMAC key is {len(key)} bytes, expected {BLOCK_SIZE}"
        )

    return key


def xor_pad(key: bytes, pad: int) -> bytes:
    """XOR every byte of a normalized key with a padding byte."""
    return bytes(key_byte ^ pad for key_byte in key)


def hmac_sha256(key: bytes, message: bytes) -> bytes:
    """
    Compute HMAC-SHA256 of a message.

    Args:
        key: Secret key of any length (including empty)
        message: Message bytes to authenticate

    Returns:
        32-byte authentication tag

    Raises:
        TypeError: If key or message is not bytes-like
        HmacError: If the inner hash is not 32 bytes

    Example:
        >>> hmac_sha256(b"key", b"The quick brown fox jumps over the lazy dog").hex()[:16]
        'f7bc83f430538424'
    """
    normalized = normalize_key(key)
    message = _as_bytes(message, "message")

    inner_key = xor_pad(normalized, IPAD)
    outer_key = xor_pad(normalized, OPAD)

    inner_hash = sha256(inner_key + message)
    if len(inner_hash) != DIGEST_SIZE:
        raise HmacError(
            f"Inner hash is {len(inner_hash)} bytes, expected {DIGEST_SIZE}"
        )

    return sha256(outer_key + inner_hash)


def hmac_sha256_hex(key: bytes, message: bytes) -> str:
    """Compute HMAC-SHA256 and return it as a hexadecimal string."""
    return hmac_sha256(key, message).hex()


def verify_hmac(key: bytes, message: bytes, tag: bytes) -> bool:
    """
    Check a tag against HMAC-SHA256 of the message.

    Uses constant-time comparison to prevent timing attacks.

    Args:
        key: Secret key
        message: Message that was authenticated
        tag: Expected 32-byte tag

    Returns:
        True if the tag matches
    """
    expected = hmac_sha256(key, message)
    return _hmac.compare_digest(expected, _as_bytes(tag, "tag"))
