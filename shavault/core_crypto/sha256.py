"""
SHA-256 Hash Implementation (From Scratch)

Implements the SHA-256 cryptographic hash function as defined in FIPS 180-3.
This implementation avoids using hashlib and builds the algorithm from scratch.

Components:
- Padding: Pads message to multiple of 512 bits
- Block chaining: Feeds every 64-byte block through the compression function
  in order, starting from the FIPS initial hash values
- Output: 256-bit (32-byte) digest, raw or as hex

The functional API (sha256, sha256_hex, ...) keeps all scratch state local to
the call and is safe to use from any number of threads.
"""

import logging
from typing import List, Optional

from .compression import BLOCK_SIZE, MASK_32, process_message_block
from .errors import FramingError


logger = logging.getLogger(__name__)

# Digest size in bytes (256 bits)
DIGEST_SIZE = 32

# Trailing message length field in bytes (64-bit big-endian bit count)
LENGTH_FIELD_SIZE = 8

# Initial hash values: first 32 bits of fractional parts of square roots of first 8 primes
H_INITIAL = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19,
)

_LENGTH_MASK = (1 << (LENGTH_FIELD_SIZE * 8)) - 1


def _as_bytes(data, what: str = "data") -> bytes:
    """Accept any bytes-like object; reject str and other types."""
    if isinstance(data, str):
        raise TypeError(f"{what} must be bytes-like, not str (encode it first)")
    try:
        return bytes(memoryview(data))
    except TypeError:
        raise TypeError(
            f"{what} must be bytes-like, not {type(data).__name__}"
        ) from None


def init_state() -> List[int]:
    """Return a fresh hash state holding the FIPS 180-3 initial values."""
    return list(H_INITIAL)


def pad_message(data: bytes) -> bytes:
    """
    Pad the message according to SHA-256 specification.

    Padding rules:
    1. Append bit '1' to message (0x80 byte)
    2. Append the fewest zeros so that length ≡ 56 (mod 64) bytes
    3. Append original message length in bits as 64-bit big-endian integer

    The zero count is taken modulo 64, so a message whose 0x80 byte already
    lands past offset 56 of its last block wraps into one more block.

    Args:
        data: The original message bytes

    Returns:
        Padded message as bytes (length is multiple of 64 bytes / 512 bits)

    Raises:
        FramingError: If the padded length is not a multiple of 64
    """
    original_bit_length = (len(data) * 8) & _LENGTH_MASK

    padded = bytearray(data)
    padded.append(0x80)

    padding_length = (BLOCK_SIZE - LENGTH_FIELD_SIZE - len(padded)) % BLOCK_SIZE
    padded.extend(b'\x00' * padding_length)

    padded.extend(original_bit_length.to_bytes(LENGTH_FIELD_SIZE, byteorder='big'))

    if len(padded) % BLOCK_SIZE != 0:
        raise FramingError(
            f"SHA padding produced {len(padded)} bytes, not a multiple of {BLOCK_SIZE}"
        )

    return bytes(padded)


def process_all_blocks(padded: bytes, state: Optional[List[int]] = None) -> List[int]:
    """
    Run every block of an already padded buffer through the compression function.

    Blocks are processed strictly in order; block i+1 starts from the state
    left by block i.

    Args:
        padded: Padded message (multiple of 64 bytes)
        state: Starting state; a fresh initial state when omitted

    Returns:
        Final hash state (8 32-bit words)

    Raises:
        FramingError: If the buffer length is not a multiple of 64
    """
    total = len(padded)
    if total % BLOCK_SIZE != 0:
        raise FramingError(
            f"Cannot process {total} bytes: not a multiple of {BLOCK_SIZE}"
        )

    if state is None:
        state = init_state()

    for offset in range(0, total, BLOCK_SIZE):
        process_message_block(state, padded, offset)

    logger.debug("Processed %d SHA-256 block(s)", total // BLOCK_SIZE)
    return state


def state_to_digest(state: List[int]) -> bytes:
    """Serialize the hash state as 8 big-endian 32-bit words."""
    return b''.join((word & MASK_32).to_bytes(4, byteorder='big') for word in state)


def format_digest(digest: bytes, separator: str = " ") -> str:
    """
    Render a digest as lowercase hex pairs joined by `separator`.

    Example:
        >>> format_digest(bytes([0xba, 0x78, 0x16]))
        'ba 78 16'
    """
    return separator.join(f"{byte:02x}" for byte in digest)


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Args:
        data: Input bytes to hash (bytes, bytearray or memoryview)

    Returns:
        256-bit (32-byte) digest as bytes

    Raises:
        TypeError: If data is not bytes-like

    Example:
        >>> sha256(b"abc").hex()
        'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """
    padded = pad_message(_as_bytes(data))
    return state_to_digest(process_all_blocks(padded))


def sha256_hex(data: bytes) -> str:
    """
    Compute SHA-256 hash and return as hexadecimal string.

    Args:
        data: Input bytes to hash

    Returns:
        64-character lowercase hexadecimal string
    """
    return sha256(data).hex()


def sha256_string(text: str, encoding: str = 'utf-8') -> bytes:
    """
    Compute SHA-256 hash of a string.

    Args:
        text: Input string to hash
        encoding: String encoding (default: utf-8)

    Returns:
        256-bit (32-byte) digest as bytes
    """
    return sha256(text.encode(encoding))
