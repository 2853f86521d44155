"""
SHA-256 Compression Function

Bitwise building blocks and the per-block compression routine of SHA-256
as defined in FIPS 180-3, section 6.2.2.

Components:
- Logical functions: Ch, Maj, and the upper/lower case sigma functions
- Round constants: the 64-word K table
- Message schedule: expands 16 block words to 64 words
- Compression: 64 rounds folding one block into the running hash state

All arithmetic is on unsigned 32-bit words; every addition wraps modulo 2**32.
"""

from typing import List

from .errors import FramingError


# Block size in bytes (512 bits)
BLOCK_SIZE = 64

# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF

# Round constants: first 32 bits of fractional parts of cube roots of first 64 primes
K = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2,
)

SCHEDULE_LENGTH = len(K)


def rotate_right(value: int, amount: int) -> int:
    """
    Right rotate a 32-bit word.

    Only defined for 0 < amount < 32; SHA-256 never rotates by anything else.
    """
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def ch(x: int, y: int, z: int) -> int:
    """Choice function: for each bit, x selects y (1) or z (0)."""
    return ((x & y) ^ (~x & z)) & MASK_32


def maj(x: int, y: int, z: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def big_sigma0(x: int) -> int:
    """Uppercase Sigma 0: applied to working variable A each round."""
    return rotate_right(x, 2) ^ rotate_right(x, 13) ^ rotate_right(x, 22)


def big_sigma1(x: int) -> int:
    """Uppercase Sigma 1: applied to working variable E each round."""
    return rotate_right(x, 6) ^ rotate_right(x, 11) ^ rotate_right(x, 25)


def small_sigma0(x: int) -> int:
    """Lowercase sigma 0: used in message schedule on W[t-15]."""
    return rotate_right(x, 7) ^ rotate_right(x, 18) ^ (x >> 3)


def small_sigma1(x: int) -> int:
    """Lowercase sigma 1: used in message schedule on W[t-2]."""
    return rotate_right(x, 17) ^ rotate_right(x, 19) ^ (x >> 10)


def block_to_words(block: bytes) -> List[int]:
    """Convert a 64-byte block into 16 32-bit words (big-endian)."""
    if len(block) != BLOCK_SIZE:
        raise FramingError(
            f"SHA-256 block must be {BLOCK_SIZE} bytes, got {len(block)}"
        )
    return [
        int.from_bytes(block[i:i + 4], byteorder='big')
        for i in range(0, BLOCK_SIZE, 4)
    ]


def expand_message_schedule(words: List[int]) -> List[int]:
    """
    Expand 16 words into 64 words for the message schedule.

    For t from 16 to 63:
        W[t] = σ1(W[t-2]) + W[t-7] + σ0(W[t-15]) + W[t-16]
    """
    w = [0] * SCHEDULE_LENGTH
    w[:16] = words
    for t in range(16, SCHEDULE_LENGTH):
        w[t] = (
            small_sigma1(w[t - 2]) + w[t - 7] +
            small_sigma0(w[t - 15]) + w[t - 16]
        ) & MASK_32
    return w


def compress_block(state: List[int], block: bytes) -> List[int]:
    """
    Fold one 64-byte block into the hash state.

    The state list is updated in place (and also returned) so a caller can
    chain blocks without copying.

    Args:
        state: Current hash state (8 32-bit words)
        block: Exactly 64 bytes of padded message

    Returns:
        The updated hash state

    Raises:
        FramingError: If the block is not exactly 64 bytes
    """
    w = expand_message_schedule(block_to_words(block))

    a, b, c, d, e, f, g, h = state

    for t in range(SCHEDULE_LENGTH):
        t1 = (h + big_sigma1(e) + ch(e, f, g) + K[t] + w[t]) & MASK_32
        t2 = (big_sigma0(a) + maj(a, b, c)) & MASK_32

        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

    # Additive feedback into the chaining state
    for i, value in enumerate((a, b, c, d, e, f, g, h)):
        state[i] = (state[i] + value) & MASK_32

    return state


def process_message_block(state: List[int], buffer: bytes, offset: int) -> List[int]:
    """
    Compress the block starting at `offset` inside a padded buffer.

    Raises:
        FramingError: If the block would run past the end of the buffer
    """
    if offset < 0 or offset + BLOCK_SIZE > len(buffer):
        raise FramingError(
            f"Block at offset {offset} runs past buffer of {len(buffer)} bytes"
        )
    return compress_block(state, buffer[offset:offset + BLOCK_SIZE])
