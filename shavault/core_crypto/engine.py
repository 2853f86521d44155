"""
Stateful SHA-256 Engine

Object API over the functional SHA-256 and HMAC-SHA256: the intermediate
hash survives between calls so it can be read back or displayed.
"""

import threading
from typing import Callable, List

from .hmac_sha256 import hmac_sha256
from .sha256 import (
    DIGEST_SIZE, _as_bytes, format_digest, init_state, pad_message,
    process_all_blocks, state_to_digest,
)


class Sha256:
    """
    Stateful SHA-256 engine.

    Keeps the intermediate hash between calls so it can be read back with
    get_hash() or displayed with show_hash(). Every public method holds the
    engine's lock, so a single instance shared between threads serializes
    its callers instead of interleaving their blocks.

    Example:
        >>> engine = Sha256()
        >>> engine.make_hash(b"abc").hex()[:8]
        'ba7816bf'
        >>> engine.show_hash()
        ba 78 16 bf 8f 01 cf ea 41 41 40 de 5d ae 22 23 b0 03 61 a3 96 17 7a 9c b4 10 ff 61 f2 00 15 ad
    """

    def __init__(self):
        """Initialize the engine with the FIPS initial hash values."""
        # Re-entrant: make_hash calls process_all_blocks and get_hash
        self._lock = threading.RLock()
        self._state: List[int] = init_state()

    def init(self) -> None:
        """Reset the intermediate hash to the initial values."""
        with self._lock:
            self._state = init_state()

    def process_all_blocks(self, message: bytes) -> None:
        """Reset, pad a copy of `message` and chain all of its blocks."""
        padded = pad_message(_as_bytes(message, "message"))
        with self._lock:
            self._state = init_state()
            process_all_blocks(padded, self._state)

    def get_hash(self) -> bytes:
        """Return the current intermediate hash as a 32-byte digest."""
        with self._lock:
            return state_to_digest(self._state)

    def show_hash(self, sink: Callable[[str], None] = print) -> None:
        """Send the current hash, as spaced hex pairs, to a display sink."""
        sink(format_digest(self.get_hash()))

    def make_hash(self, message: bytes) -> bytes:
        """Hash a complete message and return its digest."""
        with self._lock:
            self.process_all_blocks(message)
            return self.get_hash()

    def hmac(self, key: bytes, message: bytes) -> bytes:
        """
        Compute HMAC-SHA256 and leave the outer hash as the engine's state.

        Returns:
            32-byte authentication tag
        """
        with self._lock:
            tag = hmac_sha256(key, message)
            self._state = [
                int.from_bytes(tag[i:i + 4], byteorder='big')
                for i in range(0, DIGEST_SIZE, 4)
            ]
            return tag
