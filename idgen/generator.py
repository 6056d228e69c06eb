"""
Time ID - 27-character, k-sortable, URL-safe unique identifiers.

Format: 4 bytes big-endian timestamp (seconds since EPOCH_OFFSET) +
16 bytes from the fast-key-erasure PRNG, Radix-64 encoded.
"""

import secrets
import struct
import threading
import time

from core.errors import ClockRangeError, DecodeError, SeedError
from internal.logging import get_logger
from prng.chacha import KEY_SIZE
from prng.erasure import KeyErasureBuffer
from utils import radix64
from utils.timestamp import from_epoch_seconds

# 2014-05-13T16:53:20Z
EPOCH_OFFSET = 1_400_000_000
TIMESTAMP_SIZE = 4
RECORD_SIZE = TIMESTAMP_SIZE + 16
ID_LENGTH = radix64.encoded_length(RECORD_SIZE)

MIN_VALUE = radix64.ALPHABET[0] * ID_LENGTH
MAX_VALUE = radix64.ALPHABET[-1] * ID_LENGTH

# 6 symbols hold 36 bits, the first 32 are the timestamp
_TIMESTAMP_CHARS = 6
_TIMESTAMP_SHIFT = _TIMESTAMP_CHARS * 6 - TIMESTAMP_SIZE * 8


def _draw_key(seed_source):
    try:
        key = seed_source(KEY_SIZE)
    except Exception as exc:
        raise SeedError("secure seed source failed", expected=KEY_SIZE, cause=exc) from exc
    if not isinstance(key, (bytes, bytearray)) or len(key) != KEY_SIZE:
        raise SeedError("seed source returned unusable key material", expected=KEY_SIZE)
    return key


def created_at(id):
    """Wall-clock time, to the second, at which the ID was generated."""
    if not isinstance(id, str) or len(id) != ID_LENGTH:
        raise DecodeError(f"ID must be a {ID_LENGTH}-character string", value=id)
    # Validates every character, not just the timestamp prefix
    radix64.decode_int(id)
    timestamp = radix64.decode_int(id[:_TIMESTAMP_CHARS]) >> _TIMESTAMP_SHIFT
    return from_epoch_seconds(timestamp + EPOCH_OFFSET)


class IdGenerator:
    """Thread-safe ID generator owning one key-erasure PRNG."""

    MIN_VALUE = MIN_VALUE
    MAX_VALUE = MAX_VALUE

    def __init__(self, clock=time.time, seed_source=secrets.token_bytes, pool_blocks=16):
        self._clock = clock
        self._seed_source = seed_source
        self._lock = threading.Lock()
        self._log = get_logger()
        self._prng = KeyErasureBuffer(_draw_key(seed_source), pool_blocks=pool_blocks)
        self.generated = 0
        self.reseeds = 0
        self._log.info("id generator seeded", pool_blocks=pool_blocks,
                       blocks_per_cycle=self._prng.blocks_per_cycle)

    created_at = staticmethod(created_at)

    def generate(self):
        """Return a new 27-character ID."""
        with self._lock:
            seconds = int(self._clock()) - EPOCH_OFFSET
            if not 0 <= seconds <= 0xFFFFFFFF:
                raise ClockRangeError("clock outside the 32-bit timestamp window",
                                      seconds=seconds + EPOCH_OFFSET)
            record = struct.pack(">I", seconds) + self._prng.generate_block()
            self.generated += 1
        return radix64.encode(record)

    def reseed(self):
        """Switch to a fresh secret key and drop all unconsumed keystream."""
        key = _draw_key(self._seed_source)
        with self._lock:
            self._prng.reseed(key)
            self.reseeds += 1
        self._log.info("id generator reseeded", reseeds=self.reseeds)

    def get_stats(self):
        with self._lock:
            return {
                "generated": self.generated,
                "cycles": self._prng.cycles,
                "reseeds": self.reseeds,
                "pool_size": self._prng.pool_size,
                "blocks_per_cycle": self._prng.blocks_per_cycle,
            }

    def __reduce_ex__(self, protocol):
        raise TypeError(f"{type(self).__name__} holds secret key material and cannot be serialized")
