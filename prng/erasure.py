"""
Fast-key-erasure PRNG over the ChaCha20 block function.

Each cycle fills a pool with ChaCha20 keystream under the current key.
The first 32 bytes of the pool immediately become the next key and are
wiped from the pool; the rest is served as 16-byte blocks, each wiped as
it is handed out. Captured state therefore never reveals past output.

See https://blog.cr.yp.to/20170723-random.html
"""

from core.errors import InvariantError
from internal.logging import get_logger
from prng.chacha import BLOCK_SIZE, KEY_SIZE, MASK, chacha20_block

OUTPUT_SIZE = 16


class KeyErasureBuffer:
    __slots__ = ("_key", "_pool", "_offset", "pool_blocks", "cycles", "_log")

    def __init__(self, key, pool_blocks=16):
        if len(key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
        if not isinstance(pool_blocks, int) or not 1 <= pool_blocks <= MASK:
            raise ValueError(f"pool_blocks must be between 1 and {MASK}, got {pool_blocks!r}")

        self._key = bytearray(key)
        self._pool = bytearray(pool_blocks * BLOCK_SIZE)
        self._offset = len(self._pool)
        self.pool_blocks = pool_blocks
        self.cycles = 0
        self._log = get_logger()

    @property
    def pool_size(self):
        return len(self._pool)

    @property
    def blocks_per_cycle(self):
        return (len(self._pool) - KEY_SIZE) // OUTPUT_SIZE

    def generate_block(self):
        """Return the next 16 unused bytes of keystream and wipe them."""
        if self._offset >= len(self._pool):
            self.cycle()

        start, end = self._offset, self._offset + OUTPUT_SIZE
        if start < KEY_SIZE or end > len(self._pool):
            raise InvariantError("cursor outside output region",
                                 context={"offset": start, "pool_size": len(self._pool)})

        block = bytes(self._pool[start:end])
        self._pool[start:end] = bytes(OUTPUT_SIZE)
        self._offset = end
        return block

    def cycle(self):
        """Refill the pool and replace the key with the pool's first 32 bytes."""
        for counter in range(self.pool_blocks):
            start = counter * BLOCK_SIZE
            self._pool[start:start + BLOCK_SIZE] = chacha20_block(self._key, counter)

        self._key[:] = self._pool[:KEY_SIZE]
        self._pool[:KEY_SIZE] = bytes(KEY_SIZE)
        self._offset = KEY_SIZE
        self.cycles += 1
        self._log.debug("prng rekeyed", cycle=self.cycles, blocks=self.blocks_per_cycle)

    def reseed(self, key):
        """Replace the key and discard all unconsumed keystream."""
        if len(key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
        self._key[:] = key
        self._pool[:] = bytes(len(self._pool))
        self._offset = len(self._pool)

    def __reduce_ex__(self, protocol):
        raise TypeError(f"{type(self).__name__} holds secret key material and cannot be serialized")
