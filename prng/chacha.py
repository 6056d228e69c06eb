"""
ChaCha20 block function (RFC 7539).

Maps a 256-bit key, 32-bit block counter and 96-bit nonce to 64 bytes of
keystream. Pure and stateless; used as the block transform of the
fast-key-erasure PRNG.
"""

import struct

BLOCK_SIZE = 64
KEY_SIZE = 32
NONCE_SIZE = 12
DOUBLE_ROUNDS = 10

# "expand 32-byte k"
SIGMA = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)
MASK = 0xFFFFFFFF

_COLUMNS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
_DIAGONALS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def _rotl(v, n):
    return ((v << n) | (v >> (32 - n))) & MASK


def quarter_round(x, a, b, c, d):
    """Apply one ARX quarter round to words a, b, c, d of state x in place."""
    x[a] = (x[a] + x[b]) & MASK
    x[d] = _rotl(x[d] ^ x[a], 16)
    x[c] = (x[c] + x[d]) & MASK
    x[b] = _rotl(x[b] ^ x[c], 12)
    x[a] = (x[a] + x[b]) & MASK
    x[d] = _rotl(x[d] ^ x[a], 8)
    x[c] = (x[c] + x[d]) & MASK
    x[b] = _rotl(x[b] ^ x[c], 7)


def chacha20_block(key, counter=0, nonce=bytes(NONCE_SIZE)):
    """Return the 64-byte ChaCha20 keystream block for (key, counter, nonce)."""
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    if not 0 <= counter <= MASK:
        raise ValueError(f"counter out of range: {counter}")

    state = [*SIGMA, *struct.unpack("<8L", key), counter, *struct.unpack("<3L", nonce)]
    x = list(state)

    for _ in range(DOUBLE_ROUNDS):
        for a, b, c, d in _COLUMNS:
            quarter_round(x, a, b, c, d)
        for a, b, c, d in _DIAGONALS:
            quarter_round(x, a, b, c, d)

    # Feed-forward: add the input state back in
    return struct.pack("<16L", *((x[i] + state[i]) & MASK for i in range(16)))
