"""
Radix-64 - order-preserving, URL-safe binary encoding.

The alphabet is sorted by code point, so comparing two encoded strings
compares the underlying bytes as big-endian unsigned integers.
Each 3-byte group becomes 4 symbols, most significant bits first.
"""

from core.errors import DecodeError

ALPHABET = "$0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(ALPHABET)}


def encoded_length(size):
    """Number of symbols needed for `size` bytes."""
    return (size * 8 + 5) // 6


def encode(data):
    """Encode bytes, dropping trailing symbols that only carry zero padding."""
    length = encoded_length(len(data))
    padded = bytes(data) + bytes(-len(data) % 3)

    chars = []
    for i in range(0, len(padded), 3):
        v = int.from_bytes(padded[i:i + 3], byteorder="big")
        chars.append(ALPHABET[(v >> 18) & 63])
        chars.append(ALPHABET[(v >> 12) & 63])
        chars.append(ALPHABET[(v >> 6) & 63])
        chars.append(ALPHABET[v & 63])

    return "".join(chars[:length])


def decode_int(text):
    """Big-endian integer value of a Radix-64 string."""
    n = 0
    for position, char in enumerate(text):
        value = _INDEX.get(char)
        if value is None:
            raise DecodeError(f"invalid character {char!r} at position {position}",
                              value=text, position=position)
        n = (n << 6) | value
    return n


def decode(text, size):
    """Decode a string produced by `encode` for `size` bytes of data."""
    if len(text) != encoded_length(size):
        raise DecodeError(f"expected {encoded_length(size)} characters, got {len(text)}", value=text)

    n = decode_int(text)
    # Low bits beyond the data are padding and must be zero
    spare = len(text) * 6 - size * 8
    if n & ((1 << spare) - 1):
        raise DecodeError("non-zero padding bits", value=text, position=len(text) - 1)

    return (n >> spare).to_bytes(size, byteorder="big")
