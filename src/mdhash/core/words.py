"""
32-bit Word Arithmetic

Fixed-width helpers shared by every compression function. Python integers are
unbounded, so each operation masks its result back into 32 bits; overflow is
modular wraparound, never an error.
"""

import struct
from typing import Sequence, Tuple


# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF
WORD_BYTES = 4


def rotl(value: int, amount: int) -> int:
    """Left rotate a 32-bit integer by the specified amount."""
    return ((value << amount) | (value >> (32 - amount))) & MASK_32


def rotr(value: int, amount: int) -> int:
    """Right rotate a 32-bit integer by the specified amount."""
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def add(*values: int) -> int:
    """Modular (wrapping) sum of 32-bit words."""
    return sum(values) & MASK_32


def bytes_to_words(data: bytes) -> Tuple[int, ...]:
    """
    Split bytes into big-endian 32-bit words, in order.

    Args:
        data: Bytes whose length is a multiple of 4

    Returns:
        Tuple of unsigned 32-bit integers
    """
    if len(data) % WORD_BYTES:
        raise ValueError(f"Length {len(data)} is not a multiple of {WORD_BYTES}")
    return struct.unpack(f'>{len(data) // WORD_BYTES}I', data)


def words_to_bytes(words: Sequence[int]) -> bytes:
    """Serialize 32-bit words big-endian."""
    return struct.pack(f'>{len(words)}I', *words)
