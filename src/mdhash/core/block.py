"""
Block

The fixed-size unit of input consumed by a compression function. A Block is
immutable and can only exist with exactly ``LENGTH`` bytes.
"""

from dataclasses import dataclass
from typing import Tuple

from .words import bytes_to_words


BLOCK_LENGTH_BYTES = 64


class BlockLengthError(ValueError):
    """
    Raised when a Block is built from the wrong number of bytes.

    The streaming accumulator only ever builds exactly-sized blocks, so this
    signals a bug in the caller rather than bad input data.
    """


@dataclass(frozen=True)
class Block:
    """A single compression block (64 bytes / 16 big-endian words)."""
    data: bytes

    LENGTH = BLOCK_LENGTH_BYTES

    def __post_init__(self):
        if len(self.data) != self.LENGTH:
            raise BlockLengthError(
                f"Block must be exactly {self.LENGTH} bytes, got {len(self.data)}"
            )
        # Freeze bytearray/memoryview input so the block cannot change later
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))

    def words(self) -> Tuple[int, ...]:
        """Reinterpret the block as big-endian 32-bit words in original order."""
        return bytes_to_words(self.data)

    def __bytes__(self) -> bytes:
        return self.data
