"""
Merkle-Damgard Streaming Engine

Shared buffering and padding logic for every hash in this package. Only the
compression function differs between algorithms; everything here is
parameterized by an ``Algorithm``.

Components:
- Algorithm: block size, state type and digest type for one hash
- Update: streaming accumulator (state + partial block + byte counter)
- Finalize: padded, terminal state from which digests are read

Flow:
    Update.update(data)* -> Update.finalize() -> Finalize.digest()
"""

from dataclasses import dataclass
from typing import Type, Union

from .block import Block
from .digest import BaseDigest
from .state import BaseState


# Padding trailer: big-endian 64-bit message length in bits
LENGTH_FIELD_BYTES = 8
LENGTH_MASK = (1 << (LENGTH_FIELD_BYTES * 8)) - 1
PADDING_MARKER = 0x80

Data = Union[bytes, bytearray, memoryview, str, BaseDigest]


@dataclass(frozen=True)
class Algorithm:
    """Parameters describing one Merkle-Damgard hash instance."""
    name: str
    state: Type[BaseState]
    digest: Type[BaseDigest]
    block: Type[Block] = Block

    @property
    def block_length(self) -> int:
        return self.block.LENGTH

    @property
    def digest_length(self) -> int:
        return self.digest.LENGTH

    def new(self) -> 'Update':
        """Start a fresh streaming session."""
        return Update(self)

    def hash(self, data: Data) -> BaseDigest:
        """Digest of data known up front."""
        return Update(self).update(data).digest()


def _as_bytes(data: Data) -> memoryview:
    """View any accepted input as a flat byte sequence."""
    if isinstance(data, str):
        data = data.encode('utf-8')
    elif isinstance(data, BaseDigest):
        data = data.as_bytes()
    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError(
            f"Expected bytes-like object, str or Digest, got {type(data).__name__}"
        ) from None
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    return view.cast('B') if view.format != 'B' or view.ndim != 1 else view


class Update:
    """
    Streaming accumulator.

    Holds the running state, fewer than one block of not-yet-compressed
    bytes, and the count of bytes already folded into the state. ``update``
    mutates the instance and returns it, so calls can be chained:

        >>> from mdhash import sha1
        >>> sha1.new().update("Hello").update(" ").update("World").digest().hex()
        '0a4d55a8d778e5022fab701977c5d840bbc486d0'

    An Update is owned by one logical computation; use ``copy()`` to fork.
    """

    def __init__(self, algorithm: Algorithm):
        self._algorithm = algorithm
        self._state = algorithm.state.new()
        self._unprocessed = bytearray()
        self._processed = 0

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def state(self) -> BaseState:
        return self._state

    @property
    def unprocessed(self) -> bytes:
        """Buffered bytes not yet compressed (always shorter than one block)."""
        return bytes(self._unprocessed)

    @property
    def processed(self) -> int:
        """Bytes already folded into the state, modulo 2**64."""
        return self._processed

    def update(self, data: Data) -> 'Update':
        """
        Absorb a chunk of input of any length.

        Full blocks are compressed immediately; the tail that does not fill a
        block is buffered until the next call or ``finalize()``. The result is
        independent of how the caller splits its input.

        Args:
            data: Bytes-like object, str (UTF-8) or Digest

        Returns:
            self, for chaining
        """
        data = _as_bytes(data)
        block_length = self._algorithm.block_length
        unprocessed = self._unprocessed

        if not unprocessed:
            self._absorb_blocks(data)
        elif len(unprocessed) + len(data) < block_length:
            unprocessed += data
        else:
            # Top the buffer up to one block, then continue without it
            missing = block_length - len(unprocessed)
            unprocessed += data[:missing]
            self._compress(unprocessed)
            unprocessed.clear()
            self._absorb_blocks(data[missing:])

        return self

    def _absorb_blocks(self, data: memoryview) -> None:
        """Compress whole blocks of data and buffer the remainder."""
        block_length = self._algorithm.block_length
        whole = len(data) - len(data) % block_length
        for offset in range(0, whole, block_length):
            self._compress(data[offset:offset + block_length])
        self._unprocessed += data[whole:]

    def _compress(self, chunk) -> None:
        block = self._algorithm.block(bytes(chunk))
        self._state = self._state.update(block)
        self._processed = (self._processed + len(block.data)) & LENGTH_MASK

    def finalize(self) -> 'Finalize':
        """
        Pad the buffered tail and produce the terminal state.

        Padding is a 0x80 byte, zero bytes, then the total message length in
        bits as a big-endian 64-bit integer. When the tail leaves no room for
        the marker and length field in its block, the padding spills into a
        second, otherwise all-zero, block.

        The accumulator itself is not modified; calling this repeatedly gives
        identical results.
        """
        block_length = self._algorithm.block_length
        tail = bytes(self._unprocessed)

        # The length field counts bits, not bytes
        bit_length = ((self._processed + len(tail)) * 8) & LENGTH_MASK
        length = bit_length.to_bytes(LENGTH_FIELD_BYTES, byteorder='big')

        if len(tail) + 1 + LENGTH_FIELD_BYTES <= block_length:
            padding = bytearray(block_length)
        else:
            padding = bytearray(block_length * 2)
        padding[:len(tail)] = tail
        padding[len(tail)] = PADDING_MARKER
        padding[-LENGTH_FIELD_BYTES:] = length

        state = self._state
        for offset in range(0, len(padding), block_length):
            state = state.update(self._algorithm.block(bytes(padding[offset:offset + block_length])))

        return Finalize(self._algorithm, state)

    def digest(self) -> BaseDigest:
        """Shortcut for ``finalize().digest()``."""
        return self.finalize().digest()

    def reset(self) -> 'Update':
        """Return to the freshly-created condition, keeping the buffer object."""
        self._unprocessed.clear()
        self._processed = 0
        self._state = self._state.reset()
        return self

    def copy(self) -> 'Update':
        """Independent accumulator with the same progress."""
        clone = Update(self._algorithm)
        clone._state = self._state
        clone._unprocessed = bytearray(self._unprocessed)
        clone._processed = self._processed
        return clone

    def __eq__(self, other):
        if not isinstance(other, Update):
            return NotImplemented
        return (
            self._algorithm == other._algorithm
            and self._state == other._state
            and self._unprocessed == other._unprocessed
            and self._processed == other._processed
        )

    __hash__ = None

    def __repr__(self):
        return (
            f"Update(algorithm={self._algorithm.name!r}, "
            f"processed={self._processed}, unprocessed={len(self._unprocessed)})"
        )


@dataclass(frozen=True)
class Finalize:
    """Terminal, padded state. Digests are derived from it without recomputation."""
    algorithm: Algorithm
    state: BaseState

    def digest(self) -> BaseDigest:
        return self.algorithm.digest.from_state(self.state)

    def reset(self) -> Update:
        """Begin a brand-new streaming session for the same algorithm."""
        return Update(self.algorithm)
