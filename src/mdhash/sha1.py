"""
SHA-1 Hash (RFC 3174)

Streaming SHA-1 built on the shared Merkle-Damgard engine.

Components:
- Message Schedule: Expands 16 words to 80 words (XOR + rotate left by 1)
- Compression: 80 rounds, boolean function and constant chosen per 20-round stage
- Output: 160-bit (20-byte) digest

Batch processing:
    >>> from mdhash import sha1
    >>> sha1.hash(b"abc").hex()
    'a9993e364706816aba3e25717850c26c9cd0d89d'

Stream processing:
    >>> session = sha1.new()
    >>> for chunk in (b"Hello", b" ", b"World"):
    ...     session = session.update(chunk)
    >>> session.digest().hex()
    '0a4d55a8d778e5022fab701977c5d840bbc486d0'
"""

from typing import Tuple

from .core.block import BLOCK_LENGTH_BYTES, Block
from .core.digest import BaseDigest
from .core.engine import Algorithm, Data, Finalize, Update
from .core.state import BaseState
from .core.words import MASK_32, add, rotl


DIGEST_LENGTH_BYTES = 20

# Initial hash values H0..H4
H_INITIAL = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

# One constant per 20-round stage
K = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)

ROUNDS = 80


def _ch(x: int, y: int, z: int) -> int:
    """Choice function (rounds 0-19)."""
    return (x & y) | (~x & z) & MASK_32


def _parity(x: int, y: int, z: int) -> int:
    """Parity function (rounds 20-39 and 60-79)."""
    return x ^ y ^ z


def _maj(x: int, y: int, z: int) -> int:
    """Majority function (rounds 40-59)."""
    return (x & y) | (x & z) | (y & z)


_STAGE_FUNCTIONS = (_ch, _parity, _maj, _parity)


def _create_message_schedule(words: Tuple[int, ...]) -> list:
    """
    Expand 16 words into 80 words for the message schedule.

    For t from 16 to 79:
        W[t] = ROTL1(W[t-3] ^ W[t-8] ^ W[t-14] ^ W[t-16])
    """
    w = list(words)
    for t in range(16, ROUNDS):
        w.append(rotl(w[t - 3] ^ w[t - 8] ^ w[t - 14] ^ w[t - 16], 1))
    return w


class State(BaseState):
    """SHA-1 working state: five 32-bit words A..E."""

    INITIAL = H_INITIAL
    ROUNDS = ROUNDS

    def _compress(self, block_words):
        w = _create_message_schedule(block_words)
        a, b, c, d, e = self.words

        for t in range(ROUNDS):
            stage = t // 20
            temp = add(rotl(a, 5), _STAGE_FUNCTIONS[stage](b, c, d), e, w[t], K[stage])
            e = d
            d = c
            c = rotl(b, 30)
            b = a
            a = temp

        return a, b, c, d, e


class Digest(BaseDigest):
    """160-bit SHA-1 digest."""
    LENGTH = DIGEST_LENGTH_BYTES


ALGORITHM = Algorithm(name='sha1', state=State, digest=Digest)


def new() -> Update:
    """Create a new SHA-1 streaming session."""
    return ALGORITHM.new()


def default() -> Update:
    """Alias of ``new()``."""
    return new()


def hash(data: Data) -> Digest:
    """
    Compute the SHA-1 digest of data in one call.

    Args:
        data: Bytes-like object, str (UTF-8) or another Digest

    Returns:
        20-byte Digest
    """
    return ALGORITHM.hash(data)


__all__ = [
    'ALGORITHM',
    'BLOCK_LENGTH_BYTES',
    'DIGEST_LENGTH_BYTES',
    'Block',
    'Digest',
    'Finalize',
    'State',
    'Update',
    'default',
    'hash',
    'new',
]
