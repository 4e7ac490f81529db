"""
SHA-256 Hash (FIPS 180-4)

Streaming SHA-256 built on the shared Merkle-Damgard engine.

Components:
- Message Schedule: Expands 16 words to 64 words
- Compression: 64 rounds of compression function
- Output: 256-bit (32-byte) digest

    >>> from mdhash.sha2 import sha256
    >>> sha256.hash(b"hello").hex()
    '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
"""

from typing import List, Tuple

from ..core.block import BLOCK_LENGTH_BYTES, Block
from ..core.digest import BaseDigest
from ..core.engine import Algorithm, Data, Finalize, Update
from ..core.state import BaseState
from ..core.words import MASK_32, add, rotr


DIGEST_LENGTH_BYTES = 32

# Initial hash values: first 32 bits of fractional parts of square roots of first 8 primes
H_INITIAL = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19,
)

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

ROUNDS = 64


def _ch(x: int, y: int, z: int) -> int:
    """Choice function: if x then y else z (bitwise)."""
    return (x & y) ^ (~x & z) & MASK_32


def _maj(x: int, y: int, z: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def _sigma0(x: int) -> int:
    """Lowercase sigma 0: used in message schedule."""
    return rotr(x, 7) ^ rotr(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    """Lowercase sigma 1: used in message schedule."""
    return rotr(x, 17) ^ rotr(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    """Uppercase Sigma 0: used in compression."""
    return rotr(x, 2) ^ rotr(x, 13) ^ rotr(x, 22)


def _big_sigma1(x: int) -> int:
    """Uppercase Sigma 1: used in compression."""
    return rotr(x, 6) ^ rotr(x, 11) ^ rotr(x, 25)


def _create_message_schedule(words: Tuple[int, ...]) -> List[int]:
    """
    Expand 16 words into 64 words for the message schedule.

    For i from 16 to 63:
        W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    """
    w = list(words)
    for i in range(16, ROUNDS):
        w.append(add(_sigma1(w[i - 2]), w[i - 7], _sigma0(w[i - 15]), w[i - 16]))
    return w


class State(BaseState):
    """SHA-256 working state: eight 32-bit words A..H."""

    INITIAL = H_INITIAL
    ROUNDS = ROUNDS

    def _compress(self, block_words):
        w = _create_message_schedule(block_words)
        a, b, c, d, e, f, g, h = self.words

        for i in range(ROUNDS):
            t1 = add(h, _big_sigma1(e), _ch(e, f, g), K[i], w[i])
            t2 = add(_big_sigma0(a), _maj(a, b, c))

            h = g
            g = f
            f = e
            e = add(d, t1)
            d = c
            c = b
            b = a
            a = add(t1, t2)

        return a, b, c, d, e, f, g, h


class Digest(BaseDigest):
    """256-bit SHA-256 digest."""
    LENGTH = DIGEST_LENGTH_BYTES


ALGORITHM = Algorithm(name='sha256', state=State, digest=Digest)


def new() -> Update:
    """Create a new SHA-256 streaming session."""
    return ALGORITHM.new()


def default() -> Update:
    """Alias of ``new()``."""
    return new()


def hash(data: Data) -> Digest:
    """
    Compute the SHA-256 digest of data in one call.

    Args:
        data: Bytes-like object, str (UTF-8) or another Digest

    Returns:
        32-byte Digest
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
