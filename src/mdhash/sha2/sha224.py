"""
SHA-224 Hash (FIPS 180-4)

SHA-256's compression function with its own initial values; the digest keeps
only the first seven state words.
"""

from ..core.block import BLOCK_LENGTH_BYTES, Block
from ..core.digest import BaseDigest
from ..core.engine import Algorithm, Data, Finalize, Update
from . import sha256


DIGEST_LENGTH_BYTES = 28

# Second 32 bits of fractional parts of square roots of the 9th..16th primes
H_INITIAL = (
    0xc1059ed8, 0x367cd507, 0x3070dd17, 0xf70e5939,
    0xffc00b31, 0x68581511, 0x64f98fa7, 0xbefa4fa4,
)


class State(sha256.State):
    INITIAL = H_INITIAL


class Digest(BaseDigest):
    """224-bit SHA-224 digest."""
    LENGTH = DIGEST_LENGTH_BYTES


ALGORITHM = Algorithm(name='sha224', state=State, digest=Digest)


def new() -> Update:
    """Create a new SHA-224 streaming session."""
    return ALGORITHM.new()


def default() -> Update:
    return new()


def hash(data: Data) -> Digest:
    """Compute the SHA-224 digest of data in one call."""
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
