# mdhash
"""
Streaming Merkle-Damgard hashes (SHA-1, SHA-224, SHA-256) in pure Python.

Every algorithm module exposes the same surface:
- new() / default(): start a streaming Update
- hash(data): one-shot digest
- State, Digest: immutable value types

    >>> from mdhash import sha1
    >>> sha1.hash("Hello World").hex()
    '0a4d55a8d778e5022fab701977c5d840bbc486d0'
"""

from . import sha1
from .sha2 import sha224, sha256
from .core import (
    Algorithm,
    Block,
    BlockLengthError,
    Finalize,
    Update,
)
from .stream import (
    ALGORITHMS,
    DEFAULT_CHUNK_SIZE,
    get_algorithm,
    hash_chunks,
    hash_file,
    hash_stream,
    new,
)

__version__ = '0.1.0'

__all__ = [
    'sha1',
    'sha224',
    'sha256',
    'Algorithm',
    'Block',
    'BlockLengthError',
    'Finalize',
    'Update',
    'ALGORITHMS',
    'DEFAULT_CHUNK_SIZE',
    'get_algorithm',
    'hash_chunks',
    'hash_file',
    'hash_stream',
    'new',
]
