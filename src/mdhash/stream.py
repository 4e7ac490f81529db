"""
Stream Hashing

Feeds external byte sources (iterables, binary streams, files) into the
streaming engine chunk by chunk, so large inputs never sit in memory at once.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, Union

from .core.digest import BaseDigest
from .core.engine import Algorithm, Data, Update
from .sha1 import ALGORITHM as SHA1
from .sha2.sha224 import ALGORITHM as SHA224
from .sha2.sha256 import ALGORITHM as SHA256


logger = logging.getLogger(__name__)

# Chunk size for streaming (1 MB default)
DEFAULT_CHUNK_SIZE = 1024 * 1024

ALGORITHMS: Dict[str, Algorithm] = {
    algorithm.name: algorithm for algorithm in (SHA1, SHA224, SHA256)
}

AlgorithmLike = Union[str, Algorithm]


def get_algorithm(algorithm: AlgorithmLike) -> Algorithm:
    """
    Resolve an algorithm by name ("sha1", "SHA-256", ...) or pass one through.

    Raises:
        TypeError: If algorithm is neither a name nor an Algorithm
        ValueError: If the name is not a supported algorithm
    """
    if isinstance(algorithm, Algorithm):
        return algorithm
    if not isinstance(algorithm, str):
        raise TypeError(
            f"Expected algorithm name or Algorithm, got {type(algorithm).__name__}"
        )
    key = algorithm.lower().replace('-', '').replace('_', '')
    try:
        return ALGORITHMS[key]
    except KeyError:
        raise ValueError(
            f"Unsupported algorithm {algorithm!r}; choose from {', '.join(sorted(ALGORITHMS))}"
        ) from None


def new(algorithm: AlgorithmLike, data: Data = b'') -> Update:
    """Start a streaming session for a named algorithm, optionally with initial data."""
    return get_algorithm(algorithm).new().update(data)


def hash_chunks(algorithm: AlgorithmLike, chunks: Iterable[Data]) -> BaseDigest:
    """Digest the concatenation of an iterable of chunks."""
    session = new(algorithm)
    for chunk in chunks:
        session.update(chunk)
    return session.digest()


def hash_stream(algorithm: AlgorithmLike, stream: BinaryIO,
                chunk_size: int = DEFAULT_CHUNK_SIZE) -> BaseDigest:
    """
    Digest everything readable from a binary stream.

    Args:
        algorithm: Algorithm or its name
        stream: Object with a ``read(size)`` method returning bytes
        chunk_size: Bytes requested per read

    Returns:
        Digest of the stream's remaining content
    """
    if chunk_size <= 0:
        raise ValueError("Chunk size must be positive")

    session = new(algorithm)
    total = 0
    while chunk := stream.read(chunk_size):
        session.update(chunk)
        total += len(chunk)

    digest = session.digest()
    logger.debug("%s: %s (%d bytes)", session.algorithm.name, digest.hex()[:16], total)
    return digest


def hash_file(algorithm: AlgorithmLike, file_path: Union[str, Path],
              chunk_size: int = DEFAULT_CHUNK_SIZE) -> BaseDigest:
    """
    Digest a file without loading it into memory.

    Raises:
        OSError: If the file cannot be opened or read
    """
    logger.debug("Hashing file %s", file_path)
    with open(file_path, 'rb') as f:
        return hash_stream(algorithm, f, chunk_size)
