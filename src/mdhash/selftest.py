"""
Self Test

Checks every algorithm against published test vectors (RFC 3174, FIPS 180-4
examples) and against the OpenSSL-backed hashes from the ``cryptography``
package, including inputs that straddle the padding boundaries.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from cryptography.hazmat.primitives import hashes

from .core.engine import Algorithm
from .stream import ALGORITHMS, AlgorithmLike, get_algorithm


logger = logging.getLogger(__name__)

BACKEND_HASHES = {
    'sha1': hashes.SHA1,
    'sha224': hashes.SHA224,
    'sha256': hashes.SHA256,
}

_TWO_BLOCK = b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"

KNOWN_ANSWERS: Dict[str, List[Tuple[bytes, str]]] = {
    'sha1': [
        (b"", "da39a3ee5e6b4b0d3255bfef95601890afd80709"),
        (b"abc", "a9993e364706816aba3e25717850c26c9cd0d89d"),
        (_TWO_BLOCK, "84983e441c3bd26ebaae4aa1f95129e5e54670f1"),
        (b"Hello World", "0a4d55a8d778e5022fab701977c5d840bbc486d0"),
        (bytes(60), "fb3d8fb74570a077e332993f7d3d27603501b987"),
        (bytes(64), "c8d7d0ef0eedfa82d2ea1aa592845b9a6d4b02b7"),
    ],
    'sha224': [
        (b"", "d14a028c2a3a2bc9476102bb288234c415a2b01f828ea62ac5b3e42f"),
        (b"abc", "23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7"),
        (_TWO_BLOCK, "75388b16512776cc5dba5da1fd890150b0c6455cb4f58b1952522525"),
    ],
    'sha256': [
        (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
        (b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
        (_TWO_BLOCK, "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
    ],
}

# Tail lengths around the point where padding needs a second block
BOUNDARY_LENGTHS = (0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 127, 128, 129)


@dataclass
class Failure:
    """A mismatching digest."""
    algorithm: str
    length: int
    expected: str
    actual: str


def backend_digest(algorithm: AlgorithmLike, data: bytes) -> bytes:
    """Digest data with the ``cryptography`` implementation of the same algorithm."""
    algorithm = get_algorithm(algorithm)
    ctx = hashes.Hash(BACKEND_HASHES[algorithm.name]())
    ctx.update(data)
    return ctx.finalize()


def check_known_answers(algorithm: Algorithm) -> List[Failure]:
    failures = []
    for data, expected in KNOWN_ANSWERS.get(algorithm.name, []):
        actual = algorithm.hash(data).hex()
        if actual != expected:
            failures.append(Failure(algorithm.name, len(data), expected, actual))
    return failures


def check_against_backend(algorithm: Algorithm) -> List[Failure]:
    """Compare one-shot and byte-at-a-time digests with the backend."""
    failures = []
    for length in BOUNDARY_LENGTHS:
        data = bytes(i & 0xFF for i in range(length))
        expected = backend_digest(algorithm, data).hex()

        session = algorithm.new()
        for i in range(length):
            session.update(data[i:i + 1])

        for actual in (algorithm.hash(data).hex(), session.digest().hex()):
            if actual != expected:
                failures.append(Failure(algorithm.name, length, expected, actual))
    return failures


def run() -> List[Failure]:
    """
    Run all checks for all algorithms.

    Returns:
        List of failures (empty when everything matches)
    """
    failures = []
    for name, algorithm in sorted(ALGORITHMS.items()):
        found = check_known_answers(algorithm) + check_against_backend(algorithm)
        if found:
            logger.warning("%s: %d check(s) failed", name, len(found))
        else:
            logger.debug("%s: all checks passed", name)
        failures.extend(found)
    return failures
