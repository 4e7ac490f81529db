"""
Digest

Fixed-length hash output: the big-endian serialization of the final state
words. A Digest is immutable and can itself be fed back into a hash.
"""

import hmac
from dataclasses import dataclass

from .state import BaseState
from .words import WORD_BYTES, words_to_bytes


@dataclass(frozen=True, eq=False)
class BaseDigest:
    """
    Immutable digest bytes. Subclasses set ``LENGTH`` (in bytes).

    Example:
        >>> from mdhash import sha1
        >>> digest = sha1.hash(b"")
        >>> digest.to_hex_lowercase()
        'da39a3ee5e6b4b0d3255bfef95601890afd80709'
    """
    data: bytes

    LENGTH = 0

    def __post_init__(self):
        if len(self.data) != self.LENGTH:
            raise ValueError(
                f"{type(self).__name__} must be {self.LENGTH} bytes, got {len(self.data)}"
            )
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))

    @classmethod
    def from_state(cls, state: BaseState) -> 'BaseDigest':
        """Serialize the leading state words big-endian (truncating if needed)."""
        return cls(words_to_bytes(state.words[:cls.LENGTH // WORD_BYTES]))

    @classmethod
    def from_hex(cls, text: str) -> 'BaseDigest':
        """
        Parse a hex string (either case).

        Raises:
            ValueError: If the text is not hex or has the wrong length
        """
        if len(text) != cls.LENGTH * 2:
            raise ValueError(
                f"Expected {cls.LENGTH * 2} hex characters, got {len(text)}"
            )
        return cls(bytes.fromhex(text))

    def as_bytes(self) -> bytes:
        return self.data

    def to_hex_lowercase(self) -> str:
        return self.data.hex()

    def to_hex_uppercase(self) -> str:
        return self.data.hex().upper()

    def hex(self) -> str:
        """Lowercase hex, matching ``bytes.hex()``."""
        return self.to_hex_lowercase()

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other):
        if isinstance(other, BaseDigest):
            return type(self) is type(other) and hmac.compare_digest(self.data, other.data)
        if isinstance(other, (bytes, bytearray)):
            return hmac.compare_digest(self.data, bytes(other))
        return NotImplemented

    def __hash__(self):
        return hash(self.data)

    def __str__(self) -> str:
        return self.to_hex_lowercase()

    def __format__(self, spec: str) -> str:
        if spec == 'X':
            return self.to_hex_uppercase()
        if spec in ('', 'x'):
            return self.to_hex_lowercase()
        return format(str(self), spec)
