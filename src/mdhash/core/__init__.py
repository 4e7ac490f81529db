# Core Engine Module
"""
Shared Merkle-Damgard machinery:
- 32-bit word arithmetic - words.py
- Fixed-size input blocks - block.py
- Immutable running state - state.py
- Digest value type - digest.py
- Streaming accumulator and padding - engine.py
"""

from .block import Block, BlockLengthError, BLOCK_LENGTH_BYTES
from .digest import BaseDigest
from .engine import Algorithm, Finalize, Update, LENGTH_FIELD_BYTES
from .state import BaseState

__all__ = [
    'Algorithm',
    'BaseDigest',
    'BaseState',
    'Block',
    'BlockLengthError',
    'Finalize',
    'Update',
    'BLOCK_LENGTH_BYTES',
    'LENGTH_FIELD_BYTES',
]
