"""
Hash State

The running hash value: a fixed number of 32-bit working words. States are
immutable, so ``update`` returns a new State and the old one stays valid. Each
algorithm subclasses ``BaseState`` and supplies its initial constants and its
compression function.
"""

from dataclasses import dataclass
from typing import ClassVar, Tuple

from .block import Block
from .words import MASK_32


@dataclass(frozen=True)
class BaseState:
    """
    Immutable running hash state.

    Subclasses define:
        INITIAL: initialization constants (one per state word)
        ROUNDS: number of compression rounds
        _compress(words): the per-block transform, before feed-forward
    """
    words: Tuple[int, ...]

    INITIAL: ClassVar[Tuple[int, ...]] = ()
    ROUNDS = 0

    def __post_init__(self):
        words = tuple(self.words)
        if len(words) != len(self.INITIAL):
            raise ValueError(
                f"{type(self).__name__} requires {len(self.INITIAL)} words, got {len(words)}"
            )
        for word in words:
            if not 0 <= word <= MASK_32:
                raise ValueError(f"State word out of 32-bit range: {word:#x}")
        object.__setattr__(self, 'words', words)

    @classmethod
    def new(cls) -> 'BaseState':
        """Create a state holding the algorithm's initialization constants."""
        return cls(cls.INITIAL)

    @classmethod
    def default(cls) -> 'BaseState':
        """Alias of ``new()``."""
        return cls.new()

    def update(self, block: Block) -> 'BaseState':
        """
        Fold one block into the state.

        Runs the compression rounds on the block's words, then adds each
        result word to the corresponding input word (feed-forward).

        Args:
            block: Exactly one block of input

        Returns:
            New state; ``self`` is unchanged
        """
        compressed = self._compress(block.words())
        return type(self)(tuple(
            (before + after) & MASK_32
            for before, after in zip(self.words, compressed)
        ))

    def reset(self) -> 'BaseState':
        """Discard all processed history."""
        return self.new()

    def _compress(self, block_words: Tuple[int, ...]) -> Tuple[int, ...]:
        raise NotImplementedError
