"""
Tests for the streaming accumulator and padding.

Tests:
- Chunking invariance
- Padding boundaries (one vs two padding blocks)
- Bit-length field
- Reset, determinism, composability
- Accumulator invariants
"""

import hashlib
import random

import pytest
from cryptography.hazmat.primitives import hashes

from mdhash import sha1, Update
from mdhash.core import Block
from mdhash.core.engine import LENGTH_FIELD_BYTES
from mdhash.sha2 import sha224, sha256


MODULES = [sha1, sha224, sha256]
REFERENCES = {
    'sha1': (hashlib.sha1, hashes.SHA1),
    'sha224': (hashlib.sha224, hashes.SHA224),
    'sha256': (hashlib.sha256, hashes.SHA256),
}


def reference_hex(module, data: bytes) -> str:
    """Digest from both the standard library and cryptography; they must agree."""
    stdlib, backend = REFERENCES[module.ALGORITHM.name]
    ctx = hashes.Hash(backend())
    ctx.update(data)
    expected = ctx.finalize().hex()
    assert stdlib(data).hexdigest() == expected
    return expected


def random_partition(data: bytes, rng: random.Random):
    """Split data into ordered pieces of random length (including empty pieces)."""
    pieces = []
    offset = 0
    while offset < len(data):
        size = rng.choice([0, 1, 3, 17, 55, 63, 64, 65, 130])
        pieces.append(data[offset:offset + size])
        offset += size
    return pieces


@pytest.mark.parametrize("module", MODULES, ids=lambda m: m.ALGORITHM.name)
class TestChunkingInvariance:
    """The digest never depends on how input is split across updates."""

    @pytest.mark.parametrize("seed", range(5))
    def test_random_partitions(self, module, seed):
        """Random splits agree with the one-shot digest."""
        rng = random.Random(seed)
        data = bytes(rng.getrandbits(8) for _ in range(rng.randint(0, 400)))

        session = module.new()
        for piece in random_partition(data, rng):
            session.update(piece)

        assert session.digest() == module.hash(data)
        assert session.digest().hex() == reference_hex(module, data)

    def test_byte_at_a_time(self, module):
        """One-byte updates agree with a single update."""
        data = bytes(range(200))
        session = module.new()
        for i in range(len(data)):
            session.update(data[i:i + 1])
        assert session.digest() == module.hash(data)

    def test_no_updates_equals_empty_update(self, module):
        """The empty partition and an empty chunk both give the empty digest."""
        assert module.new().digest() == module.new().update(b"").digest()

    def test_empty_chunks_are_ignored(self, module):
        """Empty updates interleaved with data change nothing."""
        session = module.new().update(b"").update(b"abc").update(b"").update(b"def")
        assert session.digest() == module.hash(b"abcdef")

    def test_buffer_fill_then_whole_blocks(self, module):
        """A chunk that completes the buffer and carries further blocks plus a tail."""
        data = bytes(range(256)) * 2
        session = module.new().update(data[:10]).update(data[10:300]).update(data[300:])
        assert session.digest() == module.hash(data)
        assert session.digest().hex() == reference_hex(module, data)


@pytest.mark.parametrize("module", MODULES, ids=lambda m: m.ALGORITHM.name)
class TestPadding:
    """Padding rules at and around block boundaries."""

    @pytest.mark.parametrize("length", [0, 1, 54, 55, 56, 57, 62, 63, 64, 65, 119, 120, 128])
    def test_boundary_lengths(self, module, length):
        """Inputs leaving 0, 1, 2 ... bytes of room before the length field."""
        data = b"\xa5" * length
        assert module.hash(data).hex() == reference_hex(module, data)

    def test_single_padding_block(self, module, monkeypatch):
        """A 55-byte tail fits marker and length field in one block."""
        calls = []
        original = module.State.update

        def counting_update(state, block):
            calls.append(block)
            return original(state, block)

        session = module.new().update(bytes(55))
        monkeypatch.setattr(module.State, "update", counting_update)
        session.finalize()
        assert len(calls) == 1

    def test_two_padding_blocks(self, module, monkeypatch):
        """A 56-byte tail spills the padding into a second block."""
        calls = []
        original = module.State.update

        def counting_update(state, block):
            calls.append(block)
            return original(state, block)

        session = module.new().update(bytes(56))
        monkeypatch.setattr(module.State, "update", counting_update)
        session.finalize()
        assert len(calls) == 2
        # Second block: all zero except the length field
        assert calls[1].data[:-LENGTH_FIELD_BYTES] == bytes(64 - LENGTH_FIELD_BYTES)
        assert calls[1].data[-LENGTH_FIELD_BYTES:] == (56 * 8).to_bytes(8, 'big')

    def test_length_field_counts_bits(self, module):
        """The trailer holds the bit length (len * 8), not the byte length."""
        data = b"abc"
        padded = data + b"\x80" + bytes(64 - len(data) - 1 - 8) + (len(data) * 8).to_bytes(8, 'big')
        state = module.State.new().update(Block(padded))
        assert module.Digest.from_state(state) == module.hash(data)

        wrong = data + b"\x80" + bytes(64 - len(data) - 1 - 8) + len(data).to_bytes(8, 'big')
        state = module.State.new().update(Block(wrong))
        assert module.Digest.from_state(state) != module.hash(data)

    def test_length_field_includes_compressed_blocks(self, module):
        """Bytes already compressed count toward the length field."""
        data = bytes(100)
        session = module.new().update(data)
        assert session.processed == 64
        assert len(session.unprocessed) == 36
        assert session.digest().hex() == reference_hex(module, data)


@pytest.mark.parametrize("module", MODULES, ids=lambda m: m.ALGORITHM.name)
class TestLifecycle:
    """Reset, finalize and digest behaviour."""

    def test_reset_equals_new(self, module):
        """Reset after any updates is indistinguishable from a fresh session."""
        session = module.new().update(bytes(1000)).update(b"tail")
        assert session.reset() == module.new()
        assert session.digest() == module.new().digest()

    def test_reset_reuses_buffer(self, module):
        """Reset keeps the same buffer object."""
        session = module.new().update(b"partial")
        buffer = session._unprocessed
        session.reset()
        assert session._unprocessed is buffer
        assert session.processed == 0

    def test_finalize_does_not_mutate(self, module):
        """finalize() leaves the accumulator untouched and is repeatable."""
        session = module.new().update(b"x" * 70)
        before = session.copy()
        first = session.finalize()
        second = session.finalize()
        assert first == second
        assert session == before

    def test_update_after_finalize_continues(self, module):
        """The accumulator keeps streaming after a finalize snapshot."""
        session = module.new().update(b"Hello")
        session.finalize()
        session.update(b" World")
        assert session.digest() == module.hash(b"Hello World")

    def test_digest_determinism(self, module):
        """digest() on the same Finalize yields identical results."""
        final = module.new().update(b"determinism").finalize()
        assert final.digest() == final.digest()
        assert bytes(final.digest()) == bytes(final.digest())

    def test_finalize_reset_is_fresh(self, module):
        """Finalize.reset() starts a new session of the same algorithm."""
        session = module.new().update(b"abc").finalize().reset()
        assert session == module.new()

    def test_copy_is_independent(self, module):
        """A copied accumulator diverges without affecting the original."""
        session = module.new().update(b"common prefix ")
        fork = session.copy()
        fork.update(b"fork")
        session.update(b"main")
        assert session.digest() == module.hash(b"common prefix main")
        assert fork.digest() == module.hash(b"common prefix fork")


@pytest.mark.parametrize("module", MODULES, ids=lambda m: m.ALGORITHM.name)
class TestComposability:
    """Digests are valid hash input."""

    @pytest.mark.parametrize("data", [b"", b"abc", bytes(100)])
    def test_hash_of_hash(self, module, data):
        """hash(hash(x)) is stable and differs from hash(x)."""
        inner = module.hash(data)
        outer = module.hash(inner)
        assert outer == module.hash(bytes(inner))
        assert outer == module.hash(module.hash(data))
        assert outer != inner
        assert outer.hex() == reference_hex(module, bytes(inner))


class TestAccumulator:
    """Invariants and input handling of Update."""

    def test_buffer_stays_below_block_length(self):
        """After every update fewer than 64 bytes are buffered."""
        session = sha1.new()
        rng = random.Random(7)
        for _ in range(200):
            session.update(bytes(rng.randint(0, 150)))
            assert len(session.unprocessed) < sha1.BLOCK_LENGTH_BYTES

    def test_processed_counts_whole_blocks(self):
        """processed excludes buffered bytes."""
        session = sha1.new().update(bytes(63))
        assert session.processed == 0
        session.update(b"\x00")
        assert session.processed == 64
        assert session.unprocessed == b""

    def test_accepts_bytes_like(self):
        """bytearray and memoryview inputs hash like bytes."""
        expected = sha1.hash(b"abc")
        assert sha1.new().update(bytearray(b"abc")).digest() == expected
        assert sha1.new().update(memoryview(b"abc")).digest() == expected

    def test_accepts_strided_memoryview(self):
        """Non-contiguous views hash like their copied bytes."""
        short = memoryview(b"abcdefghij")[::2]
        assert sha1.new().update(short).digest() == sha1.hash(b"acegi")

        # Buffered byte first, so the view completes a block and leaves a tail
        data = bytes(range(200))
        session = sha1.new().update(b"x").update(memoryview(data)[::2])
        assert session.digest() == sha1.hash(b"x" + data[::2])
        assert session.digest().hex() == hashlib.sha1(b"x" + data[::2]).hexdigest()

    def test_str_is_utf8(self):
        """Text is hashed as UTF-8."""
        assert sha1.hash("héllo") == sha1.hash("héllo".encode("utf-8"))

    @pytest.mark.parametrize("bad", [123, None, 1.5, ["a"]])
    def test_rejects_non_bytes(self, bad):
        """Non bytes-like input raises TypeError."""
        with pytest.raises(TypeError):
            sha1.new().update(bad)

    def test_update_returns_self(self):
        """update() returns the accumulator for chaining."""
        session = sha1.new()
        assert session.update(b"a") is session
        assert isinstance(session, Update)

    def test_processed_counter_wraps(self):
        """The bit length wraps modulo 2**64 instead of raising."""
        session = sha1.new()
        # 2**61 bytes is 2**64 bits, which wraps to a zero length field
        session._processed = 1 << 61
        assert session.digest() == sha1.hash(b"")
