from __future__ import annotations

import io
import itertools

import pytest

from rdgen.generator import (
    Bounded,
    BoundedEmitter,
    HashChainGenerator,
    Unbounded,
    as_length_bound,
    generate,
)

BLOCK_0 = "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d17d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923"
BLOCK_1 = "66cb547665e462bbdd51d9b6ce1221116e9cfc6711c78d8798158349d12fa8ca513efb14bd84edf4e7cd3551355f14c1cf54dd203669b95675e52d72d3ec00d9"
BLOCK_2 = "2ddda015a6b31d39fa9e6d54bb55bab1999a224d23b094fb1f77c41a1ea597c485e10bc721dd5531f1cddc52fdafa09c03ac4fbaaac9271241bd1da64dbd390c"
BLOCK_3 = "50f4b533357084ec5a41ff26dfd36e069a1bf23ed6fd17ee341cf082d409854480332831399565d3f6fa0bed4cab0fad7c81c62b66c2b328ab880f139a094e1c"
BLOCK_4 = "500cb0c9c086a7d65309a6e1d792501f811812411dc22f557c687af44428b68ce19f15ffe1f469cad0fe1180182151ac86f7f406f97e35f943bb084f1f51462b"


def test_multiple_of_block_size() -> None:
    emitter = BoundedEmitter("abc", 256)

    assert emitter.pull().hex() == BLOCK_0
    assert emitter.pull().hex() == BLOCK_1
    assert emitter.pull().hex() == BLOCK_2
    assert emitter.pull().hex() == BLOCK_3
    assert emitter.finished
    for _ in range(1000):
        assert emitter.pull() == b""


def test_non_multiple_length_truncates_the_last_block() -> None:
    emitter = BoundedEmitter("abc", 100)

    assert emitter.pull().hex() == BLOCK_0
    assert emitter.pull().hex() == "66cb547665e462bbdd51d9b6ce1221116e9cfc6711c78d8798158349d12fa8ca513efb14"
    assert emitter.pulled_length == 100
    for _ in range(1000):
        assert emitter.pull() == b""


def test_zero_length_is_empty_from_the_start() -> None:
    emitter = BoundedEmitter("abc", 0)

    assert emitter.finished
    for _ in range(1000):
        assert emitter.pull() == b""
    assert list(emitter) == []


def test_unbounded_never_ends() -> None:
    emitter = BoundedEmitter("abc", None)

    assert [emitter.pull().hex() for _ in range(5)] == [BLOCK_0, BLOCK_1, BLOCK_2, BLOCK_3, BLOCK_4]
    for _ in range(100):
        assert len(emitter.pull()) == emitter.batch_size
    assert not emitter.finished


def test_unbounded_iteration_keeps_yielding() -> None:
    chunks = list(itertools.islice(BoundedEmitter(b"abc", Unbounded()), 50))

    assert len(chunks) == 50
    assert all(len(chunk) == 64 for chunk in chunks)


def test_iteration_stops_exactly_at_the_bound() -> None:
    chunks = list(BoundedEmitter(b"abc", 130))

    assert [len(chunk) for chunk in chunks] == [64, 64, 2]


def test_truncated_block_still_advances_the_chain() -> None:
    generator = HashChainGenerator(b"abc")
    emitter = BoundedEmitter.wrap(generator, 10)

    assert emitter.pull() == bytes.fromhex(BLOCK_0)[:10]
    assert generator.pull().hex() == BLOCK_1


def test_finished_emitter_does_not_advance_the_chain() -> None:
    generator = HashChainGenerator(b"abc")
    emitter = BoundedEmitter.wrap(generator, 64)

    emitter.pull()
    emitter.pull()
    emitter.pull()

    assert generator.pull().hex() == BLOCK_1


def test_all_sizes_are_prefixes_of_the_longest_output() -> None:
    max_size = 2000
    expected = generate("abc", max_size)

    assert len(expected) == max_size
    for size in range(max_size):
        actual = generate("abc", size)
        assert len(actual) == size
        assert actual == expected[:size]


def test_generate_is_deterministic() -> None:
    assert generate(b"\x00\xff seed", 777) == generate(b"\x00\xff seed", 777)


def test_generate_requires_a_bound() -> None:
    with pytest.raises(ValueError):
        generate(b"abc", None)  # type: ignore[arg-type]


def test_from_stream_matches_in_memory_seed() -> None:
    from_stream = BoundedEmitter.from_stream(io.BytesIO(b"abc"), 300)

    assert b"".join(from_stream) == generate(b"abc", 300)


def test_write_to_sink_reports_bytes_written() -> None:
    sink = io.BytesIO()

    written = BoundedEmitter(b"abc", 100).write_to(sink)

    assert written == 100
    assert sink.getvalue() == generate(b"abc", 100)


def test_write_to_propagates_sink_errors() -> None:
    class ClosedSink:
        def write(self, data: bytes) -> int:
            raise BrokenPipeError("closed")

    with pytest.raises(BrokenPipeError):
        BoundedEmitter(b"abc", None).write_to(ClosedSink())


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, Unbounded()),
        (0, Bounded(0)),
        (42, Bounded(42)),
        (Bounded(7), Bounded(7)),
        (Unbounded(), Unbounded()),
    ],
)
def test_as_length_bound(value, expected) -> None:
    assert as_length_bound(value) == expected


def test_bounded_rejects_negative_lengths() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        Bounded(-1)


@pytest.mark.parametrize("value", [1.5, "10", True])
def test_bounded_rejects_non_integers(value) -> None:
    with pytest.raises(TypeError):
        Bounded(value)


def test_emitter_accepts_an_existing_generator() -> None:
    generator = HashChainGenerator(b"abc")
    generator.pull()

    emitter = BoundedEmitter(generator, 64)

    assert emitter.pull().hex() == BLOCK_1
    assert emitter.length == Bounded(64)
    assert emitter.pull() == b""
