"""Length accounting on top of :class:`HashChainGenerator`.

:class:`BoundedEmitter` turns the infinite block chain into either an
exact-length byte stream or an endless one. Truncation only ever trims the
tail of the last block, so for a given seed the output for a shorter length
is always a prefix of the output for a longer one.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import BinaryIO, Iterator, Protocol, Union

from .hash_chain import HashChainGenerator
from .seed_digest import SeedLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounded:
    """Emit exactly ``target`` bytes, then stop."""

    target: int

    def __post_init__(self) -> None:
        if isinstance(self.target, bool) or not isinstance(self.target, int):
            raise TypeError(f"length must be an integer, got {self.target!r}")
        if self.target < 0:
            raise ValueError(f"length must be non-negative, got {self.target}")


@dataclass(frozen=True)
class Unbounded:
    """Emit blocks forever."""


LengthBound = Union[Bounded, Unbounded]


def as_length_bound(value: Union[LengthBound, int, None]) -> LengthBound:
    """Map ``None`` to :class:`Unbounded` and integers to :class:`Bounded`."""

    if isinstance(value, (Bounded, Unbounded)):
        return value
    if value is None:
        return Unbounded()
    return Bounded(value)


class ByteSink(Protocol):
    def write(self, data: bytes) -> object: ...


class BoundedEmitter:
    """Single-use emitter yielding the chain output up to a length bound.

    ``seed`` is either seed material or an existing :class:`HashChainGenerator`,
    which the emitter then pulls from directly.
    """

    def __init__(
        self,
        seed: Union[SeedLike, HashChainGenerator],
        length: Union[LengthBound, int, None] = None,
    ) -> None:
        if isinstance(seed, HashChainGenerator):
            self._generator = seed
        else:
            self._generator = HashChainGenerator(seed)
        self._length = as_length_bound(length)
        self._pulled_length = 0

    @classmethod
    def from_stream(
        cls,
        source: BinaryIO,
        length: Union[LengthBound, int, None] = None,
    ) -> "BoundedEmitter":
        return cls(HashChainGenerator.from_stream(source), length)

    @classmethod
    def wrap(
        cls,
        generator: HashChainGenerator,
        length: Union[LengthBound, int, None] = None,
    ) -> "BoundedEmitter":
        return cls(generator, length)

    @property
    def length(self) -> LengthBound:
        return self._length

    @property
    def pulled_length(self) -> int:
        return self._pulled_length

    @property
    def batch_size(self) -> int:
        return self._generator.batch_size

    @property
    def finished(self) -> bool:
        if isinstance(self._length, Bounded):
            return self._pulled_length == self._length.target
        return False

    def pull(self) -> bytes:
        """Return the next chunk, or ``b""`` once the bound is reached."""

        length = self._length
        if isinstance(length, Unbounded):
            return self._generator.pull()

        remaining = length.target - self._pulled_length
        assert remaining >= 0, "emitted more bytes than the requested length"
        if remaining == 0:
            return b""

        block = self._generator.pull()
        batch_size = self._generator.batch_size
        if remaining > batch_size:
            self._pulled_length += batch_size
            return block

        # The chain advanced a full block even though only a prefix is emitted.
        self._pulled_length += remaining
        logger.debug("Reached requested length of %d bytes", length.target)
        return block[:remaining]

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        data = self.pull()
        if not data:
            raise StopIteration
        return data

    def write_to(self, sink: ByteSink) -> int:
        """Write every remaining chunk to ``sink`` and return the byte count.

        Never returns for an unbounded emitter unless ``sink.write`` raises.
        """

        written = 0
        for chunk in self:
            sink.write(chunk)
            written += len(chunk)
        return written


def generate(seed: SeedLike, length: Union[Bounded, int]) -> bytes:
    """Return the complete output for ``seed`` truncated to ``length`` bytes."""

    bound = as_length_bound(length)
    if isinstance(bound, Unbounded):
        raise ValueError("generate() requires a bounded length")
    return b"".join(BoundedEmitter(seed, bound))


__all__ = [
    "Bounded",
    "BoundedEmitter",
    "ByteSink",
    "LengthBound",
    "Unbounded",
    "as_length_bound",
    "generate",
]
