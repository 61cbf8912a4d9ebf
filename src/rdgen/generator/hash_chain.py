"""Infinite hash chain producing fixed-width blocks from a seed."""

from __future__ import annotations

from typing import BinaryIO, Iterator

from .seed_digest import DIGEST_SIZE, SeedLike, digest, digest_bytes, new_hasher


class HashChainGenerator:
    """Deterministic, non-restartable sequence of ``DIGEST_SIZE`` blocks.

    Each :meth:`pull` returns the current chain state and replaces it with the
    hash of that state, so the first block is the seed digest itself and the
    state is always one step ahead of what has been emitted.

    With ``digested=True`` the seed is taken as an existing chain state and
    must be exactly ``DIGEST_SIZE`` bytes long.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: SeedLike, *, digested: bool = False) -> None:
        if digested:
            state = bytes(seed)
            if len(state) != DIGEST_SIZE:
                raise ValueError(
                    f"chain state must be {DIGEST_SIZE} bytes, got {len(state)}"
                )
        else:
            state = digest_bytes(seed)
        self._state = state

    @classmethod
    def from_stream(cls, source: BinaryIO) -> "HashChainGenerator":
        """Build a generator seeded with the digest of ``source``.

        Raises :class:`~rdgen.generator.seed_digest.DataStreamError` before
        any instance exists when the source cannot be read.
        """

        return cls(digest(source), digested=True)

    @property
    def batch_size(self) -> int:
        return DIGEST_SIZE

    def pull(self) -> bytes:
        hasher = new_hasher()
        hasher.update(self._state)
        block, self._state = self._state, hasher.digest()
        return block

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        return self.pull()


__all__ = ["HashChainGenerator"]
