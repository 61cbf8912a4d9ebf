"""Reduce arbitrary seed material to the fixed-width initial chain state."""

from __future__ import annotations

import hashlib
import logging
from typing import BinaryIO, Iterable, Union

CHUNK_SIZE = 4096
DIGEST_SIZE = 64

SeedLike = Union[str, bytes, bytearray, memoryview, Iterable[int]]

logger = logging.getLogger(__name__)


class DataStreamError(RuntimeError):
    """Raised when the seed source cannot be read."""

    def __init__(self, detail: object) -> None:
        super().__init__(f"Error while reading data stream: `{detail}`")
        self.detail = str(detail)


def new_hasher():
    return hashlib.blake2b(digest_size=DIGEST_SIZE)


def ensure_bytes(value: SeedLike) -> bytes:
    """Coerce the provided seed into a ``bytes`` instance.

    Iterables must hold integers in ``range(256)``; anything else raises
    ``ValueError`` or ``TypeError`` rather than being folded into a byte.
    """

    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, int):
        raise TypeError(f"seed must be bytes-like, text or an iterable of ints, got {value!r}")
    return bytes(value)


def digest(source: BinaryIO) -> bytes:
    """Digest ``source`` chunk by chunk until a zero-length read.

    The source is any object with a ``read(size)`` method returning bytes,
    such as an open binary file, ``sys.stdin.buffer`` or :class:`io.BytesIO`.
    Read failures are reported as :class:`DataStreamError`; nothing is
    retried since the stream position is unknown after an error.
    """

    hasher = new_hasher()
    total = 0
    while True:
        try:
            chunk = source.read(CHUNK_SIZE)
        except OSError as exc:
            raise DataStreamError(exc) from exc
        if chunk is None:
            raise DataStreamError("source returned no data (non-blocking stream?)")
        if not isinstance(chunk, (bytes, bytearray, memoryview)):
            raise DataStreamError(
                f"expected bytes from source, got {type(chunk).__name__}"
            )
        if not chunk:
            break
        hasher.update(chunk)
        total += len(chunk)
    logger.debug("Digested %d bytes of seed material", total)
    return hasher.digest()


def digest_bytes(seed: SeedLike) -> bytes:
    """Digest an in-memory seed. Cannot fail."""

    hasher = new_hasher()
    hasher.update(ensure_bytes(seed))
    return hasher.digest()


__all__ = [
    "CHUNK_SIZE",
    "DIGEST_SIZE",
    "DataStreamError",
    "SeedLike",
    "digest",
    "digest_bytes",
    "ensure_bytes",
]
