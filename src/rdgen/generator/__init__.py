"""Seeded hash-chain generator and its length-bounded emitter."""

from .bounded import (
    Bounded,
    BoundedEmitter,
    LengthBound,
    Unbounded,
    as_length_bound,
    generate,
)
from .hash_chain import HashChainGenerator
from .seed_digest import CHUNK_SIZE, DIGEST_SIZE, DataStreamError, digest, digest_bytes

__all__ = [
    "Bounded",
    "BoundedEmitter",
    "CHUNK_SIZE",
    "DIGEST_SIZE",
    "DataStreamError",
    "HashChainGenerator",
    "LengthBound",
    "Unbounded",
    "as_length_bound",
    "digest",
    "digest_bytes",
    "generate",
]
