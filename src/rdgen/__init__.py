"""Reproducible random data generation from an arbitrary seed."""

from __future__ import annotations

import importlib
from types import ModuleType

from .generator import (
    Bounded,
    BoundedEmitter,
    DataStreamError,
    HashChainGenerator,
    Unbounded,
    generate,
)

__version__ = "0.1.0"

_SUBMODULES = ("cli",)


def __getattr__(name: str) -> ModuleType:
    if name in _SUBMODULES:
        module = importlib.import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Bounded",
    "BoundedEmitter",
    "DataStreamError",
    "HashChainGenerator",
    "Unbounded",
    "__version__",
    "cli",
    "generate",
]


def __dir__() -> list[str]:
    return sorted(list(__all__) + list(globals().keys()))
