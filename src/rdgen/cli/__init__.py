"""Command line interfaces for rdgen."""

from .rdgen import main

__all__ = ["main"]
