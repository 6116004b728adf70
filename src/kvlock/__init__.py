"""kvlock: a distributed lock built on key-value store primitives."""

__all__ = ["__version__"]

__version__ = "0.1.0"
