# src/boundedseq/core/errors.py
from __future__ import annotations

__all__ = [
    "BoundedSequenceError",
    "OutOfRange",
    "EmptyAccess",
    "InvalidCapacity",
    "StaleCursor",
    "ConfigError",
]


class BoundedSequenceError(Exception):
    """Base class for every error raised by boundedseq."""


class OutOfRange(BoundedSequenceError, IndexError):
    """Index or cursor does not point at a live element."""
    def __init__(self, index: int, size: int):
        super().__init__(f"index {index} out of range for size {size}")
        self.index = index
        self.size = size


class EmptyAccess(BoundedSequenceError, IndexError):
    """front()/back() on an empty sequence."""
    def __init__(self, op: str):
        super().__init__(f"{op}() on empty sequence")
        self.op = op


class InvalidCapacity(BoundedSequenceError, ValueError):
    def __init__(self, capacity):
        super().__init__(f"capacity must be > 0 (got {capacity!r})")
        self.capacity = capacity


class StaleCursor(BoundedSequenceError, RuntimeError):
    """Cursor used after the sequence it points into was mutated."""


class ConfigError(BoundedSequenceError, ValueError):
    pass
