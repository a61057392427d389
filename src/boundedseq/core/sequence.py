# src/boundedseq/core/sequence.py
from __future__ import annotations

import collections
import operator
from typing import Deque, Generic, Iterable, Iterator, List, Optional, TypeVar, Union

from boundedseq.core import log
from boundedseq.core.errors import EmptyAccess, InvalidCapacity, OutOfRange, StaleCursor
from boundedseq.core.metrics import gauge_set, inc

T = TypeVar("T")

_log = log.get(__name__)


class BoundedSequence(Generic[T]):
    """
    Array-like container holding at most ``capacity`` elements.

    Appending to a full sequence drops the oldest element (index 0) before
    the new one lands at the tail, so the contents are always the last
    ``capacity`` values appended, oldest first.

    Backed by ``collections.deque(maxlen=capacity)``: append and head
    eviction are O(1), ``erase`` in the middle is O(size).

    Not thread-safe. Iterators and cursors are invalidated by ``append``,
    ``erase`` and ``clear``; a live iterator raises ``RuntimeError`` on its
    next step, a cursor raises ``StaleCursor``. In-place replacement
    (``seq[i] = x``, ``set_front``, ``Cursor.value = x``) invalidates nothing.
    """

    def __init__(self, capacity: int, iterable: Iterable[T] = (), *, name: Optional[str] = None):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError(f"capacity must be int, got {type(capacity).__name__}")
        if capacity <= 0:
            raise InvalidCapacity(capacity)
        self._cap = capacity
        self._buf: Deque[T] = collections.deque(maxlen=capacity)
        self._version = 0
        self.name = name
        _log.debug("create capacity=%d name=%s", capacity, name)
        self.extend(iterable)

    # -------------------- size --------------------
    @property
    def capacity(self) -> int:
        return self._cap

    def size(self) -> int:
        return len(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def is_empty(self) -> bool:
        return not self._buf

    def __bool__(self) -> bool:
        return bool(self._buf)

    def is_full(self) -> bool:
        return len(self._buf) == self._cap

    # -------------------- insertion --------------------
    def _push(self, value: T) -> bool:
        full = len(self._buf) == self._cap
        if full:
            _log.debug("evict head name=%s capacity=%d", self.name, self._cap)
        self._buf.append(value)  # maxlen drops the head before the tail grows
        self._version += 1
        if self.name is not None:
            inc("seq_appends_total", 1, seq=self.name)
            if full:
                inc("seq_evictions_total", 1, seq=self.name)
        return full

    def append(self, value: T) -> Optional[T]:
        """Add ``value`` at the tail; return the evicted head, or None if nothing was evicted."""
        evicted = self._buf[0] if len(self._buf) == self._cap else None
        self._push(value)
        self._report_size()
        return evicted

    push_back = append

    def extend(self, iterable: Iterable[T]) -> int:
        """Append every item in order. Returns how many elements were evicted."""
        if iterable is self:
            iterable = self.to_list()
        evicted = 0
        for item in iterable:
            evicted += self._push(item)
        self._report_size()
        return evicted

    # -------------------- positional access --------------------
    def _check(self, index) -> int:
        index = operator.index(index)
        if index < 0 or index >= len(self._buf):
            raise OutOfRange(index, len(self._buf))
        return index

    def at(self, index: int) -> T:
        return self._buf[self._check(index)]

    def set(self, index: int, value: T) -> None:
        self._buf[self._check(index)] = value

    def at_unchecked(self, index: int) -> T:
        """Read the backing storage directly; result is unspecified unless 0 <= index < size."""
        return self._buf[index]

    def __getitem__(self, key: Union[int, slice]):
        if isinstance(key, slice):
            return self.to_list()[key]
        return self.at(key)

    def __setitem__(self, index: int, value: T) -> None:
        if isinstance(index, slice):
            raise TypeError("slice assignment is not supported")
        self.set(index, value)

    def __delitem__(self, index: int) -> None:
        if isinstance(index, slice):
            raise TypeError("slice deletion is not supported")
        self.erase(index)

    # -------------------- endpoints --------------------
    def front(self) -> T:
        if not self._buf:
            raise EmptyAccess("front")
        return self._buf[0]

    def back(self) -> T:
        if not self._buf:
            raise EmptyAccess("back")
        return self._buf[-1]

    def set_front(self, value: T) -> None:
        if not self._buf:
            raise EmptyAccess("set_front")
        self._buf[0] = value

    def set_back(self, value: T) -> None:
        if not self._buf:
            raise EmptyAccess("set_back")
        self._buf[-1] = value

    # -------------------- removal --------------------
    def clear(self) -> None:
        self._buf.clear()
        self._version += 1
        _log.debug("clear name=%s", self.name)
        self._report_size()

    def erase(self, position: Union[int, "Cursor[T]"]) -> "Cursor[T]":
        """
        Remove the element at ``position`` (an index or a cursor from this
        sequence). Successors shift left by one.
        Returns a cursor at the successor, which is ``end()`` when the last
        element was removed.
        """
        if isinstance(position, Cursor):
            if position._seq is not self:
                raise OutOfRange(position.index, len(self._buf))
            position._ensure_fresh()
            index = self._check(position.index)
        else:
            index = self._check(position)
        del self._buf[index]
        self._version += 1
        if self.name is not None:
            inc("seq_erases_total", 1, seq=self.name)
        self._report_size()
        return Cursor(self, index)

    # -------------------- traversal --------------------
    def __iter__(self) -> Iterator[T]:
        # deque iterators raise RuntimeError once the deque is mutated
        return iter(self._buf)

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._buf)

    def begin(self) -> "Cursor[T]":
        return Cursor(self, 0)

    def end(self) -> "Cursor[T]":
        return Cursor(self, len(self._buf))

    def cursor(self, index: int) -> "Cursor[T]":
        """Cursor at ``index``; ``index == size`` gives ``end()``."""
        index = operator.index(index)
        if index < 0 or index > len(self._buf):
            raise OutOfRange(index, len(self._buf))
        return Cursor(self, index)

    def to_list(self) -> List[T]:
        return list(self._buf)

    # -------------------- misc --------------------
    def _report_size(self) -> None:
        if self.name is not None:
            gauge_set("seq_size", float(len(self._buf)), seq=self.name)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoundedSequence):
            return NotImplemented
        return self._cap == other._cap and self._buf == other._buf

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        tag = f", name={self.name!r}" if self.name is not None else ""
        return f"{type(self).__name__}(capacity={self._cap}{tag}, {list(self._buf)!r})"


class Cursor(Generic[T]):
    """Position inside a BoundedSequence, valid until its next structural mutation."""

    __slots__ = ("_seq", "_index", "_version")

    def __init__(self, seq: BoundedSequence[T], index: int):
        self._seq = seq
        self._index = index
        self._version = seq._version

    def _ensure_fresh(self) -> None:
        if self._version != self._seq._version:
            raise StaleCursor(f"cursor at {self._index} used after the sequence was modified")

    @property
    def index(self) -> int:
        return self._index

    @property
    def at_end(self) -> bool:
        self._ensure_fresh()
        return self._index >= len(self._seq)

    @property
    def value(self) -> T:
        self._ensure_fresh()
        if self._index >= len(self._seq):
            raise OutOfRange(self._index, len(self._seq))
        return self._seq._buf[self._index]

    @value.setter
    def value(self, v: T) -> None:
        self._ensure_fresh()
        if self._index >= len(self._seq):
            raise OutOfRange(self._index, len(self._seq))
        self._seq._buf[self._index] = v

    def next(self) -> "Cursor[T]":
        if self.at_end:
            raise OutOfRange(self._index, len(self._seq))
        return Cursor(self._seq, self._index + 1)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self._seq is other._seq and self._index == other._index

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Cursor(index={self._index}, size={len(self._seq)})"
