"""Bounded, reusable path buffer shared across recursive directory visits."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final

# Linux PATH_MAX; includes room for every byte of the path.
PATH_MAX: Final[int] = 4096

SEP: Final[bytes] = os.sep.encode()


class CapacityExceeded(ValueError):
    """Raised when a segment does not fit in the remaining buffer capacity."""


class PathBuffer:
    """Fixed-capacity byte buffer holding the path currently being visited.

    The buffer is allocated once and reused for the whole traversal.
    Appending writes a segment after the current logical length;
    truncating moves the logical length back. Callers save the length
    before descending and restore it afterwards, which is what
    ``checkpoint()`` does for them.
    """

    __slots__ = ("_data", "_length")

    def __init__(self, capacity: int = PATH_MAX) -> None:
        """Allocate an empty buffer.

        Args:
            capacity: Maximum number of path bytes the buffer can hold.
        """
        self._data = bytearray(capacity)
        self._length = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        """Bytes still available after the current logical length."""
        return len(self._data) - self._length

    def __len__(self) -> int:
        return self._length

    def append(self, segment: bytes | str) -> None:
        """Append *segment* at the current logical length.

        Raises:
            CapacityExceeded: If the segment does not fit; the buffer is
                left unchanged.
        """
        raw = os.fsencode(segment)
        end = self._length + len(raw)
        if end > len(self._data):
            raise CapacityExceeded(
                f"segment of {len(raw)} bytes exceeds remaining capacity {self.remaining}"
            )
        self._data[self._length:end] = raw
        self._length = end

    def truncate(self, length: int) -> None:
        """Move the logical end back to *length*."""
        if not 0 <= length <= self._length:
            raise ValueError(f"cannot truncate buffer of length {self._length} to {length}")
        self._length = length

    def ends_with_separator(self) -> bool:
        return self._length > 0 and self._data[self._length - 1:self._length] == SEP

    @contextmanager
    def checkpoint(self) -> Iterator[int]:
        """Restore the current length on exit, including early returns.

        Yields:
            int: The saved length.
        """
        saved = self._length
        try:
            yield saved
        finally:
            self._length = saved

    def as_bytes(self) -> bytes:
        return bytes(self._data[:self._length])

    def __str__(self) -> str:
        return os.fsdecode(self.as_bytes())

    def __repr__(self) -> str:
        return f"PathBuffer({str(self)!r}, capacity={self.capacity})"
