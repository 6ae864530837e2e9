"""
Memory tape.

The tape is an unbounded, two-directional sequence of byte cells. Cells
live in fixed-size chunks linked in both directions; a new zero-filled
chunk is allocated only when the cursor walks past either end of the
tape. The tape also tracks how far left and right the cursor has ever
been, so the boundary checks never need to scan chunks.

A Tape must not be shared by concurrently running interpreters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

CHUNK_SIZE = 128


class _Chunk:
    __slots__ = ('cells', 'prev', 'next', 'index')

    def __init__(self, index: int):
        self.cells = np.zeros(CHUNK_SIZE, dtype=np.uint8)
        self.prev: Optional[_Chunk] = None
        self.next: Optional[_Chunk] = None
        # Position of the chunk relative to the one the tape started with.
        self.index = index


@dataclass(frozen=True)
class _Bookmark:
    chunk: _Chunk
    offset: int


class Tape:
    def __init__(self):
        self._head = _Chunk(0)
        self._tail = self._head
        self._current = self._head
        self._offset = 0
        # Lowest visited offset in the first chunk, highest in the last one.
        self.lower_limit = 0
        self.upper_limit = 0
        self._bookmarks: List[_Bookmark] = []

    # ---------------- cells ----------------
    def read_current(self) -> int:
        return int(self._current.cells[self._offset])

    def write_current(self, value: int) -> None:
        self._current.cells[self._offset] = value & 0xFF

    # ---------------- movement ----------------
    def move_left(self) -> None:
        if self._offset == 0:
            if self._current.prev is None:
                chunk = _Chunk(self._current.index - 1)
                chunk.next = self._current
                self._current.prev = chunk
                self._head = chunk
                self.lower_limit = CHUNK_SIZE - 1
            self._current = self._current.prev
            self._offset = CHUNK_SIZE - 1
        else:
            self._offset -= 1
            if self._current.prev is None and self._offset < self.lower_limit:
                self.lower_limit = self._offset

    def move_right(self) -> None:
        if self._offset == CHUNK_SIZE - 1:
            if self._current.next is None:
                chunk = _Chunk(self._current.index + 1)
                chunk.prev = self._current
                self._current.next = chunk
                self._tail = chunk
                self.upper_limit = 0
            self._current = self._current.next
            self._offset = 0
        else:
            self._offset += 1
            if self._current.next is None and self._offset > self.upper_limit:
                self.upper_limit = self._offset

    def is_at_leftmost_visited(self) -> bool:
        return self._current.prev is None and self._offset == self.lower_limit

    def is_at_rightmost_visited(self) -> bool:
        return self._current.next is None and self._offset == self.upper_limit

    @property
    def position(self) -> int:
        """Cursor position relative to the cell the tape started on."""
        return self._current.index * CHUNK_SIZE + self._offset

    # ---------------- bookmarks ----------------
    def push_bookmark(self) -> None:
        self._bookmarks.append(_Bookmark(self._current, self._offset))

    def pop_bookmark(self) -> bool:
        """Restore the most recent bookmark. Returns False if there is none."""
        if not self._bookmarks:
            return False
        bookmark = self._bookmarks.pop()
        self._current = bookmark.chunk
        self._offset = bookmark.offset
        return True

    @property
    def bookmark_depth(self) -> int:
        return len(self._bookmarks)

    # ---------------- inspection ----------------
    def visited(self) -> np.ndarray:
        """Values of every cell between the leftmost and rightmost visited cell."""
        parts = []
        chunk: Optional[_Chunk] = self._head
        while chunk is not None:
            lo = self.lower_limit if chunk is self._head else 0
            hi = self.upper_limit if chunk is self._tail else CHUNK_SIZE - 1
            parts.append(chunk.cells[lo:hi + 1])
            chunk = chunk.next
        return np.concatenate(parts)

    def dump(self) -> str:
        """Render the visited part of the tape, marking the current cell."""
        first = self._head.index * CHUNK_SIZE + self.lower_limit
        cursor = self.position - first
        out = []
        for i, value in enumerate(self.visited()):
            if i == cursor:
                out.append(f"<{int(value)}>")
            else:
                out.append(str(int(value)))
        return "[ " + " ".join(out) + " ]"

    def __repr__(self) -> str:
        return f"Tape(position={self.position}, value={self.read_current()})"
