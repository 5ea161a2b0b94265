import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class CursorPosition:
    line: int = 0
    col: int = 0


class DocumentBuffer:
    """Ordered, capacity-bounded sequence of text lines.

    The buffer always holds at least one line; an empty document is a
    single empty line. Every structural or textual change sets ``dirty``.
    Index arguments are clamped instead of raising, so every operation is
    total.
    """

    lines: list[str]
    dirty: bool

    def __init__(self, lines: Optional[Iterable[str]] = None,
                 capacity: int = EditorConstants.MAX_LINES,
                 notify: Optional[Callable[[str], None]] = None):
        self.capacity = max(1, capacity)
        self.lines = list(lines) if lines is not None else [""]
        if not self.lines:
            self.lines = [""]
        del self.lines[self.capacity:]
        self.dirty = False
        # Receives user-facing notices (capacity exceeded, truncation)
        self.notify = notify

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_full(self) -> bool:
        return len(self.lines) >= self.capacity

    def line_length(self, index: int) -> int:
        """Length of line ``index``, or 0 when out of range."""
        if 0 <= index < len(self.lines):
            return len(self.lines[index])
        return 0

    def _notice(self, message: str) -> None:
        if self.notify is not None:
            self.notify(message)

    def _clamp_line_index(self, index: int) -> int:
        return max(0, min(index, len(self.lines) - 1))

    def insert_line(self, index: int, text: str = "") -> bool:
        """Insert ``text`` as a new line before ``index``.

        Returns False (and leaves the document untouched) when the buffer
        is already at capacity.
        """
        if self.is_full:
            self._notice(EditorConstants.BUFFER_FULL_MESSAGE)
            return False
        index = max(0, min(index, len(self.lines)))
        self.lines.insert(index, text)
        self.dirty = True
        return True

    def delete_line(self, index: int) -> None:
        """Remove line ``index``; the last remaining line is blanked instead."""
        index = self._clamp_line_index(index)
        if len(self.lines) == 1:
            self.lines[0] = ""
        else:
            del self.lines[index]
        self.dirty = True

    def replace_line(self, index: int, text: str) -> None:
        index = self._clamp_line_index(index)
        self.lines[index] = text
        self.dirty = True

    def load(self, text: str) -> bool:
        """Replace the whole document with ``text`` split on line feeds.

        A trailing line feed yields a trailing empty line so that
        ``join()`` reproduces ``text`` exactly. Lines beyond the capacity
        are dropped; returns False in that case.
        """
        lines = text.split('\n')
        complete = len(lines) <= self.capacity
        if not complete:
            logger.warning("Dropping %d lines past capacity %d",
                           len(lines) - self.capacity, self.capacity)
            del lines[self.capacity:]
            self._notice(EditorConstants.TRUNCATED_MESSAGE.format(self.capacity))
        self.lines = lines or [""]
        self.dirty = False
        return complete

    def join(self) -> str:
        return '\n'.join(self.lines)


class CursorModel:
    """A (line, col) position kept inside the bounds of a DocumentBuffer."""

    position: CursorPosition

    def __init__(self, buffer: DocumentBuffer):
        self.buffer = buffer
        self.position = CursorPosition()

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def col(self) -> int:
        return self.position.col

    def move_to(self, line: int, col: int) -> None:
        self.position = CursorPosition(line, col)
        self.clamp()

    def clamp(self) -> None:
        """Pull the cursor back inside the document. Idempotent."""
        pos = self.position
        pos.line = max(0, min(pos.line, self.buffer.line_count - 1))
        pos.col = max(0, min(pos.col, self.buffer.line_length(pos.line)))

    def move_left(self) -> None:
        pos = self.position
        if pos.col > 0:
            pos.col -= 1
        elif pos.line > 0:
            pos.line -= 1
            pos.col = self.buffer.line_length(pos.line)

    def move_right(self) -> None:
        pos = self.position
        if pos.col < self.buffer.line_length(pos.line):
            pos.col += 1
        elif pos.line < self.buffer.line_count - 1:
            pos.line += 1
            pos.col = 0

    def move_up(self) -> None:
        pos = self.position
        if pos.line > 0:
            pos.line -= 1
            pos.col = min(pos.col, self.buffer.line_length(pos.line))

    def move_down(self) -> None:
        pos = self.position
        if pos.line < self.buffer.line_count - 1:
            pos.line += 1
            pos.col = min(pos.col, self.buffer.line_length(pos.line))

    def move_home(self) -> None:
        self.position.col = 0

    def move_end(self) -> None:
        self.position.col = self.buffer.line_length(self.position.line)

    def page_up(self, rows: int) -> None:
        self.position.line -= max(1, rows)
        self.clamp()

    def page_down(self, rows: int) -> None:
        self.position.line += max(1, rows)
        self.clamp()


class TextModel:
    """Character-level editing over a buffer and its cursor."""

    def __init__(self, buffer: DocumentBuffer, cursor: CursorModel):
        self.buffer = buffer
        self.cursor = cursor

    def _current(self) -> tuple[int, int, str]:
        self.cursor.clamp()
        pos = self.cursor.position
        return pos.line, pos.col, self.buffer[pos.line]

    def insert_text(self, text: str) -> None:
        """Insert single-line ``text`` at the cursor and advance past it."""
        if not text:
            return
        line, col, current = self._current()
        self.buffer.replace_line(line, current[:col] + text + current[col:])
        self.cursor.position.col = col + len(text)

    def split_line(self) -> bool:
        """Break the current line at the cursor; cursor lands on the new line."""
        line, col, current = self._current()
        if not self.buffer.insert_line(line + 1, current[col:]):
            return False
        self.buffer.replace_line(line, current[:col])
        self.cursor.position = CursorPosition(line + 1, 0)
        return True

    def backspace(self) -> None:
        line, col, current = self._current()
        if col > 0:
            self.buffer.replace_line(line, current[:col - 1] + current[col:])
            self.cursor.position.col = col - 1
            return
        if line == 0:
            return
        previous = self.buffer[line - 1]
        self.buffer.replace_line(line - 1, previous + current)
        self.buffer.delete_line(line)
        self.cursor.position = CursorPosition(line - 1, len(previous))

    def delete_char(self) -> None:
        """Delete the character under the cursor, joining lines at the end."""
        line, col, current = self._current()
        if col >= len(current):
            if line < self.buffer.line_count - 1:
                self.buffer.replace_line(line, current + self.buffer[line + 1])
                self.buffer.delete_line(line + 1)
            return
        self.buffer.replace_line(line, current[:col] + current[col + 1:])

    def delete_current_line(self) -> None:
        self.buffer.delete_line(self.cursor.line)
        self.cursor.position.col = 0
        self.cursor.clamp()

    def open_line_below(self) -> bool:
        line = self.cursor.line
        if not self.buffer.insert_line(line + 1, ""):
            return False
        self.cursor.position = CursorPosition(line + 1, 0)
        return True

    def open_line_above(self) -> bool:
        line = self.cursor.line
        if not self.buffer.insert_line(line, ""):
            return False
        self.cursor.position = CursorPosition(line, 0)
        return True
