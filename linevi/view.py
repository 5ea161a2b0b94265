"""Viewport geometry and the read-only projection of editor state to a screen."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import EditorConstants
from .model import CursorPosition
from .modes import Mode

if TYPE_CHECKING:
    from .session import EditorSession


MODE_LABELS = {
    Mode.NORMAL: EditorConstants.NORMAL_LABEL,
    Mode.INSERT: EditorConstants.INSERT_LABEL,
    Mode.COMMAND: EditorConstants.COMMAND_LABEL,
}


@dataclass(frozen=True)
class ScreenMetrics:
    """Screen size as reported by the display, clamped to a usable minimum."""
    rows: int
    cols: int

    @classmethod
    def from_size(cls, rows: int, cols: int) -> "ScreenMetrics":
        return cls(max(rows, EditorConstants.MIN_SCREEN_ROWS),
                   max(cols, EditorConstants.MIN_SCREEN_COLS))

    @property
    def body_rows(self) -> int:
        return max(self.rows - EditorConstants.RESERVED_ROWS, EditorConstants.MIN_BODY_ROWS)

    @property
    def content_width(self) -> int:
        return max(self.cols - EditorConstants.GUTTER_WIDTH, EditorConstants.MIN_CONTENT_WIDTH)


class Viewport:
    """Scroll window over the document: first visible line and column.

    The window only moves as far as needed to keep the cursor visible;
    it never recenters.
    """

    def __init__(self, top: int = 0, left: int = 0):
        self.top = top
        self.left = left

    def reset(self) -> None:
        self.top = 0
        self.left = 0

    def adjust(self, cursor: CursorPosition, line_count: int,
               screen_rows: int, screen_cols: int) -> ScreenMetrics:
        metrics = ScreenMetrics.from_size(screen_rows, screen_cols)
        body_rows = metrics.body_rows
        width = metrics.content_width

        if cursor.line < self.top:
            self.top = cursor.line
        if cursor.line >= self.top + body_rows:
            self.top = cursor.line - body_rows + 1
        self.top = max(0, min(self.top, line_count - 1))

        if cursor.col < self.left:
            self.left = cursor.col
        if cursor.col >= self.left + width:
            self.left = cursor.col - width + 1
        self.left = max(0, self.left)
        return metrics


@dataclass
class Frame:
    """Everything needed to paint one screen."""
    rows: list[str]
    status_line: str
    message_line: str
    cursor_row: int
    cursor_col: int


def _body_row(session: 'EditorSession', line_index: int, width: int) -> str:
    buffer = session.buffer
    if line_index >= buffer.line_count:
        return EditorConstants.EMPTY_ROW_MARKER
    marker = EditorConstants.CURSOR_LINE_MARKER if line_index == session.cursor.line else " "
    number = str(line_index + 1).rjust(EditorConstants.LINE_NUMBER_WIDTH)
    left = session.viewport.left
    visible = buffer[line_index][left:left + width]
    return f"{marker}{number} {visible}"


def status_line(session: 'EditorSession') -> str:
    label = MODE_LABELS[session.mode]
    file_label = session.filename or EditorConstants.NO_NAME_LABEL
    dirty = "*" if session.buffer.dirty else ""
    pos = session.cursor.position
    return f"{label} {file_label}{dirty}  ({pos.line + 1}/{session.buffer.line_count}) col {pos.col + 1}"


def render_frame(session: 'EditorSession', metrics: ScreenMetrics) -> Frame:
    """Project session state onto screen rows. Never mutates the session.

    The viewport is expected to have been adjusted for ``metrics`` already.
    """
    cols = metrics.cols
    body_rows = metrics.body_rows
    top = session.viewport.top
    rows = [_body_row(session, top + row, metrics.content_width)[:cols]
            for row in range(body_rows)]

    if session.mode == Mode.COMMAND:
        message = EditorConstants.COMMAND_PROMPT + session.command_line
        cursor_row = body_rows + 1
        cursor_col = min(len(message), cols - 1)
    else:
        message = session.status_message
        pos = session.cursor.position
        cursor_row = max(0, min(pos.line - top, body_rows - 1))
        cursor_col = EditorConstants.GUTTER_WIDTH + pos.col - session.viewport.left
        cursor_col = max(EditorConstants.GUTTER_WIDTH, min(cursor_col, cols - 1))

    return Frame(
        rows=rows,
        status_line=status_line(session)[:cols],
        message_line=message[:cols],
        cursor_row=cursor_row,
        cursor_col=cursor_col,
    )


def paint_frame(frame: Frame, display) -> None:
    """Push a frame to a display surface using its primitive operations."""
    display.show_cursor(False)
    display.clear()
    for y, text in enumerate(frame.rows):
        display.set_cursor(0, y)
        display.write(text)
    body_rows = len(frame.rows)
    display.set_cursor(0, body_rows)
    display.write(frame.status_line)
    display.set_cursor(0, body_rows + 1)
    display.write(frame.message_line)
    display.set_cursor(frame.cursor_col, frame.cursor_row)
    display.show_cursor(True)
