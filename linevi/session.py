"""Session state for one editing session.

All mutable editor state lives in a single ``EditorSession`` that the
event loop owns and passes to the key handlers; nothing is kept in
module globals.
"""

import logging

from .constants import EditorConstants
from .model import CursorModel, DocumentBuffer, TextModel
from .modes import Mode
from .storage import Storage
from .view import ScreenMetrics, Viewport

logger = logging.getLogger(__name__)


class EditorSession:
    """Document, cursor, viewport, mode and file binding of a session."""

    def __init__(self, storage: Storage, filename: str = "",
                 tab_width: int = EditorConstants.TAB_WIDTH,
                 capacity: int = EditorConstants.MAX_LINES):
        self.storage = storage
        self.buffer = DocumentBuffer(capacity=capacity, notify=self.set_status)
        self.cursor = CursorModel(self.buffer)
        self.text = TextModel(self.buffer, self.cursor)
        self.viewport = Viewport()
        # Last measured screen; updated every frame
        self.metrics = ScreenMetrics.from_size(24, 80)
        self.mode = Mode.NORMAL
        self.pending_chord = False
        self.command_line = ""
        self.filename = filename
        self.status_message = EditorConstants.WELCOME_MESSAGE
        self.running = True
        self.tab_width = tab_width

    @property
    def dirty(self) -> bool:
        return self.buffer.dirty

    @property
    def body_rows(self) -> int:
        return self.metrics.body_rows

    def set_status(self, message: str) -> None:
        self.status_message = message

    def quit(self) -> None:
        self.running = False

    def fit_to_screen(self, rows: int, cols: int) -> ScreenMetrics:
        """Clamp the cursor and scroll the viewport for a screen of this size."""
        self.cursor.clamp()
        self.metrics = self.viewport.adjust(
            self.cursor.position, self.buffer.line_count, rows, cols)
        return self.metrics

    # --- Mode transitions ---

    def _set_mode(self, mode: Mode) -> None:
        if mode != self.mode:
            logger.debug("Mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode

    def enter_insert_mode(self) -> None:
        self._set_mode(Mode.INSERT)
        self.pending_chord = False
        self.set_status(EditorConstants.INSERT_LABEL)

    def exit_insert_mode(self) -> None:
        self._set_mode(Mode.NORMAL)
        self.command_line = ""
        self.pending_chord = False
        if self.cursor.col > 0:
            self.cursor.position.col -= 1
        self.cursor.clamp()
        self.set_status("")

    def start_command_mode(self) -> None:
        self._set_mode(Mode.COMMAND)
        self.command_line = ""
        self.pending_chord = False

    def cancel_command_mode(self) -> None:
        self._set_mode(Mode.NORMAL)
        self.command_line = ""
        self.set_status(EditorConstants.CANCELLED_MESSAGE)

    def finish_command_mode(self) -> None:
        self._set_mode(Mode.NORMAL)
        self.command_line = ""

    # --- File lifecycle ---

    def _reset_position(self) -> None:
        self.cursor.move_to(0, 0)
        self.viewport.reset()
        self.pending_chord = False

    def open_document(self, path: str) -> bool:
        """Bind ``path`` and load it, or start an empty document if it doesn't exist.

        Returns:
            False if the file exists but could not be read; the current
            document and binding are kept in that case.
        """
        try:
            exists = self.storage.exists(path)
            text = self.storage.read_all(path) if exists else ""
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            self.set_status(EditorConstants.READ_ERROR_MESSAGE.format(path))
            return False

        self.filename = path
        complete = self.buffer.load(text)
        self._reset_position()
        if not exists:
            logger.info("New file %s", path)
            self.set_status(EditorConstants.NEW_FILE_MESSAGE)
        elif complete:
            logger.info("Opened %s (%d lines)", path, self.buffer.line_count)
            self.set_status(EditorConstants.OPENED_MESSAGE)
        return True

    def save_to(self, path: str) -> bool:
        """Write the document to ``path``; clears the dirty flag on success."""
        if not path:
            self.set_status(EditorConstants.NO_FILENAME_MESSAGE)
            return False
        if not self.storage.write_all(path, self.buffer.join()):
            self.set_status(EditorConstants.WRITE_ERROR_MESSAGE.format(path))
            return False
        self.buffer.dirty = False
        self.set_status(EditorConstants.WRITTEN_MESSAGE)
        return True
