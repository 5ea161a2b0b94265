"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Exposes the small display surface the editor draws through: clear,
    absolute cursor positioning, cursor visibility, text output and the
    current size.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and put the keyboard in raw mode."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            self._curtsies_input = Input(keynames='curtsies')
            # Enter raw mode immediately so reads work
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Leave raw mode and fullscreen, restoring the cursor."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def clear(self):
        """Clear the entire screen and home the cursor."""
        print(self.term.home + self.term.clear, end='')

    def set_cursor(self, col: int, row: int):
        """Move the cursor to column ``col`` of row ``row`` (both 0-based)."""
        print(self.term.move(row, col), end='')

    def show_cursor(self, visible: bool):
        if visible:
            print(self.term.normal_cursor, end='', flush=True)
        else:
            print(self.term.hide_cursor, end='')

    def write(self, text: str):
        """Write text at the current cursor position, without wrapping."""
        print(text[:max(0, self.width)], end='')

    def get_key(self):
        """Block for a single keypress.

        Returns:
            The curtsies key token as a string, or None before setup().
        """
        if self._curtsies_input is None:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
