"""Main editor controller: startup, event loop and shutdown."""

import logging
from typing import Callable, Optional

from .config import EditorConfig
from .constants import EditorConstants
from .interpreter import CommandInterpreter
from .keyboard import KeyBindings, create_keyboard_handler
from .modes import ModeController
from .session import EditorSession
from .storage import FileStorage, Storage
from .terminal import TerminalInterface
from .view import paint_frame, render_frame

logger = logging.getLogger(__name__)


class Editor:
    """Modal line editor application controller."""

    def __init__(self, terminal=None, keyboard=None, storage: Optional[Storage] = None,
                 config: Optional[EditorConfig] = None):
        """Initialize the editor components.

        The terminal, keyboard and storage can be replaced by any objects
        with the same methods, e.g. for tests or embedding.
        """
        self.config = config or EditorConfig()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = keyboard or create_keyboard_handler(self.terminal)
        self.storage = storage or FileStorage()
        self.session = EditorSession(self.storage, tab_width=self.config.tab_width)
        self.interpreter = CommandInterpreter()
        self.modes = ModeController(KeyBindings.resolve(self.keyboard), self.interpreter)

    @property
    def running(self) -> bool:
        return self.session.running

    def prompt_for_path(self, ask: Callable[[str], str] = input) -> str:
        """Ask for the file to edit; an empty answer picks the configured default."""
        default = self.config.default_path
        try:
            answer = ask(EditorConstants.PATH_PROMPT.format(default)).strip()
        except EOFError:
            # stdin closed (Ctrl-D): same as pressing enter
            print()
            answer = ""
        return answer or default

    def load_file(self, filename: str) -> bool:
        """Bind the session to ``filename`` and load it if it exists."""
        return self.session.open_document(filename)

    def start(self, filename: Optional[str] = None):
        """Run the startup protocol, then the editor loop."""
        if filename is None:
            filename = self.prompt_for_path()
        self.load_file(filename)
        self.run()

    def handle_key(self, code: int) -> bool:
        """Route one key code to the active mode."""
        return self.modes.handle_key(self.session, code)

    def _draw(self):
        """Re-measure the screen, scroll to the cursor and paint a frame."""
        metrics = self.session.fit_to_screen(self.terminal.height, self.terminal.width)
        paint_frame(render_frame(self.session, metrics), self.terminal)

    def run(self):
        """Run the main editor loop until a quit command clears the running flag."""
        self.terminal.setup()
        logger.info("Editing %s", self.session.filename or "[No Name]")
        try:
            while self.session.running:
                self._draw()
                code = self.keyboard.next_key()
                if code < 0:
                    continue
                self.handle_key(code)
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            self.terminal.show_cursor(True)
            self.terminal.clear()
            self.terminal.cleanup()
        print(EditorConstants.FAREWELL_MESSAGE)
