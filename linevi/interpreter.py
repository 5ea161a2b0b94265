"""Ex-style commands typed after ':' (write, quit, edit, help)."""

import logging
from typing import Callable, Dict, TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .session import EditorSession

logger = logging.getLogger(__name__)


class CommandInterpreter:
    """Parses and runs one command line against a session.

    Commands are case-sensitive. Exact names are looked up first, then
    the ``w <path>`` and ``e <path>`` prefix forms. Every command leaves
    the session in normal mode with an empty command line; failures are
    reported through the status message only.
    """

    def __init__(self):
        self._commands: Dict[str, Callable[['EditorSession'], None]] = {
            "": self._noop,
            "help": self._help,
            "q": self._quit,
            "q!": self._force_quit,
            "w": self._write,
            "wq": self._write_quit,
            "wq!": self._write_quit,
        }
        self._prefixed: Dict[str, Callable[['EditorSession', str], None]] = {
            "w ": self._write_as,
            "e ": self._edit,
        }

    def execute(self, session: 'EditorSession', text: str) -> None:
        command = text.strip()
        session.finish_command_mode()
        logger.debug("Command %r", command)

        handler = self._commands.get(command)
        if handler is not None:
            handler(session)
            return
        for prefix, prefixed_handler in self._prefixed.items():
            if command.startswith(prefix):
                prefixed_handler(session, command[len(prefix):].strip())
                return
        session.set_status(EditorConstants.UNKNOWN_COMMAND_MESSAGE.format(command))

    def _noop(self, session):
        session.set_status("")

    def _help(self, session):
        session.set_status(EditorConstants.HELP_MESSAGE)

    def _quit(self, session):
        if session.dirty:
            session.set_status(EditorConstants.UNSAVED_QUIT_MESSAGE)
        else:
            session.quit()

    def _force_quit(self, session):
        if session.dirty:
            logger.info("Discarding unsaved changes to %s", session.filename or "[No Name]")
        session.quit()

    def _write(self, session):
        if not session.filename:
            session.set_status(EditorConstants.NO_FILENAME_MESSAGE)
            return
        session.save_to(session.filename)

    def _write_quit(self, session):
        if not session.filename:
            session.set_status(EditorConstants.NO_FILENAME_QUIT_MESSAGE)
            return
        if session.save_to(session.filename):
            session.quit()

    def _write_as(self, session, path):
        session.filename = path
        session.save_to(path)

    def _edit(self, session, path):
        session.open_document(path)
