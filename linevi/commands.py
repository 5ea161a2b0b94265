"""Command pattern implementation for per-mode key handling."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import is_printable

if TYPE_CHECKING:
    from .interpreter import CommandInterpreter
    from .session import EditorSession


class EditorCommand(ABC):
    """Base class for key-triggered editor commands."""

    @abstractmethod
    def execute(self, session: 'EditorSession', code: int) -> None:
        """Execute the command.

        Args:
            session: The editor session to act on
            code: The key code that triggered this command
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, session: 'EditorSession', code: int) -> None:
        session.cursor.clamp()
        self._move(session)

    @abstractmethod
    def _move(self, session: 'EditorSession'):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, session):
        session.cursor.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, session):
        session.cursor.move_right()


class UpLineCommand(MovementCommand):
    def _move(self, session):
        session.cursor.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, session):
        session.cursor.move_down()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, session):
        session.cursor.move_home()


class EndOfLineCommand(MovementCommand):
    def _move(self, session):
        session.cursor.move_end()


class PageUpCommand(MovementCommand):
    def _move(self, session):
        session.cursor.page_up(session.body_rows)


class PageDownCommand(MovementCommand):
    def _move(self, session):
        session.cursor.page_down(session.body_rows)


class EditCommand(EditorCommand):
    """Base class for commands that change the document."""

    def execute(self, session: 'EditorSession', code: int) -> None:
        self._edit(session, code)
        session.cursor.clamp()

    @abstractmethod
    def _edit(self, session: 'EditorSession', code: int):
        """Perform the edit."""
        pass


class InsertCharCommand(EditCommand):
    def _edit(self, session, code):
        if is_printable(code):
            session.text.insert_text(chr(code))


class TabCommand(EditCommand):
    def _edit(self, session, code):
        session.text.insert_text(" " * session.tab_width)


class InsertNewlineCommand(EditCommand):
    def _edit(self, session, code):
        session.text.split_line()


class BackspaceCommand(EditCommand):
    def _edit(self, session, code):
        session.text.backspace()


class DeleteCharCommand(EditCommand):
    def _edit(self, session, code):
        session.text.delete_char()


class DeleteLineCommand(EditCommand):
    def _edit(self, session, code):
        session.text.delete_current_line()
        session.set_status(EditorConstants.LINE_DELETED_MESSAGE)


class BeginDeleteLineCommand(EditorCommand):
    """First half of the ``dd`` chord."""

    def execute(self, session, code):
        session.pending_chord = True
        session.set_status(EditorConstants.PENDING_DELETE_MESSAGE)


class ClearStatusCommand(EditorCommand):
    def execute(self, session, code):
        session.set_status("")


class InsertModeCommand(EditorCommand):
    def execute(self, session, code):
        session.enter_insert_mode()


class AppendCommand(EditorCommand):
    def execute(self, session, code):
        session.cursor.clamp()
        session.cursor.move_right()
        session.enter_insert_mode()


class OpenLineBelowCommand(EditorCommand):
    def execute(self, session, code):
        session.cursor.clamp()
        if session.text.open_line_below():
            session.enter_insert_mode()


class OpenLineAboveCommand(EditorCommand):
    def execute(self, session, code):
        session.cursor.clamp()
        if session.text.open_line_above():
            session.enter_insert_mode()


class ExitInsertModeCommand(EditorCommand):
    def execute(self, session, code):
        session.exit_insert_mode()


class CommandModeCommand(EditorCommand):
    def execute(self, session, code):
        session.start_command_mode()


class CommandCharCommand(EditorCommand):
    def execute(self, session, code):
        if is_printable(code):
            session.command_line += chr(code)


class CommandBackspaceCommand(EditorCommand):
    def execute(self, session, code):
        session.command_line = session.command_line[:-1]


class CancelCommandCommand(EditorCommand):
    def execute(self, session, code):
        session.cancel_command_mode()


class ExecuteCommandLineCommand(EditorCommand):
    """Run the typed ex command, then return to normal mode."""

    def __init__(self, interpreter: 'CommandInterpreter'):
        self.interpreter = interpreter

    def execute(self, session, code):
        self.interpreter.execute(session, session.command_line)


class KeyTable:
    """Maps key codes to commands for a single mode.

    Keys without an entry go to the fallback command (typically text
    insertion), or are ignored when there is none.
    """

    def __init__(self, fallback: Optional[EditorCommand] = None):
        self._commands: Dict[int, EditorCommand] = {}
        self.fallback = fallback

    def register(self, code: int, command: EditorCommand):
        """Register a command for a key code; unresolved (negative) codes are skipped."""
        if code is None or code < 0:
            return
        self._commands[code] = command

    def get_command(self, code: int) -> Optional[EditorCommand]:
        return self._commands.get(code)

    def execute(self, session: 'EditorSession', code: int) -> bool:
        """Execute the command bound to ``code``.

        Returns:
            True if some command handled the key
        """
        command = self.get_command(code)
        if command is None:
            command = self.fallback
        if command is None:
            return False
        command.execute(session, code)
        return True
