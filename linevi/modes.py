"""Editing modes and the per-mode key dispatch."""

import logging
from enum import Enum
from typing import Dict, TYPE_CHECKING

from . import commands as cmd
from .commands import KeyTable

if TYPE_CHECKING:
    from .interpreter import CommandInterpreter
    from .keyboard import KeyBindings
    from .session import EditorSession

logger = logging.getLogger(__name__)


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"


class ModeController:
    """Routes each key code to the key table of the active mode.

    There is one KeyTable per Mode. The ``dd`` chord is resolved here
    before the normal-mode table sees the key: a pending ``d`` followed by
    ``d`` deletes the line, and any other key cancels the chord and then
    runs its own normal-mode action.
    """

    def __init__(self, keys: 'KeyBindings', interpreter: 'CommandInterpreter'):
        self.keys = keys
        self.interpreter = interpreter
        self.tables: Dict[Mode, KeyTable] = {
            Mode.NORMAL: self._normal_table(),
            Mode.INSERT: self._insert_table(),
            Mode.COMMAND: self._command_table(),
        }
        missing = set(Mode) - set(self.tables)
        assert not missing, f"no key table for {missing}"
        self._delete_line = cmd.DeleteLineCommand()

    def _register_navigation(self, table: KeyTable):
        keys = self.keys
        table.register(keys.left, cmd.LeftCharCommand())
        table.register(keys.right, cmd.RightCharCommand())
        table.register(keys.up, cmd.UpLineCommand())
        table.register(keys.down, cmd.DownLineCommand())
        table.register(keys.home, cmd.BeginningOfLineCommand())
        table.register(keys.end, cmd.EndOfLineCommand())
        table.register(keys.pageup, cmd.PageUpCommand())
        table.register(keys.pagedown, cmd.PageDownCommand())

    def _normal_table(self) -> KeyTable:
        table = KeyTable()
        self._register_navigation(table)
        table.register(self.keys.delete, cmd.DeleteCharCommand())
        table.register(self.keys.esc, cmd.ClearStatusCommand())
        # Letter bindings last so they win over any colliding named key
        for char, command in (
            ('h', cmd.LeftCharCommand()),
            ('l', cmd.RightCharCommand()),
            ('j', cmd.DownLineCommand()),
            ('k', cmd.UpLineCommand()),
            ('0', cmd.BeginningOfLineCommand()),
            ('$', cmd.EndOfLineCommand()),
            ('x', cmd.DeleteCharCommand()),
            ('d', cmd.BeginDeleteLineCommand()),
            ('i', cmd.InsertModeCommand()),
            ('a', cmd.AppendCommand()),
            ('o', cmd.OpenLineBelowCommand()),
            ('O', cmd.OpenLineAboveCommand()),
            (':', cmd.CommandModeCommand()),
        ):
            table.register(ord(char), command)
        return table

    def _insert_table(self) -> KeyTable:
        table = KeyTable(fallback=cmd.InsertCharCommand())
        self._register_navigation(table)
        keys = self.keys
        table.register(keys.esc, cmd.ExitInsertModeCommand())
        table.register(keys.enter, cmd.InsertNewlineCommand())
        table.register(keys.backspace, cmd.BackspaceCommand())
        table.register(keys.delete, cmd.DeleteCharCommand())
        table.register(keys.tab, cmd.TabCommand())
        return table

    def _command_table(self) -> KeyTable:
        table = KeyTable(fallback=cmd.CommandCharCommand())
        keys = self.keys
        table.register(keys.esc, cmd.CancelCommandCommand())
        table.register(keys.enter, cmd.ExecuteCommandLineCommand(self.interpreter))
        table.register(keys.backspace, cmd.CommandBackspaceCommand())
        return table

    def handle_key(self, session: 'EditorSession', code: int) -> bool:
        """Dispatch one key code. Returns True if a command handled it."""
        if code < 0:
            return False
        if session.mode == Mode.NORMAL and session.pending_chord:
            session.pending_chord = False
            if code == ord('d'):
                self._delete_line.execute(session, code)
                return True
            logger.debug("Chord cancelled by key %d", code)
        return self.tables[session.mode].execute(session, code)
