"""Test the mode state machine and per-mode key tables."""

import pytest
from linevi.interpreter import CommandInterpreter
from linevi.keyboard import KeyBindings, KeyboardHandler, SPECIAL_KEY_CODES
from linevi.model import CursorPosition
from linevi.modes import Mode, ModeController
from linevi.session import EditorSession
from linevi.storage import MemoryStorage


def make_session(lines=None, line=0, col=0, capacity=512):
    session = EditorSession(MemoryStorage(), capacity=capacity)
    if lines is not None:
        session.buffer.lines = list(lines)
    session.cursor.position = CursorPosition(line, col)
    controller = ModeController(KeyBindings.resolve(KeyboardHandler(None)), CommandInterpreter())
    return session, controller


def press(controller, session, *keys):
    """Send keys: single characters by code point, longer strings as key names."""
    for key in keys:
        code = ord(key) if len(key) == 1 else SPECIAL_KEY_CODES[key]
        controller.handle_key(session, code)


def type_text(controller, session, text):
    press(controller, session, *text)


def test_every_mode_has_a_key_table():
    _, controller = make_session()
    assert set(controller.tables) == set(Mode)


def test_starts_in_normal_mode():
    session, _ = make_session()
    assert session.mode == Mode.NORMAL


class TestNormalMode:

    def test_hjkl_move(self):
        session, controller = make_session(["abc", "def"])
        press(controller, session, 'l', 'l', 'j')
        assert session.cursor.position == CursorPosition(1, 2)
        press(controller, session, 'h', 'k')
        assert session.cursor.position == CursorPosition(0, 1)

    def test_arrow_keys_move(self):
        session, controller = make_session(["abc", "def"])
        press(controller, session, 'right', 'down', 'left', 'up')
        assert session.cursor.position == CursorPosition(0, 0)
        press(controller, session, 'down')
        assert session.cursor.line == 1

    def test_line_bounds(self):
        session, controller = make_session(["hello"], col=2)
        press(controller, session, '$')
        assert session.cursor.col == 5
        press(controller, session, '0')
        assert session.cursor.col == 0
        press(controller, session, 'end')
        assert session.cursor.col == 5
        press(controller, session, 'home')
        assert session.cursor.col == 0

    def test_page_keys_move_by_body_height(self):
        session, controller = make_session([str(i) for i in range(100)])
        session.fit_to_screen(12, 80)  # 10 body rows
        press(controller, session, 'pagedown')
        assert session.cursor.line == 10
        press(controller, session, 'pagedown', 'pageup')
        assert session.cursor.line == 10

    def test_x_deletes_character(self):
        session, controller = make_session(["abc"], col=1)
        press(controller, session, 'x')
        assert session.buffer.lines == ["ac"]
        assert session.dirty

    def test_delete_key_joins_at_line_end(self):
        session, controller = make_session(["ab", "cd"], col=2)
        press(controller, session, 'delete')
        assert session.buffer.lines == ["abcd"]

    def test_typed_letters_are_not_inserted(self):
        session, controller = make_session(["abc"])
        press(controller, session, 'z', 'Q', '7')
        assert session.buffer.lines == ["abc"]
        assert not session.dirty

    def test_escape_clears_status(self):
        session, controller = make_session()
        session.set_status("something")
        press(controller, session, 'esc')
        assert session.status_message == ""


class TestDeleteLineChord:

    def test_dd_deletes_current_line(self):
        """d then d on ["x", "y"] leaves ["y"] with the cursor on line 0."""
        session, controller = make_session(["x", "y"])
        press(controller, session, 'd', 'd')
        assert session.buffer.lines == ["y"]
        assert session.cursor.position == CursorPosition(0, 0)
        assert session.status_message == "line deleted"
        assert session.pending_chord is False

    def test_single_d_waits(self):
        session, controller = make_session(["x", "y"])
        press(controller, session, 'd')
        assert session.pending_chord is True
        assert session.status_message == "d - waiting for next d"
        assert session.buffer.lines == ["x", "y"]

    def test_other_key_cancels_chord_and_still_acts(self):
        session, controller = make_session(["x", "y"])
        press(controller, session, 'd', 'j')
        assert session.pending_chord is False
        assert session.buffer.lines == ["x", "y"]
        assert session.cursor.line == 1

    def test_cancelled_chord_needs_two_more_d(self):
        session, controller = make_session(["x", "y", "z"])
        press(controller, session, 'd', 'l', 'd')
        assert session.buffer.lines == ["x", "y", "z"]
        assert session.pending_chord is True
        press(controller, session, 'd')
        assert session.buffer.lines == ["y", "z"]

    def test_dd_on_last_line_moves_cursor_up(self):
        session, controller = make_session(["a", "b"], line=1, col=1)
        press(controller, session, 'd', 'd')
        assert session.buffer.lines == ["a"]
        assert session.cursor.position == CursorPosition(0, 0)

    def test_dd_on_only_line_blanks_it(self):
        session, controller = make_session(["only"])
        press(controller, session, 'd', 'd')
        assert session.buffer.lines == [""]
        assert session.dirty


class TestEnterInsertMode:

    def test_i(self):
        session, controller = make_session(["abc"], col=1)
        press(controller, session, 'i')
        assert session.mode == Mode.INSERT
        assert session.status_message == "-- INSERT --"
        assert session.cursor.col == 1

    def test_a_moves_right_first(self):
        session, controller = make_session(["abc"], col=1)
        press(controller, session, 'a')
        assert session.mode == Mode.INSERT
        assert session.cursor.col == 2

    def test_o_opens_line_below(self):
        session, controller = make_session(["abc", "def"], col=2)
        press(controller, session, 'o')
        assert session.mode == Mode.INSERT
        assert session.buffer.lines == ["abc", "", "def"]
        assert session.cursor.position == CursorPosition(1, 0)

    def test_O_opens_line_above(self):
        session, controller = make_session(["abc", "def"], line=1, col=2)
        press(controller, session, 'O')
        assert session.mode == Mode.INSERT
        assert session.buffer.lines == ["abc", "", "def"]
        assert session.cursor.position == CursorPosition(1, 0)

    def test_o_on_full_buffer_stays_in_normal(self):
        session, controller = make_session(["a", "b"], capacity=2)
        press(controller, session, 'o')
        assert session.mode == Mode.NORMAL
        assert session.buffer.lines == ["a", "b"]
        assert session.status_message == "buffer full"


class TestInsertMode:

    def test_printable_keys_insert(self):
        session, controller = make_session([""])
        press(controller, session, 'i')
        type_text(controller, session, "hi there")
        assert session.buffer.lines == ["hi there"]
        assert session.cursor.col == 8

    def test_insert_mode_letters_do_not_run_normal_commands(self):
        session, controller = make_session([""])
        press(controller, session, 'i')
        type_text(controller, session, "dd:x")
        assert session.buffer.lines == ["dd:x"]
        assert session.mode == Mode.INSERT

    def test_enter_splits_line(self):
        session, controller = make_session(["abcdef"], col=3)
        press(controller, session, 'i', 'enter')
        assert session.buffer.lines == ["abc", "def"]
        assert session.cursor.position == CursorPosition(1, 0)

    def test_backspace_joins_lines(self):
        session, controller = make_session(["abc", "def"], line=1)
        press(controller, session, 'i', 'backspace')
        assert session.buffer.lines == ["abcdef"]
        assert session.cursor.position == CursorPosition(0, 3)

    def test_delete_removes_under_cursor(self):
        session, controller = make_session(["abc"], col=0)
        press(controller, session, 'i', 'delete')
        assert session.buffer.lines == ["bc"]

    def test_tab_inserts_two_spaces(self):
        session, controller = make_session(["ab"], col=1)
        press(controller, session, 'i', 'tab')
        assert session.buffer.lines == ["a  b"]
        assert session.cursor.col == 3

    def test_tab_width_follows_session(self):
        session, controller = make_session([""])
        session.tab_width = 4
        press(controller, session, 'i', 'tab')
        assert session.buffer.lines == ["    "]

    def test_navigation_keys_keep_insert_mode(self):
        session, controller = make_session(["abc", "def"])
        press(controller, session, 'i', 'down', 'end', 'left', 'home', 'right', 'up')
        assert session.mode == Mode.INSERT
        assert session.cursor.position == CursorPosition(0, 1)

    def test_escape_returns_to_normal_and_steps_back(self):
        session, controller = make_session(["abc"], col=2)
        press(controller, session, 'i', 'esc')
        assert session.mode == Mode.NORMAL
        assert session.cursor.col == 1
        assert session.status_message == ""

    def test_escape_at_column_zero_keeps_column(self):
        session, controller = make_session(["abc"])
        press(controller, session, 'i', 'esc')
        assert session.cursor.col == 0


class TestCommandMode:

    def test_colon_enters_command_mode_with_empty_line(self):
        session, controller = make_session()
        session.command_line = "stale"
        press(controller, session, ':')
        assert session.mode == Mode.COMMAND
        assert session.command_line == ""

    def test_typing_and_backspace_edit_command_line(self):
        session, controller = make_session()
        press(controller, session, ':')
        type_text(controller, session, "wqx")
        press(controller, session, 'backspace')
        assert session.command_line == "wq"
        press(controller, session, 'backspace', 'backspace', 'backspace')
        assert session.command_line == ""
        assert session.mode == Mode.COMMAND

    def test_escape_cancels(self):
        session, controller = make_session()
        press(controller, session, ':')
        type_text(controller, session, "q!")
        press(controller, session, 'esc')
        assert session.mode == Mode.NORMAL
        assert session.command_line == ""
        assert session.status_message == "command cancelled"
        assert session.running

    def test_enter_executes_and_returns_to_normal(self):
        session, controller = make_session()
        press(controller, session, ':')
        type_text(controller, session, "help")
        press(controller, session, 'enter')
        assert session.mode == Mode.NORMAL
        assert session.command_line == ""
        assert session.status_message.startswith("Commands:")

    @pytest.mark.parametrize("command", ["", "help", "q", "w", "bogus", "e x.txt"])
    def test_every_command_ends_in_normal_mode(self, command):
        session, controller = make_session()
        press(controller, session, ':')
        type_text(controller, session, command)
        press(controller, session, 'enter')
        assert session.mode == Mode.NORMAL
        assert session.command_line == ""


def test_negative_codes_are_ignored():
    session, controller = make_session(["abc"])
    assert controller.handle_key(session, -1) is False
    assert session.buffer.lines == ["abc"]


def test_cursor_stays_in_bounds_through_editing_session():
    session, controller = make_session(["hello", "world"])
    script = ['$', 'j', 'd', 'd', 'i', 'enter', 'backspace', 'backspace', 'esc',
              'x', 'x', 'o', 'esc', 'k', 'd', 'd', 'd', 'd', 'pagedown', 'x']
    for key in script:
        press(controller, session, key)
        pos = session.cursor.position
        assert session.buffer.line_count >= 1
        assert 0 <= pos.line < session.buffer.line_count
        assert 0 <= pos.col <= session.buffer.line_length(pos.line)
