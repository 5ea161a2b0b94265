"""Keyboard input handling using curtsies-style tokens and integer key codes."""

from typing import Optional
from dataclasses import dataclass, fields
from enum import Enum

from .constants import EditorConstants


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.


# Named keys get codes past the last Unicode code point so they can never
# collide with a typed character.
SPECIAL_KEY_BASE = 0x110000

SPECIAL_KEY_CODES = {
    name: SPECIAL_KEY_BASE + i
    for i, name in enumerate((
        'up', 'down', 'left', 'right', 'delete', 'backspace',
        'home', 'end', 'pageup', 'pagedown', 'insert',
    ))
}
SPECIAL_KEY_CODES.update({'enter': 10, 'esc': 27, 'tab': 9})

# Event value -> symbolic key name
_NAME_ALIASES = {
    'escape': 'esc',
    'page_up': 'pageup',
    'page_down': 'pagedown',
}

NO_KEY = -1


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from curtsies
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    code: Optional[int] = None


def code_for_event(event: KeyEvent) -> int:
    """Map a parsed event to the integer code the editor dispatches on."""
    if event.key_type in (KeyType.SPECIAL, KeyType.SHIFT_SPECIAL):
        name = _NAME_ALIASES.get(event.value, event.value)
        return SPECIAL_KEY_CODES.get(name, NO_KEY)
    if event.key_type == KeyType.REGULAR and len(event.value) == 1:
        return ord(event.value)
    if event.key_type == KeyType.CTRL and len(event.value) == 1 and 'a' <= event.value <= 'z':
        return ord(event.value) - ord('a') + 1
    return NO_KEY


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self) -> Optional[KeyEvent]:
        """Get next key event and map curtsies-style names to KeyEvent."""
        key = self.terminal.get_key()
        if not key:
            return None
        return self.parse_key(key)

    def next_key(self) -> int:
        """Block for the next key and return its code, or -1 if none arrived."""
        event = self.get_key_event()
        if event is None:
            return NO_KEY
        return event.code if event.code is not None else NO_KEY

    def key_code_for(self, name: str) -> int:
        """Resolve a symbolic key name ('up', 'enter', ...) to its code."""
        return SPECIAL_KEY_CODES.get(name, NO_KEY)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent with its code filled in."""
        event = self._parse(str(key))
        event.code = code_for_event(event)
        return event

    def _parse(self, key_str: str) -> KeyEvent:
        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Alt-left>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            lower = name.lower()
            # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
            lower = lower.replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set()
            base = parts[-1]
            if len(parts) > 1:
                mods = set(parts[:-1])
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            specials = {
                'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
                'page_up', 'page_down', 'insert'
            }
            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are enter, Ctrl-H is backspace, Ctrl-I is tab
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                if base == 'h':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
                if base == 'i':
                    return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if 'alt' in mods:
                if base in specials or len(base) == 1:
                    return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
            if 'shift' in mods and base in specials:
                return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=key_str, is_shift=True)
            if base in specials:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            # Unknown token: special with no code
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (8, 127):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if o == 9:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if o in (10, 13):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if 1 <= o <= 26:
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        return KeyEvent(
            key_type=KeyType.REGULAR,
            value=key_str,
            raw=key_str
        )


@dataclass
class KeyBindings:
    """Key codes for the named keys, as resolved from an input source."""
    up: int = NO_KEY
    down: int = NO_KEY
    left: int = NO_KEY
    right: int = NO_KEY
    delete: int = NO_KEY
    enter: int = EditorConstants.FALLBACK_KEY_CODES['enter']
    esc: int = EditorConstants.FALLBACK_KEY_CODES['esc']
    backspace: int = EditorConstants.FALLBACK_KEY_CODES['backspace']
    home: int = NO_KEY
    end: int = NO_KEY
    pageup: int = NO_KEY
    pagedown: int = NO_KEY
    tab: int = EditorConstants.FALLBACK_KEY_CODES['tab']

    @classmethod
    def resolve(cls, source) -> "KeyBindings":
        """Ask ``source.key_code_for`` for every name, keeping fallbacks on a miss."""
        resolved = {}
        for field in fields(cls):
            code = source.key_code_for(field.name)
            if code is None or code < 0:
                code = EditorConstants.FALLBACK_KEY_CODES.get(field.name, NO_KEY)
            resolved[field.name] = code
        return cls(**resolved)


def is_printable(code: int) -> bool:
    """True for codes of characters that can be typed into a line."""
    if code < 32 or code == 127 or code >= SPECIAL_KEY_BASE:
        return False
    return chr(code).isprintable()


def create_keyboard_handler(terminal_interface):
    """Factory function to create a keyboard handler.

    Args:
        terminal_interface: TerminalInterface instance

    Returns:
        KeyboardHandler instance
    """
    return KeyboardHandler(terminal_interface)
