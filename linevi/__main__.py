"""linevi CLI entry point.

Allows running via `python -m linevi` and provides the console script
defined in `pyproject.toml`.

Usage:
    linevi [--log FILE] [--log-level LEVEL] [PATH]
    linevi --version
    linevi --keytest
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import LOG_LEVELS, load_config
from .version import get_version_string

USAGE = "usage: linevi [--version] [--keytest] [--log FILE] [--log-level LEVEL] [PATH]"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def describe_event(ev) -> str:
    """One line of --keytest output for a parsed key event."""
    raw = _escape_bytes(ev.raw)
    parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{raw}'", f"code={ev.code}"]
    flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl), ('shift', ev.is_shift)) if on]
    if flags:
        parts.append(f"flags={'+'.join(flags)}")
    return ' '.join(parts)


def run_keyboard_test() -> None:
    """Print each parsed key event and the code the editor would see. Quit with ESC."""
    import termios
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyEvent, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()

    # Let Ctrl-S/Ctrl-Q through instead of flow control
    old_settings = None
    try:
        old_settings = termios.tcgetattr(sys.stdin)
        new_settings = list(old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
    except (termios.error, OSError):
        old_settings = None

    kb = KeyboardHandler(term)

    try:
        while True:
            ev: KeyEvent | None = kb.get_key_event()
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.\r")
                break
            print(describe_event(ev) + "\r")
    finally:
        if old_settings is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
            except (termios.error, OSError):
                pass
        term.cleanup()


def configure_logging(log_file: Optional[str], level: str) -> None:
    """Send log records to ``log_file``; the terminal itself is never used."""
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_args(args: list[str]) -> dict:
    """Very small argument parser; returns a dict of options."""
    options = {'version': False, 'keytest': False, 'log_file': None, 'log_level': None, 'path': None}
    it = iter(args)
    for arg in it:
        if arg in ("--version", "-V"):
            options['version'] = True
        elif arg in ('--keytest', '--keyboard-test'):
            options['keytest'] = True
        elif arg in ('--log', '--log-level'):
            value = next(it, None)
            if value is None:
                raise SystemExit(f"{arg} needs a value\n{USAGE}")
            if arg == '--log':
                options['log_file'] = value
            elif value.upper() in LOG_LEVELS:
                options['log_level'] = value.upper()
            else:
                raise SystemExit(f"unknown log level {value!r}\n{USAGE}")
        elif arg.startswith('-') and arg != '-':
            raise SystemExit(f"unknown option {arg!r}\n{USAGE}")
        elif options['path'] is None:
            options['path'] = arg
        else:
            raise SystemExit(USAGE)
    return options


def main() -> None:
    options = parse_args(sys.argv[1:])
    if options['version']:
        print(get_version_string())
        return
    if options['keytest']:
        run_keyboard_test()
        return

    config = load_config()
    configure_logging(options['log_file'] or config.log_file,
                      options['log_level'] or config.log_level)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor(config=config)
    editor.start(options['path'])


if __name__ == "__main__":  # pragma: no cover
    main()
