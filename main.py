#!/usr/bin/env python3
"""linevi - A minimal modal line editor.

Usage:
    python main.py [filename]

Modes:
    NORMAL   h/j/k/l or arrows move, x deletes, dd deletes a line,
             i/a/o/O enter insert mode, : starts a command
    INSERT   type to insert, ESC returns to normal mode
    COMMAND  :w, :w <file>, :q, :q!, :wq, :e <file>, :help
"""

from linevi.__main__ import main


if __name__ == "__main__":
    main()
