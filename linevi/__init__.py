"""linevi - A minimal modal line editor for the terminal."""

import logging

from .model import DocumentBuffer, CursorModel, CursorPosition, TextModel
from .modes import Mode, ModeController
from .interpreter import CommandInterpreter
from .session import EditorSession
from .storage import Storage, FileStorage, MemoryStorage
from .view import Viewport, render_frame

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'DocumentBuffer',
    'CursorModel',
    'CursorPosition',
    'TextModel',
    'Mode',
    'ModeController',
    'CommandInterpreter',
    'EditorSession',
    'Storage',
    'FileStorage',
    'MemoryStorage',
    'Viewport',
    'render_frame',
]
