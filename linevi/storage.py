"""Storage backends for reading and writing whole text files.

The editor only needs three operations: check that a path exists, read
all of it, and replace all of it. ``FileStorage`` writes atomically so a
failed save never leaves a half-written file behind.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Whole-file storage used by the editor session."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if ``path`` names an existing file."""

    @abstractmethod
    def read_all(self, path: str) -> str:
        """Return the full text stored at ``path``."""

    @abstractmethod
    def write_all(self, path: str, text: str) -> bool:
        """Replace the content at ``path`` with ``text``.

        Returns:
            True if the write succeeded, False otherwise.
        """


class FileStorage(Storage):
    """Local filesystem storage with UTF-8 text and atomic replacement."""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_all(self, path: str) -> str:
        # newline='' keeps '\r' characters as typed content
        with open(path, 'r', encoding=self.encoding, newline='') as f:
            return f.read()

    def write_all(self, path: str, text: str) -> bool:
        dir_name = os.path.dirname(path) or '.'
        base_name = os.path.basename(path)
        temp_filename: Optional[str] = None
        try:
            # Write to a temp file in the same directory so the rename stays
            # on one filesystem
            with tempfile.NamedTemporaryFile(
                mode='w',
                encoding=self.encoding,
                newline='',
                dir=dir_name,
                prefix=EditorConstants.ATOMIC_SAVE_PREFIX + base_name,
                suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                delete=False
            ) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(text)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            # Atomic rename
            os.replace(temp_filename, path)
            logger.info("Wrote %d characters to %s", len(text), path)
            return True

        except (OSError, UnicodeEncodeError) as e:
            logger.warning("Could not write %s: %s", path, e)
            if temp_filename is not None:
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            return False


class MemoryStorage(Storage):
    """Storage kept in a dict, for hosts without a filesystem."""

    def __init__(self, files: Optional[Dict[str, str]] = None):
        self.files: Dict[str, str] = dict(files or {})
        self.writes = 0

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_all(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write_all(self, path: str, text: str) -> bool:
        self.files[path] = text
        self.writes += 1
        return True
