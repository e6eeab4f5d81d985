"""The document: an ordered list of lines addressed by logical position."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Iterable, Iterator, Optional

from .line import Line
from .position import Position

logger = logging.getLogger(__name__)


class HectoError(Exception):
    """Base class for errors raised by the editor core."""


class BufferLoadError(HectoError):
    """A file could not be read into a buffer."""

    def __init__(self, path: str, error: Exception):
        super().__init__(f"Cannot read {path}: {error}")
        self.path = path
        self.error = error


class BufferSaveError(HectoError):
    """A buffer could not be written to a file."""

    def __init__(self, path: str, error: Exception):
        super().__init__(f"Cannot save to {path}: {error}")
        self.path = path
        self.error = error


def split_lines(text: str) -> list[str]:
    """Split text on line terminators, dropping the terminators.

    A trailing terminator does not start another line, so empty text
    has no lines at all.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Buffer:
    lines: list[Line]

    def __init__(self, lines: Optional[Iterable[Line]] = None):
        self.lines = list(lines) if lines is not None else []

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Buffer":
        return cls(Line(text) for text in lines)

    @classmethod
    def from_text(cls, text: str) -> "Buffer":
        return cls.from_lines(split_lines(text))

    @classmethod
    def load(cls, path: str) -> "Buffer":
        """Read path as UTF-8 text, one Line per input line.

        Raises:
            BufferLoadError: if the file can't be read or decoded
        """
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise BufferLoadError(path, e) from e
        buffer = cls.from_text(content)
        logger.info("Loaded %d lines from %s", buffer.num_lines(), path)
        return buffer

    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def save(self, path: str):
        """Write the buffer to path atomically.

        The text goes to a temporary file in the same directory, which then
        replaces path, so a failed save never leaves a half-written file.

        Raises:
            BufferSaveError: if the file can't be written
        """
        dir_name = os.path.dirname(path) or '.'
        suffix = os.path.splitext(path)[1]
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                             dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(self.text())
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
        except OSError as e:
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_filename)
            raise BufferSaveError(path, e) from e
        logger.info("Saved %d lines to %s", self.num_lines(), path)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def push(self, text: str):
        self.lines.append(Line(text))

    def is_empty(self) -> bool:
        return not self.lines

    def num_lines(self) -> int:
        return len(self.lines)

    def get_line(self, row: int) -> Optional[Line]:
        if 0 <= row < len(self.lines):
            return self.lines[row]
        return None

    def line_len(self, row: int) -> int:
        line = self.get_line(row)
        return len(line) if line is not None else 0

    def insert(self, position: Position, character: str):
        """Insert character at position.

        Inserting on the row just past the last line appends a new line, so
        the document grows by at most one row and never gets gaps. Rows
        further out are ignored.
        """
        if position.row == len(self.lines):
            self.lines.append(Line(character))
        elif 0 <= position.row < len(self.lines):
            self.lines[position.row].insert(position.col, character)

    def delete(self, position: Position) -> bool:
        """Delete the grapheme at position. Lines are never joined or removed."""
        line = self.get_line(position.row)
        if line is None:
            return False
        return line.delete(position.col)

    def grid_position_of(self, position: Position) -> Position:
        line = self.get_line(position.row)
        col = line.position_of(position.col) if line is not None else 0
        return Position(row=position.row, col=col)
