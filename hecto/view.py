"""Viewport and cursor control over a buffer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .buffer import Buffer, BufferLoadError
from .commands import (
    DeleteLeft,
    DeleteRight,
    Direction,
    EditorCommand,
    InsertChar,
    Move,
    Resize,
)
from .constants import EditorConstants
from .position import Position, Size
from .version import get_version

logger = logging.getLogger(__name__)


class RenderSink(ABC):
    """Where rendered rows go, usually the terminal."""

    @abstractmethod
    def print_row(self, row: int, text: str):
        """Clear screen row `row` and print text at its first column."""


class View:
    """Keeps the cursor inside a fixed-size window onto a buffer.

    The cursor is a logical position (row, grapheme index). The scroll
    offset is in grid coordinates (row, display column) and is adjusted
    lazily: it only moves when the cursor would otherwise leave the window,
    and then by the smallest amount that brings it back.
    """

    def __init__(self, buffer: Optional[Buffer] = None, size: Size = Size(),
                 show_welcome: bool = True):
        self.buffer = buffer if buffer is not None else Buffer()
        self.size = size
        self.show_welcome = show_welcome
        self.cursor_position = Position()
        self.scroll_offset = Position()
        self.needs_redraw = True

    def load(self, path: str):
        """Replace the buffer with the contents of path.

        On failure the current buffer, cursor and scroll offset are kept.

        Raises:
            BufferLoadError: if the file can't be read
        """
        try:
            self.buffer = Buffer.load(path)
        except BufferLoadError as e:
            logger.info("Keeping current buffer: %s", e)
            raise
        self.cursor_position = Position()
        self.scroll_offset = Position()
        self.needs_redraw = True

    def handle_command(self, command: EditorCommand) -> bool:
        """Apply a command.

        Returns:
            True if the command modified the buffer
        """
        if isinstance(command, Move):
            self.move(command.direction)
            return False
        elif isinstance(command, Resize):
            self.resize(command.size)
            return False
        elif isinstance(command, InsertChar):
            return self.insert_char(command.character)
        elif isinstance(command, DeleteLeft):
            return self.delete_left()
        elif isinstance(command, DeleteRight):
            return self.delete_right()
        else:
            raise TypeError(f"View can't handle {command!r}")

    def resize(self, size: Size):
        self.size = size
        self._scroll_to_cursor()
        self.needs_redraw = True

    def move(self, direction: Direction):
        self.cursor_position = self._moved_cursor(direction)
        self._scroll_to_cursor()
        self.needs_redraw = True

    def _moved_cursor(self, direction: Direction) -> Position:
        row = self.cursor_position.row
        col = self.cursor_position.col
        if direction == Direction.LEFT:
            col = max(col - 1, 0)
        elif direction == Direction.RIGHT:
            col += 1
        elif direction == Direction.UP:
            row = max(row - 1, 0)
        elif direction == Direction.DOWN:
            row += 1
        elif direction == Direction.HOME:
            col = 0
        elif direction == Direction.END:
            col = self.buffer.line_len(row)
        elif direction == Direction.PAGE_UP:
            row = max(row - self.size.height, 0)
        elif direction == Direction.PAGE_DOWN:
            row += self.size.height
        return self._clamped(Position(row, col))

    def _clamped(self, position: Position) -> Position:
        # The caret may sit just past the last grapheme of a line
        row = min(position.row, max(self.buffer.num_lines() - 1, 0))
        col = min(position.col, self.buffer.line_len(row))
        return Position(row, col)

    def _scroll_to_cursor(self):
        grid = self.buffer.grid_position_of(self.cursor_position)
        height, width = self.size.height, self.size.width
        dy = max(min(self.scroll_offset.row, grid.row), grid.row - max(height - 1, 0))
        dx = max(min(self.scroll_offset.col, grid.col), grid.col - max(width - 1, 0))
        self.scroll_offset = Position(row=max(dy, 0), col=max(dx, 0))

    def insert_char(self, character: str) -> bool:
        old_len = self.buffer.line_len(self.cursor_position.row)
        self.buffer.insert(self.cursor_position, character)
        if self.buffer.line_len(self.cursor_position.row) > old_len:
            self.cursor_position = self._moved_cursor(Direction.RIGHT)
        self._scroll_to_cursor()
        self.needs_redraw = True
        return True

    def delete_left(self) -> bool:
        """Backspace. Does nothing at the start of a line."""
        if self.cursor_position.col == 0:
            return False
        self.move(Direction.LEFT)
        return self.delete_right()

    def delete_right(self) -> bool:
        """Delete the grapheme under the cursor. Does nothing at end of line."""
        if not self.buffer.delete(self.cursor_position):
            return False
        self._scroll_to_cursor()
        self.needs_redraw = True
        return True

    def cursor_grid_position(self) -> Position:
        """Cursor position on screen, relative to the top-left of the viewport."""
        grid = self.buffer.grid_position_of(self.cursor_position)
        return Position(
            row=max(grid.row - self.scroll_offset.row, 0),
            col=max(grid.col - self.scroll_offset.col, 0),
        )

    def render(self, sink: RenderSink):
        """Print every row of the viewport to sink, if anything changed."""
        if not self.needs_redraw:
            return
        if self.buffer.is_empty() and self.show_welcome:
            self._render_welcome(sink)
        else:
            self._render_buffer(sink)
        self.needs_redraw = False

    def _render_buffer(self, sink: RenderSink):
        height, width = self.size.height, self.size.width
        top, left = self.scroll_offset.row, self.scroll_offset.col
        for current in range(height):
            line = self.buffer.get_line(top + current)
            if line is not None:
                sink.print_row(current, line.get(left, left + width))
            else:
                sink.print_row(current, EditorConstants.EMPTY_ROW_MARKER)

    def _render_welcome(self, sink: RenderSink):
        height, width = self.size.height, self.size.width
        for current in range(height):
            if current == height // 3:
                sink.print_row(current, self.welcome_line(width))
            else:
                sink.print_row(current, EditorConstants.EMPTY_ROW_MARKER)

    @staticmethod
    def welcome_line(width: int) -> str:
        message = EditorConstants.WELCOME_MESSAGE.format(EditorConstants.NAME, get_version())
        marker = EditorConstants.EMPTY_ROW_MARKER
        padding = max(width - len(message), 0) // 2
        if padding <= len(marker):
            return marker
        line = marker + " " * (padding - len(marker)) + message
        return line[:width]
