"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select

from .position import Position, Size
from .view import RenderSink


class TerminalInterface(RenderSink):
    """Handles terminal I/O using Blessed.

    The bottom row of the screen is kept for the status line; everything
    above it is the text area the view renders into.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception:
                # Justification: curtsies may fail to initialize without a
                # real tty (CI, pipes). Run without input instead of crashing.
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Justification: teardown should never crash the app. Any
                # failure to exit raw mode is non-fatal at this point.
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def print_row(self, row: int, text: str):
        """Clear a row of the text area and print text at its start."""
        print(self.term.move(row, 0) + self.term.clear_eol + text, end='')

    def draw_status(self, text: str):
        """Draw the status line in reverse video across the bottom row."""
        status = text[:self.term.width].ljust(self.term.width)
        print(self.term.move(self.term.height - 1, 0) + self.term.reverse + status + self.term.normal,
              end='')

    def move_cursor(self, position: Position):
        """Move the hardware cursor to a position in the text area."""
        print(self.term.move(position.row, position.col), end='')

    def hide_cursor(self):
        print(self.term.hide_cursor, end='')

    def show_cursor(self):
        print(self.term.normal_cursor, end='')

    def flush(self):
        sys.stdout.flush()

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None on timeout or when
            input isn't available.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            evt = next(self._curtsies_input)  # blocks
            return str(evt)
        t = 0.0 if timeout == 0 else float(timeout)
        r, _, _ = select.select([sys.stdin], [], [], t)
        if not r:
            return None
        evt = next(self._curtsies_input)
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1

    @property
    def size(self) -> Size:
        """Size of the text area."""
        return Size(width=max(self.width, 0), height=max(self.height, 0))
