"""Main editor controller."""

import logging
import os
import sys
import select
import signal
import termios
from typing import Optional

from .buffer import BufferLoadError, BufferSaveError
from .commands import CommandRegistry, Quit, Resize, Save, VIEW_COMMANDS, EditorCommand
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .settings import EditorSettings
from .terminal import TerminalInterface
from .view import View

logger = logging.getLogger(__name__)


class Editor:
    """Main application controller: input loop, file handling, status line."""

    def __init__(self, settings: Optional[EditorSettings] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = View(size=self.terminal.size, show_welcome=self.settings.show_welcome)
        self.command_registry = CommandRegistry()
        self.running = False
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        # File handling
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None  # None, 'save_filename', 'save_filename_quit' or 'quit_confirm'
        self.prompt_input = ""
        self._last_status: Optional[str] = None

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                # Disable flow control so Ctrl-S and Ctrl-Q reach us
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, AttributeError, OSError):
                    old_settings = None

                self.view.resize(self.terminal.size)

                while self.running:
                    self.refresh_screen()

                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        self.execute(Resize(self.terminal.size))
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self._handle_key_event(key_event)

                if old_settings:
                    try:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                    except (termios.error, OSError):
                        logger.warning("Could not restore terminal settings")

        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            self.close()
            self.terminal.cleanup()

    def close(self):
        """Close the resize pipe. Safe to call more than once."""
        for fd in (self._resize_pipe_r, self._resize_pipe_w):
            if fd is not None:
                os.close(fd)
        self._resize_pipe_r = self._resize_pipe_w = None

    def refresh_screen(self):
        """Draw whatever changed since the last refresh."""
        status = self._status_text()
        if not self.view.needs_redraw and status == self._last_status:
            return
        self.terminal.hide_cursor()
        self.view.render(self.terminal)
        self.terminal.draw_status(status)
        self._last_status = status
        self.terminal.move_cursor(self.view.cursor_grid_position())
        self.terminal.show_cursor()
        self.terminal.flush()

    def _status_text(self) -> str:
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            return " " + EditorConstants.SAVE_PROMPT.format(self.prompt_input)
        if self.prompt_mode == 'quit_confirm':
            return " " + EditorConstants.QUIT_CONFIRM_PROMPT
        if self.status_message:
            return f" {self.status_message}"
        name = self.filename or "[No Name]"
        modified = " (modified)" if self.modified else ""
        return f" {name}{modified} | {EditorConstants.HELP_MESSAGE}"

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Clear status message on any keypress (except in prompt mode)
        if self.status_message and not self.prompt_mode:
            self.status_message = None

        if self._handle_prompt_mode(key_event):
            return

        command = self.command_registry.resolve(key_event)
        if command is not None:
            self.execute(command)

    def execute(self, command: EditorCommand):
        """Carry out a command."""
        if isinstance(command, Quit):
            if self.modified:
                self.prompt_mode = 'quit_confirm'
            else:
                self.running = False
        elif isinstance(command, Save):
            self._handle_save()
        elif isinstance(command, VIEW_COMMANDS):
            if self.view.handle_command(command):
                self.modified = True
        else:
            raise TypeError(f"Unknown command {command!r}")

    def _handle_prompt_mode(self, key_event: KeyEvent) -> bool:
        """Handle input in prompt mode.

        Returns:
            True if in prompt mode and event was handled
        """
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            self._handle_filename_prompt(key_event)
            return True
        elif self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return True
        return False

    def load_file(self, filename: str):
        """Load a file into the editor.

        A file that doesn't exist yet starts an empty document that will be
        saved under that name.

        Args:
            filename: Path to file to load
        """
        self.filename = filename
        try:
            self.view.load(filename)
            self.modified = False
        except BufferLoadError as e:
            if isinstance(e.error, FileNotFoundError):
                logger.info("%s does not exist yet, starting a new file", filename)
                self.modified = False
                return
            logger.warning("Error loading file: %s", e)
            print(f"Error loading file: {e}")
            sys.exit(1)

    def save_file(self, filename: str) -> bool:
        """Save the current document to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        try:
            self.view.buffer.save(filename)
        except BufferSaveError as e:
            logger.warning("Save failed: %s", e)
            if isinstance(e.error, PermissionError):
                self.status_message = f"Error: Permission denied saving {filename}"
            else:
                self.status_message = f"Error: Cannot save to {filename}"
            return False
        self.filename = filename
        self.modified = False
        return True

    def _handle_save(self):
        """Handle Ctrl-S save command."""
        if self.filename:
            if self.save_file(self.filename):
                self.status_message = EditorConstants.SAVED_MESSAGE.format(self.filename)
        else:
            # Need to prompt for filename
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""

    def _handle_filename_prompt(self, key_event: KeyEvent):
        """Handle keypress during filename prompt."""
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.prompt_mode = None
            self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                quit_after = self.prompt_mode == 'save_filename_quit'
                if self.save_file(self.prompt_input):
                    self.status_message = EditorConstants.SAVED_MESSAGE.format(self.prompt_input)
                    if quit_after:
                        self.running = False
                self.prompt_mode = None
                self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if ord(char[0]) >= 32:
                self.prompt_input += char

    def _handle_quit_confirm(self, key_event: KeyEvent):
        """Handle keypress during quit confirmation."""
        if key_event.key_type != KeyType.REGULAR:
            return
        char = key_event.value.lower()
        if char == 'y':
            if self.filename:
                self.prompt_mode = None
                if self.save_file(self.filename):
                    self.running = False
            else:
                # Need filename first
                self.prompt_mode = 'save_filename_quit'
                self.prompt_input = ""
        elif char == 'n':
            self.running = False
        else:
            self.prompt_mode = None
