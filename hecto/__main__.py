"""hecto CLI entry point.

Allows running via `python -m hecto` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys

from .settings import EditorSettings, load_settings, log_file_path
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging(settings: EditorSettings) -> None:
    """Send log records to a file if the settings ask for one.

    The terminal belongs to the editor, so nothing is ever logged to it.
    """
    if not settings.log_level:
        logging.getLogger("hecto").addHandler(logging.NullHandler())
        return
    path = log_file_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding='utf-8')
    except OSError as e:
        print(f"Cannot open log file {path}: {e}", file=sys.stderr)
        return
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger = logging.getLogger("hecto")
    logger.addHandler(handler)
    try:
        logger.setLevel(settings.log_level.upper())
    except ValueError:
        print(f"Unknown log level {settings.log_level!r}, using WARNING", file=sys.stderr)
        logger.setLevel(logging.WARNING)


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .commands import CommandRegistry
    from .keyboard import KeyboardHandler, KeyType
    from .terminal import TerminalInterface

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    registry = CommandRegistry()
    lines = []
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{_escape_bytes(ev.raw)}'"]
            command = registry.resolve(ev)
            if command is not None:
                parts.append(f"command={command!r}")
            lines = (lines + [' '.join(parts)])[-term.size.height:]
            for row, line in enumerate(lines):
                term.print_row(row, line)
            term.flush()
    finally:
        term.cleanup()
    print("Exiting keyboard test.")


def main() -> None:
    # Very small arg parsing to support keyboard test mode, version, and optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    settings = load_settings()
    configure_logging(settings)

    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor(settings)
    if args:
        editor.load_file(args[0])
    editor.run()
    print("Goodbye!")


if __name__ == "__main__":  # pragma: no cover
    main()
