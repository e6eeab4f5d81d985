#!/usr/bin/env python3
"""hecto - a small terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home, End, PageUp, PageDown: Move the cursor
    Type to insert text
    Backspace / Delete: Delete character before / under the cursor
    Ctrl-S: Save file
    Ctrl-Q: Quit (prompts to save if modified)
"""

from hecto.__main__ import main


if __name__ == "__main__":
    main()
