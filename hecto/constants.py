"""Constants and configuration for the hecto editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    NAME = "hecto"

    # Display substitutions for graphemes that can't be shown as-is
    TAB_REPLACEMENT = " "
    WHITESPACE_REPLACEMENT = "␣"  # Visible whitespace other than a plain space
    CONTROL_REPLACEMENT = "▯"  # Single control character
    ZERO_WIDTH_REPLACEMENT = "·"  # Anything else with no width
    TRUNCATION_MARKER = "⋯"  # Wide grapheme cut by the scroll window

    # Viewport
    EMPTY_ROW_MARKER = "~"  # Rows past the end of the document
    WELCOME_MESSAGE = "{} editor -- v{}"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    SAVED_MESSAGE = "Saved to {}"
    SAVE_PROMPT = "Save as: {}"
    QUIT_CONFIRM_PROMPT = "Save changes? (y, n) "
    HELP_MESSAGE = "Ctrl-S save | Ctrl-Q quit"

    # Logging
    LOG_FILE_NAME = "hecto.log"
