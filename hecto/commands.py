"""Editor commands and the key bindings that produce them."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union, TYPE_CHECKING
import logging

from .keyboard import KeyType
from .position import Size

if TYPE_CHECKING:
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Ways the cursor can move."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class Resize:
    size: Size


@dataclass(frozen=True)
class InsertChar:
    character: str


@dataclass(frozen=True)
class DeleteLeft:
    pass


@dataclass(frozen=True)
class DeleteRight:
    pass


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class Quit:
    pass


EditorCommand = Union[Move, Resize, InsertChar, DeleteLeft, DeleteRight, Save, Quit]

# Commands the view handles; Save and Quit belong to the editor
VIEW_COMMANDS = (Move, Resize, InsertChar, DeleteLeft, DeleteRight)


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        for direction in Direction:
            self.register((KeyType.SPECIAL, direction.value), Move(direction))
        self.register((KeyType.CTRL, 'a'), Move(Direction.HOME))
        self.register((KeyType.CTRL, 'e'), Move(Direction.END))

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), DeleteLeft())
        self.register((KeyType.SPECIAL, 'delete'), DeleteRight())
        self.register((KeyType.CTRL, 'd'), DeleteRight())

        # System commands
        self.register((KeyType.CTRL, 'q'), Quit())
        self.register((KeyType.CTRL, 's'), Save())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination.

        Args:
            key: Tuple of (KeyType, value)
            command: Command produced when the key is pressed
        """
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def resolve(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Get the command for a key event, or None if the key is unbound.

        Printable keys without a binding insert themselves.
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is not None:
            return command
        if key_event.key_type == KeyType.REGULAR and _is_insertable(key_event.value):
            return InsertChar(key_event.value)
        logger.debug("No command bound to %r", key_event.raw)
        return None


def _is_insertable(value: str) -> bool:
    # Filter out control characters, but let tabs through
    return len(value) == 1 and (ord(value) >= 32 and value != '\x7f' or value == '\t')
