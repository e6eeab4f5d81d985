from dataclasses import dataclass


@dataclass
class Position:
    """A (row, col) address.

    Logical positions count graphemes in col; grid positions count
    display columns. Rows are the same in both since lines don't wrap.
    """
    row: int = 0
    col: int = 0


@dataclass(frozen=True)
class Size:
    width: int = 0
    height: int = 0
