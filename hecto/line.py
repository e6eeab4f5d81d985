"""A single line of text, split into grapheme fragments.

Editing addresses a line by grapheme index, rendering addresses it by
display column. Each fragment remembers how many terminal cells it takes
and, for graphemes that can't be printed as-is, which character to show
instead.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

import grapheme
from wcwidth import wcswidth

from .constants import EditorConstants


class GraphemeWidth(Enum):
    """Number of terminal cells a fragment occupies."""
    HALF = 1
    FULL = 2


def _intrinsic_width(cluster: str) -> int:
    # wcswidth reports -1 for non-printables; treat those as zero width
    width = wcswidth(cluster)
    return width if width > 0 else 0


def _replacement_for(cluster: str, width: int) -> Optional[str]:
    if cluster == " ":
        return None
    if cluster == "\t":
        return EditorConstants.TAB_REPLACEMENT
    if width > 0 and cluster.isspace():
        return EditorConstants.WHITESPACE_REPLACEMENT
    if width == 0:
        if len(cluster) == 1 and unicodedata.category(cluster) == "Cc":
            return EditorConstants.CONTROL_REPLACEMENT
        return EditorConstants.ZERO_WIDTH_REPLACEMENT
    return None


@dataclass(frozen=True)
class Fragment:
    grapheme: str
    rendered_width: GraphemeWidth
    replacement: Optional[str] = None

    @classmethod
    def from_grapheme(cls, cluster: str) -> "Fragment":
        width = _intrinsic_width(cluster)
        replacement = _replacement_for(cluster, width)
        if replacement is not None or width < 2:
            rendered_width = GraphemeWidth.HALF
        else:
            rendered_width = GraphemeWidth.FULL
        return cls(cluster, rendered_width, replacement)

    @property
    def display(self) -> str:
        """What gets printed for this fragment."""
        return self.replacement if self.replacement is not None else self.grapheme

    @property
    def width(self) -> int:
        return self.rendered_width.value


class Line:
    """One line of text as an ordered list of fragments."""

    def __init__(self, text: str = ""):
        self.fragments: list[Fragment] = [
            Fragment.from_grapheme(cluster) for cluster in grapheme.graphemes(text)
        ]

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.fragments)

    def __str__(self) -> str:
        return "".join(fragment.grapheme for fragment in self.fragments)

    def __repr__(self) -> str:
        return f"Line({str(self)!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.fragments == other.fragments

    def position_of(self, grapheme_index: int) -> int:
        """Display column at which the grapheme at grapheme_index starts.

        An index at or past the end gives the column just after the last
        grapheme, where the caret sits when it is at the end of the line.
        """
        return sum(fragment.width for fragment in self.fragments[:max(grapheme_index, 0)])

    def width(self) -> int:
        return self.position_of(len(self.fragments))

    def get(self, start: int, end: int) -> str:
        """Render the display columns [start, end) of this line.

        A wide grapheme that straddles either edge of the range is shown
        as a single truncation marker rather than half a glyph.
        """
        if start >= end:
            return ""
        result = []
        current = 0
        for fragment in self.fragments:
            if current >= end:
                break
            fragment_end = current + fragment.width
            if fragment_end > start:
                if fragment_end > end or current < start:
                    result.append(EditorConstants.TRUNCATION_MARKER)
                else:
                    result.append(fragment.display)
            current = fragment_end
        return "".join(result)

    def insert(self, grapheme_index: int, character: str):
        """Insert character as a new grapheme before grapheme_index.

        Indices at or past the end append. The new grapheme is never merged
        with its neighbours, even if it is a combining mark.
        """
        fragment = Fragment.from_grapheme(character)
        if grapheme_index >= len(self.fragments):
            self.fragments.append(fragment)
        else:
            self.fragments.insert(max(grapheme_index, 0), fragment)

    def delete(self, grapheme_index: int) -> bool:
        if 0 <= grapheme_index < len(self.fragments):
            del self.fragments[grapheme_index]
            return True
        return False
