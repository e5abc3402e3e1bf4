"""
Marker and section data models

Type-safe structures produced by the lexer and parser. Everything here is
transient: the marked text string is the single source of truth and these
objects are rebuilt on every parse.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class Alignment(Enum):
    """
    Alignment styles a section can carry

    RIGHT is the default for right-to-left text. HEADER is an internal role
    set by the ||HEADER|| marker and is never written into a break marker.
    """
    RIGHT = "right"
    CENTER = "center"
    INDENT = "indent"
    LEFT = "left"
    HEADER = "header"

    @classmethod
    def fromSuffix(cls, suffix: Optional[str]) -> "Alignment":
        """
        Resolve a break marker suffix to an alignment

        Missing or unrecognised suffixes resolve to RIGHT rather than
        raising, so hand-edited or legacy text always parses. Suffixes are
        case-sensitive. The header role cannot be selected through a break
        marker.

        Args:
            suffix: Text after the colon in ||BREAK:<suffix>||, or None

        Returns:
            Matching Alignment, RIGHT when unknown

        Example:
            >>> Alignment.fromSuffix("indent")
            <Alignment.INDENT: 'indent'>
            >>> Alignment.fromSuffix("sideways")
            <Alignment.RIGHT: 'right'>
        """
        if not suffix:
            return cls.RIGHT
        try:
            style = cls(suffix)
        except ValueError:
            return cls.RIGHT
        if style is cls.HEADER:
            return cls.RIGHT
        return style


class MarkerKind(Enum):
    """Kinds of inline marker tokens"""
    BREAK = "break"
    HEADER = "header"


@dataclass(frozen=True)
class MarkerToken:
    """
    A marker located in raw text

    Attributes:
        kind: BREAK or HEADER
        style: Alignment for the section after a break (None for headers)
        offset_start: Index of the first marker character
        offset_end: Index one past the last marker character
        literal: The marker text exactly as written in the source

    Example:
        For "abc||BREAK:left||":
        MarkerToken(kind=MarkerKind.BREAK, style=Alignment.LEFT,
                    offset_start=3, offset_end=17, literal="||BREAK:left||")
    """
    kind: MarkerKind
    style: Optional[Alignment]
    offset_start: int
    offset_end: int
    literal: str

    @property
    def length(self) -> int:
        return self.offset_end - self.offset_start


@dataclass(frozen=True)
class Segment:
    """
    One piece of the lexer output stream

    Plain-text segments have marker=None. Joining every segment's text in
    order reproduces the source exactly.
    """
    text: str
    offset: int
    marker: Optional[MarkerToken] = None

    @property
    def is_marker(self) -> bool:
        return self.marker is not None


@dataclass
class LayoutSection:
    """
    A typed block of the parsed document

    Attributes:
        content: Section lines joined by newline ("" for a pure divider)
        style: Alignment of the section
        is_break: True for dividers produced by break markers
        is_header: True for the title/header section

    Example:
        "alpha\\n\\n||BREAK:center||\\n\\nbeta" parses to:
        [LayoutSection("alpha", Alignment.RIGHT),
         LayoutSection("", Alignment.RIGHT, is_break=True),
         LayoutSection("beta", Alignment.CENTER)]
    """
    content: str
    style: Alignment = Alignment.RIGHT
    is_break: bool = False
    is_header: bool = False

    @property
    def is_divider(self) -> bool:
        return self.is_break and not self.content

    def lines_get(self) -> list[str]:
        """Non-blank, trimmed lines of the section content"""
        return [line.strip() for line in (self.content or "").split("\n") if line.strip()]


@dataclass(frozen=True)
class MarkerEdit:
    """
    A single splice to apply to raw text

    Replaces source[offset:offset + length] with replacement. Edits are
    collected first and applied once by lib.templates.edits_apply().
    """
    offset: int
    length: int
    replacement: str

    @property
    def delta(self) -> int:
        """Change in text length caused by this edit"""
        return len(self.replacement) - self.length


@dataclass(frozen=True)
class InsertionResult:
    """
    Result of inserting a break marker at a caret

    Attributes:
        text: New marked text
        caret: Offset the caller should restore the cursor to
    """
    text: str
    caret: int
