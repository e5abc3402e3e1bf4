"""
Section builder for versemark text

Transforms marked text into an ordered list of LayoutSection objects.

The parser operates in two phases:
1. Lexing: MarkerLexer splits the source into plain and marker segments
2. Folding: segments are reduced into sections, carrying the style set by
   the most recent marker forward to the next block of text

Key behaviours:
- A break marker's style applies to the section AFTER it, never to the
  text preceding it. Authored content depends on this.
- Every break marker emits its own empty divider section, including at the
  very start or end of a document.
- A header marker switches the following content to the header role
  without emitting a divider.
- Text without any marker falls back to paragraph splitting.
- Parsing never raises; the worst case is one right-aligned section.

Example:
    >>> sections = Parser("alpha\\n\\n||BREAK:center||\\n\\nbeta\\n\\nbeta2").parse()
    >>> [(s.content, s.style.value, s.is_break) for s in sections]
    [('alpha', 'right', False), ('', 'right', True), ('beta\\nbeta2', 'center', False)]
"""

from dataclasses import dataclass, field, replace
from functools import reduce
from typing import List, Optional, Tuple

from ..models.markers import Alignment, LayoutSection, MarkerKind, Segment
from .lexer import MarkerLexer, paragraphs_split


@dataclass(frozen=True)
class FoldState:
    """
    Accumulator threaded through the section fold

    Attributes:
        sections: Finished sections, in order
        style: Style the next new section will take
        open_section: Section still accepting text, if any
    """
    sections: Tuple[LayoutSection, ...] = field(default_factory=tuple)
    style: Alignment = Alignment.RIGHT
    open_section: Optional[LayoutSection] = None

    def flush(self) -> "FoldState":
        """Close the open section, if any"""
        if self.open_section is None:
            return self
        return replace(self, sections=self.sections + (self.open_section,), open_section=None)


def text_normalize(text: str) -> str:
    """
    Trim a plain segment and drop its blank lines

    Example:
        >>> text_normalize("\\n\\n beta\\n\\nbeta2 \\n")
        'beta\\nbeta2'
    """
    return '\n'.join(line.strip() for line in text.strip().split('\n') if line.strip())


def segment_fold(state: FoldState, segment: Segment) -> FoldState:
    """
    Fold one segment into the accumulator

    Args:
        state: Accumulator so far
        segment: Next lexer segment

    Returns:
        New accumulator
    """
    marker = segment.marker

    if marker is not None and marker.kind is MarkerKind.BREAK:
        flushed = state.flush()
        divider = LayoutSection(content='', style=Alignment.RIGHT, is_break=True)
        return replace(
            flushed,
            sections=flushed.sections + (divider,),
            style=marker.style or Alignment.RIGHT,
        )

    if marker is not None and marker.kind is MarkerKind.HEADER:
        return replace(state.flush(), style=Alignment.HEADER)

    text = text_normalize(segment.text)
    if not text:
        return state

    if state.open_section is None:
        opened = LayoutSection(
            content=text,
            style=state.style,
            is_header=state.style is Alignment.HEADER,
        )
        return replace(state, open_section=opened)

    grown = replace(state.open_section, content=state.open_section.content + '\n' + text)
    return replace(state, open_section=grown)


class Parser:
    """
    Parser for versemark marked text

    Handles:
    - ||BREAK|| and ||BREAK:<style>|| section boundaries
    - ||HEADER|| header sections
    - Paragraph fallback for marker-free text
    """

    def __init__(self, source: str):
        """
        Initialize parser with source text

        Args:
            source: Raw marked text (the stored text field)

        Attributes:
            source: Source text being parsed
            lexer: MarkerLexer over the source
        """
        self.source = source
        self.lexer = MarkerLexer(source)

    def parse(self) -> List[LayoutSection]:
        """
        Parse source text into layout sections

        Returns:
            Ordered LayoutSection list. Returns empty list for empty or
            whitespace-only source.

        Example:
            >>> Parser("one\\n\\ntwo").parse()
            [LayoutSection(content='one', ...), LayoutSection(content='two', ...)]
        """
        segments = self.lexer.segments_scan()

        if not any(segment.is_marker for segment in segments):
            return self.paragraphs_parse()

        final = reduce(segment_fold, segments, FoldState()).flush()
        return list(final.sections)

    def paragraphs_parse(self) -> List[LayoutSection]:
        """
        Fallback for text without markers: one right-aligned section per paragraph

        Returns:
            Sections split on runs of two or more newlines
        """
        return [
            LayoutSection(content=text_normalize(paragraph), style=Alignment.RIGHT)
            for paragraph in paragraphs_split(self.source)
        ]
