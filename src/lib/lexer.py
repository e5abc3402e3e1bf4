"""
Marker lexer for versemark text

Scans raw marked text and emits an ordered, lossless stream of plain-text
and marker segments.

Marker syntax:
- ||BREAK||            section boundary, following section right-aligned
- ||BREAK:<style>||    section boundary, following section uses <style>
- ||HEADER||           following content is the header/title section

Unknown style suffixes fall back to right alignment instead of failing, so
hand-edited and legacy text always lexes.

Example:
    >>> segments = MarkerLexer("one||BREAK:left||two").segments_scan()
    >>> [s.text for s in segments]
    ['one', '||BREAK:left||', 'two']
    >>> segments[1].marker.style
    <Alignment.LEFT: 'left'>
"""

import re
from typing import List, Optional

from ..models.markers import Alignment, MarkerKind, MarkerToken, Segment


BREAK_PATTERN = r'\|\|BREAK(?::(\w+))?\|\|'
HEADER_MARKER = '||HEADER||'

MARKER_RE = re.compile(BREAK_PATTERN + r'|' + re.escape(HEADER_MARKER))
BREAK_RE = re.compile(BREAK_PATTERN)
PARAGRAPH_RE = re.compile(r'\n{2,}')


def marker_make(style: Alignment = Alignment.RIGHT) -> str:
    """
    Build the break marker literal for a style

    Right alignment is always written in the unsuffixed form.

    Args:
        style: Alignment for the section that follows the marker

    Returns:
        Marker literal, e.g. "||BREAK||" or "||BREAK:indent||"

    Raises:
        ValueError: If style is the header role
    """
    if style is Alignment.HEADER:
        raise ValueError("The header role is written as ||HEADER||, not as a break style")
    if style is Alignment.RIGHT:
        return '||BREAK||'
    return f'||BREAK:{style.value}||'


def paragraphs_split(text: str) -> List[str]:
    """
    Split text into paragraphs on runs of two or more newlines

    Paragraphs are trimmed and blank ones dropped.

    Example:
        >>> paragraphs_split("a\\n\\n\\n b \\n\\n  \\n\\nc")
        ['a', 'b', 'c']
    """
    return [p.strip() for p in PARAGRAPH_RE.split(text) if p.strip()]


class MarkerLexer:
    """
    Single forward scan over marked text

    Produces Segment objects that cover every source character exactly
    once, in order.
    """

    def __init__(self, source: str):
        """
        Initialize lexer with source text

        Args:
            source: Raw marked text
        """
        self.source = source

    def token_make(self, match: "re.Match[str]") -> MarkerToken:
        """Convert a regex match into a MarkerToken"""
        literal = match.group(0)
        if literal == HEADER_MARKER:
            return MarkerToken(
                kind=MarkerKind.HEADER,
                style=None,
                offset_start=match.start(),
                offset_end=match.end(),
                literal=literal,
            )
        return MarkerToken(
            kind=MarkerKind.BREAK,
            style=Alignment.fromSuffix(match.group(1)),
            offset_start=match.start(),
            offset_end=match.end(),
            literal=literal,
        )

    def segments_scan(self) -> List[Segment]:
        """
        Scan the source into plain and marker segments

        Returns:
            Ordered segments; empty list for empty source

        Example:
            For "a||HEADER||b":
            [Segment("a", 0), Segment("||HEADER||", 1, marker=...), Segment("b", 11)]
        """
        segments: List[Segment] = []
        last = 0

        for match in MARKER_RE.finditer(self.source):
            if match.start() > last:
                segments.append(Segment(self.source[last:match.start()], last))
            segments.append(Segment(match.group(0), match.start(), self.token_make(match)))
            last = match.end()

        if last < len(self.source):
            segments.append(Segment(self.source[last:], last))

        return segments

    def markers_find(self) -> List[MarkerToken]:
        """All marker tokens in document order"""
        return [self.token_make(m) for m in MARKER_RE.finditer(self.source)]

    def breaks_find(self) -> List[MarkerToken]:
        """Break marker tokens only, in document order"""
        return [self.token_make(m) for m in BREAK_RE.finditer(self.source)]

    def markers_has(self) -> bool:
        return MARKER_RE.search(self.source) is not None

    def marker_findNext(self, position: int = 0) -> Optional[MarkerToken]:
        """
        Find the next marker at or after position

        Args:
            position: Character offset to start searching from

        Returns:
            MarkerToken, or None if no marker follows position
        """
        match = MARKER_RE.search(self.source, position)
        if not match:
            return None
        return self.token_make(match)
