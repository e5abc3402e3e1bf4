"""
Editing helpers for marked text

breakMarker_insert() is the single-marker insertion tool used by authoring
forms: it splices a break marker at the caret and reports where the caret
should go afterwards. The remaining helpers prepare text arriving from
outside collaborators (disk, the translation service).
"""

import re
from typing import Optional

from ..models.markers import Alignment, InsertionResult
from .lexer import BREAK_RE, marker_make

# NUL and control characters except tab, newline and carriage return
CONTROL_RE = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')


def breakMarker_insert(
    text: str,
    start: int,
    end: Optional[int] = None,
    style: Alignment = Alignment.RIGHT,
) -> InsertionResult:
    """
    Insert a break marker at a caret, replacing any selected text

    The marker is framed by a blank line on each side. A non-empty selection
    [start, end) is overwritten, not preserved. Out-of-range offsets are
    clamped to [0, len(text)]; an end before start collapses to start.

    Args:
        text: Raw marked text
        start: Caret position (selection start)
        end: Selection end; None or equal to start for a plain caret
        style: Alignment for the section after the marker

    Returns:
        InsertionResult with the new text and the caret offset just past the
        inserted marker block (start + len(marker) + 4)

    Raises:
        ValueError: If style is the header role

    Example:
        >>> result = breakMarker_insert("one two", 3, style=Alignment.CENTER)
        >>> result.text
        'one\\n\\n||BREAK:center||\\n\\n two'
        >>> result.caret
        23
    """
    length = len(text)
    start = min(max(start, 0), length)
    end = start if end is None else min(max(end, 0), length)
    if end < start:
        end = start

    literal = marker_make(style)
    inserted = '\n\n' + literal + '\n\n'
    return InsertionResult(
        text=text[:start] + inserted + text[end:],
        caret=start + len(literal) + 4,
    )


def breaks_flatten(text: str) -> str:
    """
    Collapse every break marker into a plain paragraph break

    Mirrors what the translation collaborator does to structure: breaks of
    any style become a blank line, header markers survive. Re-apply a
    template afterwards if the structure matters.

    Example:
        >>> breaks_flatten("a||BREAK:left||b")
        'a\\n\\nb'
    """
    return BREAK_RE.sub('\n\n', text)


def text_sanitize(text: Optional[str]) -> str:
    """
    Strip NUL and control characters, keeping line breaks and tabs

    Args:
        text: Text from an untrusted source (file, form, service)

    Returns:
        Cleaned, trimmed text; empty string for None
    """
    if not text:
        return ''
    return CONTROL_RE.sub('', text).strip()
