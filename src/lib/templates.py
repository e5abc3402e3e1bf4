"""
Template engine and registry for versemark text

A template is a cyclic sequence of alignment styles. Applying one to marked
text works in one of two modes, picked by whether the text already has break
markers:

- Restyle: every existing break marker is rewritten so that marker i takes
  styles[i mod len(styles)]. Header markers are left alone.
- Insertion: the text has no break markers, so new ones are placed between
  paragraphs (runs of two or more newlines). Needs at least two paragraphs.

Marker literals differ in length (||BREAK|| vs ||BREAK:indent||), so a
restyle shifts every later offset. The engine collects all edits against the
original text first and applies them back-to-front in a single pass, which
means no recorded offset is ever read after the text in front of it changed.
"""

from typing import Dict, List, Optional

from ..models.markers import MarkerEdit
from ..models.templates import TemplatePattern, BUILTIN_TEMPLATES
from .lexer import HEADER_MARKER, MarkerLexer, marker_make, paragraphs_split
from .log import LOG


class TemplateValidationError(ValueError):
    """Raised when a template cannot be applied; the text is left unchanged"""
    pass


def edits_apply(source: str, edits: List[MarkerEdit]) -> str:
    """
    Apply a list of edits recorded against the original source

    Edits are applied from the end of the string backwards, so each one
    uses its original offset.

    Args:
        source: Text the edit offsets refer to
        edits: Non-overlapping edits, in any order

    Returns:
        Edited text

    Raises:
        ValueError: If an edit falls outside source or two edits overlap
    """
    ordered = sorted(edits, key=lambda edit: edit.offset)

    previous_end = 0
    for edit in ordered:
        if edit.offset < 0 or edit.length < 0 or edit.offset + edit.length > len(source):
            raise ValueError(f"Edit at offset {edit.offset} (length {edit.length}) is out of range")
        if edit.offset < previous_end:
            raise ValueError(f"Edit at offset {edit.offset} overlaps the previous edit")
        previous_end = edit.offset + edit.length

    result = source
    for edit in reversed(ordered):
        result = result[:edit.offset] + edit.replacement + result[edit.offset + edit.length:]
    return result


def offsets_adjust(edits: List[MarkerEdit]) -> List[int]:
    """
    Offsets at which each edit's replacement lands in the edited text

    Walks the edits in document order keeping a running length delta, the
    bookkeeping a caller needs to map an original position to the new text.

    Example:
        Two edits at 5 and 20, the first growing the text by 7:
        >>> offsets_adjust([MarkerEdit(5, 9, "x" * 16), MarkerEdit(20, 9, "y" * 9)])
        [5, 27]
    """
    adjusted: List[int] = []
    delta = 0
    for edit in sorted(edits, key=lambda e: e.offset):
        adjusted.append(edit.offset + delta)
        delta += edit.delta
    return adjusted


def headerParagraphs_merge(paragraphs: List[str]) -> List[str]:
    """
    Merge paragraphs that hold only a header marker into the next paragraph

    Keeps a header marker attached to the content it introduces, so
    insertion mode never puts a break between them.
    """
    merged: List[str] = []
    pending: Optional[str] = None
    for paragraph in paragraphs:
        if pending is not None:
            paragraph = pending + '\n\n' + paragraph
            pending = None
        if paragraph == HEADER_MARKER:
            pending = paragraph
            continue
        merged.append(paragraph)
    if pending is not None:
        merged.append(pending)
    return merged


class TemplateEngine:
    """
    Applies a TemplatePattern to marked text

    All methods are pure: they return new text and never touch the input.
    """

    def __init__(self, pattern: TemplatePattern):
        """
        Initialize engine with a pattern

        Args:
            pattern: Cyclic style pattern to apply
        """
        self.pattern = pattern

    def template_apply(self, text: str) -> str:
        """
        Apply the pattern, choosing restyle or insertion mode

        Args:
            text: Raw marked text

        Returns:
            New marked text

        Raises:
            TemplateValidationError: Insertion mode with fewer than two paragraphs
        """
        if MarkerLexer(text).breaks_find():
            return self.breaks_restyle(text)
        return self.breaks_insert(text)

    def edits_collect(self, text: str) -> List[MarkerEdit]:
        """
        Record one edit per break marker, styled by ordinal position

        Markers that already carry the right literal still get an edit; it
        simply replaces the marker with identical text.
        """
        edits: List[MarkerEdit] = []
        for ordinal, token in enumerate(MarkerLexer(text).breaks_find()):
            literal = marker_make(self.pattern.style_at(ordinal))
            edits.append(MarkerEdit(offset=token.offset_start, length=token.length, replacement=literal))
            LOG(f"Break {ordinal} at offset {token.offset_start}: {token.literal} -> {literal}", level=3)
        return edits

    def breaks_restyle(self, text: str) -> str:
        """
        Rewrite every existing break marker in place

        Example:
            Pattern [right, left] on "a||BREAK||b||BREAK:indent||c||BREAK||d"
            gives "a||BREAK||b||BREAK:left||c||BREAK||d".
        """
        edits = self.edits_collect(text)
        LOG(f"Restyling {len(edits)} break markers with template '{self.pattern.name}'", level=2)
        return edits_apply(text, edits)

    def breaks_insert(self, text: str) -> str:
        """
        Insert break markers between paragraphs of marker-free text

        The marker between paragraph k-1 and k uses styles[(k-1) mod n];
        the first paragraph gets no leading marker.

        Raises:
            TemplateValidationError: Fewer than two paragraphs
        """
        paragraphs = headerParagraphs_merge(paragraphs_split(text))
        if len(paragraphs) < 2:
            raise TemplateValidationError(
                f"Template '{self.pattern.name}' needs at least two paragraphs "
                f"separated by a blank line; found {len(paragraphs)}"
            )

        LOG(f"Inserting {len(paragraphs) - 1} break markers with template '{self.pattern.name}'", level=2)

        parts = [paragraphs[0]]
        for k in range(1, len(paragraphs)):
            parts.append('\n\n' + marker_make(self.pattern.style_at(k - 1)) + '\n\n')
            parts.append(paragraphs[k])
        return ''.join(parts)


class TemplateRegistry:
    """
    Registry of named template patterns

    Starts with the built-in templates; applications may register more.
    """

    def __init__(self) -> None:
        """Initialize the registry with the built-in templates"""
        self.patterns: Dict[str, TemplatePattern] = {}
        for pattern in BUILTIN_TEMPLATES:
            self.register(pattern)

    def register(self, pattern: TemplatePattern) -> None:
        """Register a pattern, replacing any with the same name"""
        self.patterns[pattern.name] = pattern

    def get(self, name: str) -> Optional[TemplatePattern]:
        """
        Get a pattern by name

        Returns:
            TemplatePattern or None if not found
        """
        return self.patterns.get(name)

    def templates_list(self) -> List[TemplatePattern]:
        """All registered patterns, sorted by name"""
        return [self.patterns[name] for name in sorted(self.patterns)]


def template_applyByName(text: str, name: str, registry: Optional[TemplateRegistry] = None) -> str:
    """
    Look up a template by name and apply it

    Args:
        text: Raw marked text
        name: Registered template name
        registry: Registry to search (defaults to the built-in templates)

    Raises:
        TemplateValidationError: Unknown template name, or insertion mode
            with fewer than two paragraphs
    """
    registry = registry or TemplateRegistry()
    pattern = registry.get(name)
    if pattern is None:
        known = ', '.join(p.name for p in registry.templates_list())
        raise TemplateValidationError(f"Unknown template '{name}' (available: {known})")
    return TemplateEngine(pattern).template_apply(text)
