"""
Renderer data models

RenderConfig carries the reader's display preferences; RenderBlock is one
planned visual unit produced by Renderer.blocks_plan() before any HTML is
emitted.
"""

from dataclasses import dataclass, field, replace
from typing import Any, List, Optional

from .markers import Alignment


@dataclass(frozen=True)
class RenderConfig:
    """
    Display configuration for the layout renderer

    Attributes:
        compact_mode: Use tighter vertical spacing
        highlight_current_verse: Highlight the verse at current_verse_index
        current_verse_index: Verse index supplied by the playback position
        show_verse_numbers: Show a verse number badge on each verse
        font_size: Base font size in px
        line_height: CSS line-height multiplier
        font_family: Font family name
        title: Optional piece title for the header grid
        poet: Optional poet name for the header grid
        reciter: Optional reciter name for the header grid
    """
    compact_mode: bool = False
    highlight_current_verse: bool = False
    current_verse_index: Optional[int] = None
    show_verse_numbers: bool = False
    font_size: int = 24
    line_height: float = 2.2
    font_family: Optional[str] = None
    title: Optional[str] = None
    poet: Optional[str] = None
    reciter: Optional[str] = None

    @classmethod
    def config_fromSettings(cls, settings: Any, **overrides: Any) -> "RenderConfig":
        """
        Build a RenderConfig from AppSettings, then apply overrides

        Args:
            settings: AppSettings instance
            **overrides: Field values that take precedence over settings

        Returns:
            RenderConfig instance
        """
        config = cls(
            compact_mode=settings.compact_mode,
            highlight_current_verse=settings.highlight_current_verse,
            show_verse_numbers=settings.show_verse_numbers,
            font_size=settings.font_size,
            line_height=settings.line_height,
            font_family=settings.font_family,
        )
        return replace(config, **overrides)


@dataclass
class RenderBlock:
    """
    One planned visual unit of the rendered layout

    Divider blocks carry only margin_class. Section blocks carry the trimmed
    lines and every layout decision the HTML emitter needs.

    Attributes:
        kind: "divider" or "section"
        section_index: Index of the source LayoutSection
        lines: Trimmed, non-blank lines to display
        style: Alignment of the section
        verse_index: Zero-based verse ordinal, None for dividers and headers
        spacing_class: Vertical spacing class
        margin_class: Divider margin class (dividers and divider_before)
        is_couplet: Exactly two lines, rendered as a stacked unit
        is_header: Header section
        divider_before: Render an extra divider rule before this block
        show_badge: Render the verse number badge
        highlighted: Section matches the current playback verse
    """
    kind: str
    section_index: int
    lines: List[str] = field(default_factory=list)
    style: Alignment = Alignment.RIGHT
    verse_index: Optional[int] = None
    spacing_class: str = ""
    margin_class: str = ""
    is_couplet: bool = False
    is_header: bool = False
    divider_before: bool = False
    show_badge: bool = False
    highlighted: bool = False

    @property
    def is_divider(self) -> bool:
        return self.kind == "divider"
