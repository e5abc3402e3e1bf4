"""
Template pattern models

Defines the cyclic style sequences that the template engine spreads across
a document's break markers or paragraph boundaries.
"""

from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .markers import Alignment


@dataclass(frozen=True)
class TemplatePattern:
    """
    A named, cyclic sequence of alignment styles

    Attributes:
        name: Template name used for lookup (e.g., "alternating")
        styles: Non-empty ordered styles; index i wraps modulo the length
        description: Human-readable description

    Raises:
        ValueError: If styles is empty or contains the header role

    Example:
        >>> pattern = TemplatePattern("alternating", (Alignment.RIGHT, Alignment.LEFT))
        >>> pattern.style_at(3)
        <Alignment.LEFT: 'left'>
    """
    name: str
    styles: Tuple[Alignment, ...]
    description: str = field(default="")

    def __post_init__(self) -> None:
        styles = tuple(self.styles)
        if not styles:
            raise ValueError(f"Template '{self.name}' needs at least one style")
        if Alignment.HEADER in styles:
            raise ValueError(f"Template '{self.name}' cannot use the header role")
        # frozen dataclass: normalise lists passed by callers into a tuple
        object.__setattr__(self, "styles", styles)

    def style_at(self, index: int) -> Alignment:
        """Style for the marker at ordinal position index (cyclic)"""
        return self.styles[index % len(self.styles)]

    @classmethod
    def fromNames(cls, name: str, style_names: Sequence[str], description: str = "") -> "TemplatePattern":
        """
        Build a pattern from plain style names

        Args:
            name: Template name
            style_names: Alignment values such as ["right", "left"]
            description: Human-readable description

        Raises:
            ValueError: If a name is not a known alignment
        """
        return cls(name, tuple(Alignment(s.lower()) for s in style_names), description)


# Built-in templates registered by TemplateRegistry
BUILTIN_TEMPLATES: Tuple[TemplatePattern, ...] = (
    TemplatePattern(
        "classic",
        (Alignment.RIGHT,),
        "Every stanza right-aligned",
    ),
    TemplatePattern(
        "alternating",
        (Alignment.RIGHT, Alignment.LEFT),
        "Stanzas alternate between right and left",
    ),
    TemplatePattern(
        "centered",
        (Alignment.CENTER,),
        "Every stanza centered",
    ),
    TemplatePattern(
        "indented",
        (Alignment.RIGHT, Alignment.INDENT),
        "Right-aligned stanzas alternating with indented refrains",
    ),
    TemplatePattern(
        "cascade",
        (Alignment.RIGHT, Alignment.CENTER, Alignment.LEFT),
        "Stanzas step from right through center to left",
    ),
)
