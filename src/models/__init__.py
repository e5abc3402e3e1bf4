"""
Models package for versemark

Contains data structures and type definitions for parsing, templating and rendering.
"""

from .state import ProgramState, pipeline
from .markers import (
    Alignment,
    MarkerKind,
    MarkerToken,
    Segment,
    LayoutSection,
    MarkerEdit,
    InsertionResult,
)
from .templates import TemplatePattern, BUILTIN_TEMPLATES
from .render import RenderConfig, RenderBlock

__all__ = [
    "ProgramState",
    "pipeline",
    "Alignment",
    "MarkerKind",
    "MarkerToken",
    "Segment",
    "LayoutSection",
    "MarkerEdit",
    "InsertionResult",
    "TemplatePattern",
    "BUILTIN_TEMPLATES",
    "RenderConfig",
    "RenderBlock",
]
