"""
versemark - Marker language for right-to-left poetic text

Authors mark section boundaries and alignment with inline ||BREAK|| and
||HEADER|| markers and apply repeating style templates; readers render the
marked text into aligned, verse-numbered HTML.
"""

__version__ = "1.0.0"

from .lib import (
    Parser,
    Renderer,
    TemplateEngine,
    TemplateRegistry,
    TemplateValidationError,
    breakMarker_insert,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Parser",
    "Renderer",
    "TemplateEngine",
    "TemplateRegistry",
    "TemplateValidationError",
    "breakMarker_insert",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
