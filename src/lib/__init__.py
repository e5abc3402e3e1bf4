"""
versemark - Marker language for right-to-left poetic text

Lexes, parses, restyles and renders text annotated with ||BREAK|| and
||HEADER|| markers.
"""

__version__ = "1.0.0"

from .parser import Parser
from .renderer import Renderer
from .templates import TemplateEngine, TemplateRegistry, TemplateValidationError
from .editor import breakMarker_insert
from .log import LOG, state_connectToLogger

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
