"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from .markers import LayoutSection


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rendering pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as rendering progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile and display options
        - env_check: inputSourceFile, htmlOutputdir, envOK
        - source_read: sourceText
        - template_apply: sourceText (restyled), templateApplied
        - source_parse: parsedSections
        - html_render: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the marked text file
        outputdir: Base output directory for rendered files
        verbosity: Logging verbosity level (1-3)
        inputFile: Input text filename (relative to inputdir)
        outputFile: Rendered HTML filename (None uses the settings default)
        outputSubdir: Subdirectory within outputdir for output
        template: Optional template name to apply before rendering
        theme: Optional theme name (None uses the settings default)
        compactMode: Tighter vertical spacing
        showVerseNumbers: Render verse number badges
        highlightVerse: Verse index to highlight, or None
        title: Optional piece title
        poet: Optional poet name
        reciter: Optional reciter name
        writeSource: Also write the (restyled) marked text to the output dir
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        sourceText: Marked text read from inputSourceFile
        templateApplied: Name of the template applied, if any
        parsedSections: Sections parsed from sourceText
        renderResult: Render results (output_file, section_count, verse_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: Optional[str] = field(default=None)
    outputSubdir: str = field(default=".")
    template: Optional[str] = field(default=None)
    theme: Optional[str] = field(default=None)
    compactMode: bool = field(default=False)
    showVerseNumbers: bool = field(default=False)
    highlightVerse: Optional[int] = field(default=None)
    title: Optional[str] = field(default=None)
    poet: Optional[str] = field(default=None)
    reciter: Optional[str] = field(default=None)
    writeSource: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    htmlOutputdir: Path = field(default=Path("/"))
    sourceText: str = field(default="")
    templateApplied: Optional[str] = field(default=None)
    parsedSections: Optional[List[Any]] = field(default=None)  # List[LayoutSection] at runtime
    renderResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the rendering pipeline.

        Args:
            options: Parsed CLI arguments (inputFile, template, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep options that map onto ProgramState fields
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            source_parse,
            html_render,
        )

    This is equivalent to:
        html_render(source_parse(source_read(env_check(initial_state))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
