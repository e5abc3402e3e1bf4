#!/usr/bin/env python3
"""
versemark - Marker language for right-to-left poetic text

Renders marked text files into standalone, right-to-left HTML recitation
pages, optionally restyling the text with a named template first.

As with our other tools, the ChRIS "plugin" pattern serves as the general
purpose app framework: an input directory, an output directory and a small
set of options.

Marker syntax:
    ||BREAK||            section boundary (following section right-aligned)
    ||BREAK:<style>||    section boundary, style in {center, indent, left}
    ||HEADER||           following content is the header section

Usage:
    versemark inputdir/ outputdir/ --inputFile poem.txt

Examples:
    # Basic render
    versemark . output/ --inputFile poem.txt

    # Alternate stanza alignment, keep the restyled source next to the HTML
    versemark . output/ --inputFile poem.txt --template alternating --writeSource

    # Compact layout with verse numbers, highlighting the third verse
    versemark . output/ --inputFile poem.txt --compactMode --showVerseNumbers --highlightVerse 2 -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter, BooleanOptionalAction

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Parser, Renderer, TemplateRegistry, TemplateEngine, TemplateValidationError, __version__, LOG, state_connectToLogger
from .lib.editor import text_sanitize
from .lib.theme import Theme, ThemeError
from .models import ProgramState, RenderConfig, pipeline


DISPLAY_TITLE = r"""
 __   _____ _ __ ___  ___ _ __ ___   __ _ _ __| | __
 \ \ / / _ \ '__/ __|/ _ \ '_ ` _ \ / _` | '__| |/ /
  \ V /  __/ |  \__ \  __/ | | | | | (_| | |  |   <
   \_/ \___|_|  |___/\___|_| |_| |_|\__,_|_|  |_|\_\

  Right-to-left recitation renderer
"""

# Define CLI arguments
parser = ArgumentParser(
    description="versemark - render marked right-to-left poetic text to HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input marked text file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help=f"Rendered HTML filename. Defaults to {appsettings.output_filename}",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the rendered page",
)

parser.add_argument(
    "--template",
    default=appsettings.default_template,
    type=str,
    help="Template to apply before rendering (classic, alternating, centered, indented, cascade)",
)

parser.add_argument(
    "--theme",
    default=appsettings.default_theme,
    type=str,
    help="Theme used for class names and CSS",
)

parser.add_argument(
    "--compactMode",
    action=BooleanOptionalAction,
    default=appsettings.compact_mode,
    help="Tighter vertical spacing",
)

parser.add_argument(
    "--showVerseNumbers",
    action=BooleanOptionalAction,
    default=appsettings.show_verse_numbers,
    help="Show verse number badges",
)

parser.add_argument(
    "--highlightVerse",
    default=None,
    type=int,
    help="Zero-based verse index to highlight",
)

parser.add_argument("--title", default=None, type=str, help="Piece title")
parser.add_argument("--poet", default=None, type=str, help="Poet name")
parser.add_argument("--reciter", default=None, type=str, help="Reciter name")

parser.add_argument(
    "--writeSource",
    action="store_true",
    help="Also write the (restyled) marked text into the output directory",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input file
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file is missing
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the marked text and strip control characters.

    Returns:
        ProgramState with added field:
            - sourceText: Sanitized marked text

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        raw = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    state.sourceText = text_sanitize(raw)
    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def template_apply(inputstate: ProgramState) -> ProgramState:
    """
    Apply the requested template to the marked text, if any.

    Returns:
        ProgramState with:
            - sourceText: Restyled text
            - templateApplied: Template name

    Exits:
        1 if the template is unknown or cannot be applied
    """

    state = inputstate.copy()
    if not state.template:
        return state

    pattern = TemplateRegistry().get(state.template)
    if pattern is None:
        print(f"Error: Unknown template: {state.template}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Applying template '{pattern.name}'...", level=1)
    try:
        state.sourceText = TemplateEngine(pattern).template_apply(state.sourceText)
    except TemplateValidationError as e:
        print(f"Template error: {e}", file=sys.stderr)
        sys.exit(1)

    state.templateApplied = pattern.name
    return state


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Parse the marked text into layout sections.

    Returns:
        ProgramState with added field:
            - parsedSections: List[LayoutSection]
    """

    state = inputstate.copy()

    LOG("Parsing source into sections...", level=1)
    state.parsedSections = Parser(state.sourceText).parse()
    LOG(f"Parsed {len(state.parsedSections)} sections", level=2)
    return state


def html_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the sections to a standalone HTML page.

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing status, output_file,
              section_count and verse_count

    Exits:
        1 if the theme cannot be loaded
    """

    state = inputstate.copy()

    LOG("Rendering sections to HTML...", level=1)

    if not state.parsedSections:
        LOG("Source has no visible sections; writing an empty page", level=1)

    try:
        theme = Theme(state.theme or appsettings.default_theme)
    except ThemeError as e:
        print(f"Theme error: {e}", file=sys.stderr)
        sys.exit(1)

    config = RenderConfig.config_fromSettings(
        appsettings,
        compact_mode=state.compactMode,
        show_verse_numbers=state.showVerseNumbers,
        highlight_current_verse=appsettings.highlight_current_verse and state.highlightVerse is not None,
        current_verse_index=state.highlightVerse,
        title=state.title,
        poet=state.poet,
        reciter=state.reciter,
    )

    renderer = Renderer(state.parsedSections, config=config, theme=theme)
    state.renderResult = renderer.compile(state.htmlOutputdir, state.outputFile)
    LOG(f"Render complete: {state.renderResult['verse_count']} verses", level=2)

    if state.writeSource:
        source_file = state.htmlOutputdir / state.inputSourceFile.name
        source_file.write_text(state.sourceText, encoding="utf-8")
        LOG(f"Wrote marked text to {source_file}", level=2)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display render results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("\n✓ Render successful!", level=1)
        LOG(f"  Output:   {state.renderResult['output_file']}", level=1)
        LOG(f"  Sections: {state.renderResult['section_count']}", level=1)
        LOG(f"  Verses:   {state.renderResult['verse_count']}", level=1)
        if state.templateApplied:
            LOG(f"  Template: {state.templateApplied}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="versemark - right-to-left recitation renderer",
    category="Visualization",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render a marked text file to HTML.

    Orchestrates the full pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read and sanitize the marked text
        3. template_apply: Restyle with a template (optional)
        4. source_parse: Parse into layout sections
        5. html_render: Render and write the HTML page
        6. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, template_apply, source_parse, html_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
