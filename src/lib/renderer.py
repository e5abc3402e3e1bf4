"""
Layout renderer for parsed versemark sections

Transforms LayoutSection lists into right-to-left HTML.

Rendering runs in two steps:
1. Planning: blocks_plan() applies the layout policy (verse indexing,
   spacing, divider framing, couplet detection, badges, highlight) and
   returns plain RenderBlock data
2. Emitting: html_render() turns the plan into HTML using the theme's
   class tables

The renderer never raises on malformed sections: a break section that
carries stray content is drawn as a plain divider, sections with no
visible lines are skipped, and an unrecognised style falls back to right.
"""

import html
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..models.markers import Alignment, LayoutSection
from ..models.render import RenderBlock, RenderConfig
from .log import LOG
from .theme import Theme


VerseRefCallback = Callable[[int, str], None]


def style_resolve(style: Any) -> Alignment:
    """
    Coerce a section style to an Alignment

    Sections built by hand may carry None or a plain value string instead
    of an Alignment. Anything unrecognised resolves to RIGHT.

    Example:
        >>> style_resolve("center")
        <Alignment.CENTER: 'center'>
        >>> style_resolve(None)
        <Alignment.RIGHT: 'right'>
    """
    if isinstance(style, Alignment):
        return style
    try:
        return Alignment(style)
    except (ValueError, TypeError):
        return Alignment.RIGHT


def verseElement_id(verse_index: int) -> str:
    """Element id of a verse block, shared with scroll-sync collaborators"""
    return f"verse-{verse_index}"


class Renderer:
    """
    Renders LayoutSections to HTML

    Responsibilities:
    - Plan the layout (pure, see blocks_plan)
    - Emit the HTML fragment and standalone document
    - Report verse element ids for playback scroll sync
    - Write the rendered document to disk
    """

    def __init__(
        self,
        sections: List[LayoutSection],
        config: Optional[RenderConfig] = None,
        theme: Optional[Theme] = None,
    ) -> None:
        """
        Initialize renderer

        Args:
            sections: Parsed sections, in document order
            config: Display configuration (defaults to RenderConfig())
            theme: Loaded theme (defaults to the configured default theme)
        """
        from ..config import appsettings

        self.sections = sections
        self.config = config or RenderConfig()
        self.theme = theme or Theme(appsettings.default_theme)
        self.verse_count = 0

    def blocks_plan(self) -> List[RenderBlock]:
        """
        Apply the layout policy to the section list

        Verse indices count only non-break, non-header sections, in document
        order, so they stay stable across re-renders of the same sections and
        do not depend on compact mode.

        Returns:
            RenderBlock list; one per divider and per visible section
        """
        compact = self.config.compact_mode
        blocks: List[RenderBlock] = []
        verse_index = 0

        for index, section in enumerate(self.sections):
            if section.is_break:
                if section.content:
                    LOG(f"Break section {index} carries content; drawing it as a divider", level=2)
                blocks.append(RenderBlock(
                    kind="divider",
                    section_index=index,
                    margin_class=self.theme.dividerClass_get("margin", compact),
                ))
                continue

            lines = section.lines_get()
            if not lines:
                LOG(f"Skipping section {index} with no visible lines", level=3)
                continue

            previous = self.sections[index - 1] if index > 0 else None
            following = self.sections[index + 1] if index + 1 < len(self.sections) else None
            prev_break = previous is not None and previous.is_break
            next_break = following is not None and following.is_break

            if section.is_header:
                spacing_role = "header"
            elif next_break:
                spacing_role = "near_break"
            else:
                spacing_role = "normal"

            block = RenderBlock(
                kind="section",
                section_index=index,
                lines=lines,
                style=style_resolve(section.style),
                spacing_class=self.theme.spacingClass_get(spacing_role, compact),
                is_couplet=len(lines) == 2,
                is_header=section.is_header,
                divider_before=prev_break and not section.is_header,
            )
            if block.divider_before:
                block.margin_class = self.theme.dividerClass_get("before", compact)

            if not section.is_header:
                block.verse_index = verse_index
                block.show_badge = self.config.show_verse_numbers
                block.highlighted = (
                    self.config.highlight_current_verse
                    and self.config.current_verse_index == verse_index
                )
                verse_index += 1

            blocks.append(block)

        self.verse_count = verse_index
        return blocks

    def pieceHeader_render(self) -> str:
        """
        Title / poet / reciter grid shown above the text

        Only rendered when one of them is set and the document does not
        open with its own header section.
        """
        config = self.config
        if not (config.title or config.poet or config.reciter):
            return ''
        if not self.sections or self.sections[0].is_header:
            return ''

        poet_html = ''
        if config.poet:
            poet_html = f'<div class="credit">{html.escape(self.theme.label_get("poet"))} : {html.escape(config.poet)}</div>'
        title_html = ''
        if config.title:
            title_html = f'<h2 class="title">{html.escape(config.title)}</h2>'
        reciter_html = ''
        if config.reciter:
            reciter_html = (
                f'<div class="row"><div class="credit">'
                f'{html.escape(self.theme.label_get("reciter"))}: {html.escape(config.reciter)}'
                f'</div></div>'
            )

        return (
            '<div class="piece-header">'
            f'<div class="row"><div>{poet_html}</div><div>{title_html}</div></div>'
            f'{reciter_html}'
            '</div>'
        )

    def divider_render(self, margin_class: str) -> str:
        rule = self.theme.config_get('divider.rule', '')
        return f'<div class="{margin_class}"><div class="{rule}"></div></div>'

    def block_render(self, block: RenderBlock, on_verse_ref: Optional[VerseRefCallback] = None) -> str:
        """
        Emit HTML for one planned block

        Args:
            block: Planned block
            on_verse_ref: Called with (verse_index, element_id) for verse blocks

        Returns:
            HTML string
        """
        if block.is_divider:
            return self.divider_render(block.margin_class)

        parts: List[str] = []
        if block.divider_before:
            rule = self.theme.config_get('divider.rule', '')
            parts.append(f'<div class="{block.margin_class} {rule}"></div>')

        classes = ['section', block.spacing_class]
        if block.is_header:
            classes.append('header')
        if block.show_badge:
            classes.append('numbered')
        if block.highlighted:
            classes.append('current')

        attrs = f'class="{" ".join(c for c in classes if c)}"'
        if block.verse_index is not None:
            element_id = verseElement_id(block.verse_index)
            attrs += f' id="{element_id}" data-verse="{block.verse_index}"'
            if on_verse_ref:
                on_verse_ref(block.verse_index, element_id)

        group_class = self.theme.config_get('lines.couplet' if block.is_couplet else 'lines.block', '')
        lines_html = ''.join(f'<p>{html.escape(line)}</p>' for line in block.lines)
        text_html = (
            f'<div class="section-text {self.theme.alignmentClass_get(block.style)}">'
            f'<div class="{group_class}">{lines_html}</div>'
            f'</div>'
        )

        badge_html = ''
        if block.show_badge and block.verse_index is not None:
            badge_html = f'<div class="verse-badge"><span class="verse-number">{block.verse_index + 1}</span></div>'

        parts.append(f'<div {attrs}>{text_html}{badge_html}</div>')
        return ''.join(parts)

    def html_render(self, on_verse_ref: Optional[VerseRefCallback] = None) -> str:
        """
        Render the sections to an HTML fragment

        Args:
            on_verse_ref: Optional callback registering verse element ids
                          for an external scroll-sync collaborator

        Returns:
            HTML fragment wrapped in a dir="rtl" container
        """
        blocks = self.blocks_plan()
        LOG(f"Planned {len(blocks)} blocks ({self.verse_count} verses)", level=2)

        style = f"font-size: {self.config.font_size}px; line-height: {self.config.line_height};"
        if self.config.font_family:
            style += f" font-family: {html.escape(self.config.font_family, quote=True)};"

        body = '\n'.join(self.block_render(block, on_verse_ref) for block in blocks)
        return (
            f'<div class="recitation" dir="rtl" style="{style}">\n'
            f'{self.pieceHeader_render()}\n'
            f'{body}\n'
            f'</div>'
        )

    def document_build(self, content: str) -> str:
        """
        Build a standalone HTML document around a rendered fragment

        Args:
            content: Fragment from html_render()

        Returns:
            Complete HTML document with the theme CSS embedded
        """
        title = html.escape(self.config.title or 'Recitation')
        return f"""<!DOCTYPE html>
<html dir="rtl">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{title}</title>
    <style>
{self.theme.css_get()}
    </style>
</head>
<body>
{content}
</body>
</html>"""

    def compile(self, output_dir: Union[str, Path], filename: Optional[str] = None) -> Dict[str, Any]:
        """
        Render and write the standalone document

        Args:
            output_dir: Directory for the rendered file (created if missing)
            filename: Output filename (defaults to settings.output_filename)

        Returns:
            dict with status, output_file, section_count, verse_count
        """
        from ..config import appsettings

        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        document = self.document_build(self.html_render())
        output_file = output_path / (filename or appsettings.output_filename)
        output_file.write_text(document, encoding='utf-8')
        LOG(f"Wrote {output_file}", level=2)

        return {
            'status': True,
            'output_file': str(output_file),
            'section_count': len(self.sections),
            'verse_count': self.verse_count,
        }
