"""
End-to-end rendering tests

Tests the full pipeline: marked text -> (template) -> Parser -> Renderer ->
HTML file, both through the library and through the CLI pipeline stages.
"""

import pytest
from pathlib import Path
import tempfile

from versemark.lib.parser import Parser
from versemark.lib.renderer import Renderer
from versemark.lib.templates import TemplateRegistry, TemplateEngine
from versemark.lib.theme import Theme
from versemark.models import ProgramState, RenderConfig, pipeline


POEM = """||HEADER||
The Night Journey

||BREAK||

first line of the opening
second line of the opening

||BREAK:center||

a refrain that is centered
answered by a second line

||BREAK:indent||

one
two
three
"""


class TestLibraryRendering:
    """Test parse + render + compile through the library API"""

    def test_compile_writes_document(self):
        sections = Parser(POEM).parse()

        with tempfile.TemporaryDirectory() as tmpdir:
            renderer = Renderer(sections, RenderConfig(show_verse_numbers=True), Theme("default"))
            result = renderer.compile(tmpdir)

            assert result['status'] is True
            assert result['verse_count'] == 3
            assert result['section_count'] == len(sections)

            output_file = Path(tmpdir) / "index.html"
            assert output_file.exists()

            html = output_file.read_text(encoding="utf-8")
            assert 'The Night Journey' in html
            assert 'a refrain that is centered' in html
            assert 'align-center' in html
            assert 'align-indent' in html
            assert html.count('<div class="lines-couplet">') == 2

    def test_template_then_render(self):
        """Flat text gets structure from a template, then renders"""
        flat = "stanza one a\nstanza one b\n\nstanza two a\nstanza two b\n\nstanza three"
        pattern = TemplateRegistry().get("alternating")

        marked = TemplateEngine(pattern).template_apply(flat)
        sections = Parser(marked).parse()
        blocks = Renderer(sections, RenderConfig(), Theme("default")).blocks_plan()

        verses = [b for b in blocks if not b.is_divider]
        assert [b.style.value for b in verses] == ["right", "right", "left"]
        assert [b.verse_index for b in verses] == [0, 1, 2]
        assert [b.divider_before for b in verses] == [False, True, True]


class TestCliPipeline:
    """Test the CLI pipeline stages"""

    @pytest.fixture
    def dirs(self, tmp_path):
        inputdir = tmp_path / "in"
        outputdir = tmp_path / "out"
        inputdir.mkdir()
        (inputdir / "poem.txt").write_text(POEM, encoding="utf-8")
        (inputdir / "flat.txt").write_text("one\n\ntwo\n\nthree", encoding="utf-8")
        (inputdir / "single.txt").write_text("just one stanza", encoding="utf-8")
        (inputdir / "empty.txt").write_text("\n\n", encoding="utf-8")
        return inputdir, outputdir

    def stages(self):
        from versemark.__main__ import (
            env_check, source_read, template_apply, source_parse, html_render, results_report,
        )
        return env_check, source_read, template_apply, source_parse, html_render, results_report

    def state_make(self, dirs, *args):
        from versemark.__main__ import parser

        inputdir, outputdir = dirs
        options = parser.parse_args(list(args))
        return ProgramState.state_createFromNamespace(options, inputdir, outputdir)

    def test_render_poem(self, dirs):
        state = self.state_make(dirs, "--inputFile", "poem.txt", "--title", "Journey", "-v")

        final = pipeline(state, *self.stages())

        assert final.envOK
        assert final.renderResult['verse_count'] == 3
        html = Path(final.renderResult['output_file']).read_text(encoding="utf-8")
        # document opens with its own header, so the title grid is skipped
        assert '<div class="piece-header">' not in html

    def test_template_and_write_source(self, dirs):
        state = self.state_make(
            dirs, "--inputFile", "flat.txt", "--template", "centered",
            "--writeSource", "--outputFile", "flat.html", "--highlightVerse", "1",
        )

        final = pipeline(state, *self.stages())

        assert final.templateApplied == "centered"
        written = (dirs[1] / "flat.txt").read_text(encoding="utf-8")
        assert written == "one\n\n||BREAK:center||\n\ntwo\n\n||BREAK:center||\n\nthree"
        html = (dirs[1] / "flat.html").read_text(encoding="utf-8")
        # verse 1 ("two") sits before a break, shows a badge and is highlighted
        assert 'class="section space-break numbered current" id="verse-1"' in html

    def test_empty_source_renders_empty_page(self, dirs):
        """A file with no visible text still produces a page"""
        state = self.state_make(dirs, "--inputFile", "empty.txt")

        final = pipeline(state, *self.stages())

        assert final.parsedSections == []
        assert final.renderResult['verse_count'] == 0
        html = Path(final.renderResult['output_file']).read_text(encoding="utf-8")
        assert '<div class="recitation" dir="rtl"' in html

    def test_highlight_disabled_by_settings(self, dirs, monkeypatch):
        """--highlightVerse has no effect when settings turn highlighting off"""
        from versemark.config import appsettings

        monkeypatch.setattr(appsettings, "highlight_current_verse", False)
        state = self.state_make(dirs, "--inputFile", "flat.txt", "--highlightVerse", "0")

        final = pipeline(state, *self.stages())

        html = Path(final.renderResult['output_file']).read_text(encoding="utf-8")
        assert 'current" id="verse-0"' not in html
        assert 'id="verse-0"' in html

    def test_template_failure_exits(self, dirs):
        state = self.state_make(dirs, "--inputFile", "single.txt", "--template", "alternating")

        with pytest.raises(SystemExit):
            pipeline(state, *self.stages())

    def test_unknown_template_exits(self, dirs):
        state = self.state_make(dirs, "--inputFile", "poem.txt", "--template", "nonexistent")

        with pytest.raises(SystemExit):
            pipeline(state, *self.stages())

    def test_missing_input_exits(self, dirs):
        state = self.state_make(dirs, "--inputFile", "missing.txt")

        with pytest.raises(SystemExit):
            pipeline(state, *self.stages())

    def test_unknown_theme_exits(self, dirs):
        state = self.state_make(dirs, "--inputFile", "poem.txt", "--theme", "nonexistent")

        with pytest.raises(SystemExit):
            pipeline(state, *self.stages())
