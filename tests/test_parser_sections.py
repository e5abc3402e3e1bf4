"""
Section builder tests

Tests the fold from segments to LayoutSections: divider placement, style
carry-forward, header sections and the paragraph fallback.
"""

from versemark.lib.parser import Parser, text_normalize
from versemark.models.markers import Alignment, LayoutSection


def summary(sections):
    """(content, style, is_break, is_header) tuples for compact assertions"""
    return [(s.content, s.style.value, s.is_break, s.is_header) for s in sections]


class TestEmptyAndPlain:
    """Test empty input and marker-free text"""

    def test_empty_source(self):
        assert Parser("").parse() == []

    def test_whitespace_only(self):
        assert Parser("   \n\n  \t  ").parse() == []

    def test_single_paragraph(self):
        """Worst case: the whole input is one right-aligned section"""
        sections = Parser("one line\nanother line").parse()

        assert summary(sections) == [("one line\nanother line", "right", False, False)]

    def test_paragraph_fallback(self):
        sections = Parser("first\nverse\n\n\nsecond verse\n\n  \n\nthird").parse()

        assert [s.content for s in sections] == ["first\nverse", "second verse", "third"]
        assert all(s.style is Alignment.RIGHT for s in sections)
        assert not any(s.is_break or s.is_header for s in sections)

    def test_parse_is_idempotent(self):
        """Parsing a marker-free document twice yields identical sections"""
        source = "a\nb\n\nc\n\n\nd"
        assert Parser(source).parse() == Parser(source).parse()


class TestBreakMarkers:
    """Test break markers and style carry-forward"""

    def test_parse_example(self):
        sections = Parser("alpha\n\n||BREAK:center||\n\nbeta\n\nbeta2").parse()

        assert summary(sections) == [
            ("alpha", "right", False, False),
            ("", "right", True, False),
            ("beta\nbeta2", "center", False, False),
        ]

    def test_style_applies_to_following_section(self):
        """A break's style never applies to the text before it"""
        sections = Parser("before||BREAK:left||after").parse()

        assert sections[0].content == "before"
        assert sections[0].style is Alignment.RIGHT
        assert sections[2].content == "after"
        assert sections[2].style is Alignment.LEFT

    def test_divider_sections_are_empty(self):
        sections = Parser("a||BREAK:indent||b").parse()

        divider = sections[1]
        assert divider.is_break
        assert divider.content == ""
        assert divider.style is Alignment.RIGHT
        assert divider.is_divider

    def test_break_at_start(self):
        """Leading marker still emits a divider"""
        sections = Parser("||BREAK:center||\n\nverse").parse()

        assert summary(sections) == [
            ("", "right", True, False),
            ("verse", "center", False, False),
        ]

    def test_break_at_end(self):
        """Trailing marker still emits a divider"""
        sections = Parser("verse\n\n||BREAK||").parse()

        assert summary(sections) == [
            ("verse", "right", False, False),
            ("", "right", True, False),
        ]

    def test_consecutive_breaks(self):
        """Each marker occupies its own position"""
        sections = Parser("a||BREAK||||BREAK:left||b").parse()

        assert [s.is_break for s in sections] == [False, True, True, False]
        assert sections[3].style is Alignment.LEFT

    def test_only_markers(self):
        assert summary(Parser("||BREAK||").parse()) == [("", "right", True, False)]

    def test_style_persists_until_next_marker(self):
        sections = Parser("a||BREAK:indent||b\n\nc||BREAK||d").parse()

        assert summary(sections) == [
            ("a", "right", False, False),
            ("", "right", True, False),
            ("b\nc", "indent", False, False),
            ("", "right", True, False),
            ("d", "right", False, False),
        ]

    def test_unknown_style_defaults_to_right(self):
        sections = Parser("a||BREAK:diagonal||b").parse()
        assert sections[2].style is Alignment.RIGHT

    def test_blank_lines_inside_section_are_dropped(self):
        """Non-break sections hold only non-blank lines"""
        sections = Parser("||BREAK||\n\n line one \n\n\n  line two\n\n").parse()

        assert sections[1].content == "line one\nline two"


class TestHeaderMarkers:
    """Test ||HEADER|| handling"""

    def test_header_section(self):
        sections = Parser("||HEADER||\nThe Title\n||BREAK||\nverse").parse()

        assert summary(sections) == [
            ("The Title", "header", False, True),
            ("", "right", True, False),
            ("verse", "right", False, False),
        ]

    def test_header_emits_no_divider(self):
        sections = Parser("intro||HEADER||Title").parse()

        assert summary(sections) == [
            ("intro", "right", False, False),
            ("Title", "header", False, True),
        ]

    def test_header_without_following_text(self):
        """A header marker at the end produces nothing"""
        assert Parser("verse||HEADER||").parse() == [LayoutSection("verse", Alignment.RIGHT)]

    def test_header_style_carries_until_break(self):
        sections = Parser("||HEADER||Title||HEADER||Subtitle").parse()

        assert [s.is_header for s in sections] == [True, True]


class TestTextNormalize:
    """Test plain segment normalisation"""

    def test_trims_lines(self):
        assert text_normalize("  a  \n  b ") == "a\nb"

    def test_blank(self):
        assert text_normalize(" \n\n \t") == ""
