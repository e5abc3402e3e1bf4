"""
Theme loading tests

Tests packaged themes, class lookups with defaults, and error handling for
missing or malformed themes.
"""

import pytest

from versemark.lib.theme import Theme, ThemeError, themes_listAvailable, theme_validate
from versemark.models.markers import Alignment


class TestPackagedThemes:
    """Test the themes shipped with the package"""

    def test_available_themes(self):
        assert themes_listAvailable() == ["default", "paper"]

    def test_default_theme_valid(self):
        valid, message = theme_validate("default")
        assert valid, message

    def test_alignment_classes(self):
        theme = Theme("default")

        assert theme.alignmentClass_get(Alignment.RIGHT) == "align-right"
        assert theme.alignmentClass_get(Alignment.INDENT) == "align-indent"
        assert theme.alignmentClass_get(Alignment.HEADER) == "align-right"

    def test_spacing_variants(self):
        theme = Theme("default")

        assert theme.spacingClass_get("near_break", compact=False) == "space-break"
        assert theme.spacingClass_get("near_break", compact=True) == "space-break-compact"

    def test_partial_theme_falls_back_to_defaults(self):
        """paper only overrides CSS; class tables come from the defaults"""
        theme = Theme("paper")

        assert theme.dividerClass_get("margin", compact=True) == "divider-margin-compact"
        assert theme.label_get("poet") == "شاعر"
        assert "#f6efe1" in theme.css_get()


class TestThemeErrors:
    """Test theme loading failures"""

    def test_missing_theme(self, tmp_path):
        with pytest.raises(ThemeError, match="not found"):
            Theme("nope", tmp_path)

    def test_missing_yaml(self, tmp_path):
        (tmp_path / "bare").mkdir()

        with pytest.raises(ThemeError, match="missing theme.yaml"):
            Theme("bare", tmp_path)

    def test_invalid_yaml(self, tmp_path):
        theme_dir = tmp_path / "broken"
        theme_dir.mkdir()
        (theme_dir / "theme.yaml").write_text("alignment: [unclosed", encoding="utf-8")

        with pytest.raises(ThemeError, match="Failed to parse"):
            Theme("broken", tmp_path)

    def test_yaml_must_be_mapping(self, tmp_path):
        theme_dir = tmp_path / "listy"
        theme_dir.mkdir()
        (theme_dir / "theme.yaml").write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ThemeError, match="mapping"):
            Theme("listy", tmp_path)

    def test_theme_without_css(self, tmp_path):
        theme_dir = tmp_path / "nocss"
        theme_dir.mkdir()
        (theme_dir / "theme.yaml").write_text("name: nocss\n", encoding="utf-8")

        theme = Theme("nocss", tmp_path)
        valid, message = theme_validate("nocss", tmp_path)

        assert theme.css_get() == ""
        assert not valid
        assert "no theme.css" in message

    def test_custom_class_override(self, tmp_path):
        theme_dir = tmp_path / "custom"
        theme_dir.mkdir()
        (theme_dir / "theme.yaml").write_text("alignment:\n  left: flush-left\n", encoding="utf-8")

        theme = Theme("custom", tmp_path)

        assert theme.alignmentClass_get(Alignment.LEFT) == "flush-left"
        assert theme.alignmentClass_get(Alignment.CENTER) == "align-center"
