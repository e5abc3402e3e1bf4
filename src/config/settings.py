"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use VERSEMARK_ prefix (e.g., VERSEMARK_COMPACT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use VERSEMARK_ prefix.

    Examples:
        VERSEMARK_DEFAULT_THEME=default
        VERSEMARK_COMPACT_MODE=true
        VERSEMARK_FONT_SIZE=28
    """

    model_config = SettingsConfigDict(
        env_prefix="VERSEMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Theme configuration
    default_theme: str = Field(
        default="default",
        description="Theme used when none is requested",
    )

    themes_dir: Optional[str] = Field(
        default=None,
        description="Directory containing theme folders (defaults to the packaged themes/)",
    )

    # Template configuration
    default_template: Optional[str] = Field(
        default=None,
        description="Template applied by the CLI when --template is not given",
    )

    # Reader configuration
    compact_mode: bool = Field(
        default=False,
        description="Use tighter vertical spacing between sections",
    )

    show_verse_numbers: bool = Field(
        default=True,
        description="Show verse number badges",
    )

    highlight_current_verse: bool = Field(
        default=True,
        description="Highlight the verse supplied by the playback position",
    )

    font_size: int = Field(
        default=24,
        description="Base font size in px",
    )

    line_height: float = Field(
        default=2.2,
        description="CSS line-height multiplier",
    )

    font_family: str = Field(
        default="noto-nastaliq",
        description="Reader font family",
    )

    # Output configuration
    output_filename: str = Field(
        default="index.html",
        description="Filename of the rendered HTML document",
    )

    def themesDir_resolve(self) -> Path:
        """
        Resolve the directory that holds theme folders.

        Returns:
            themes_dir if configured, otherwise the themes/ directory
            shipped inside the package

        Example:
            >>> AppSettings(themes_dir="/srv/themes").themesDir_resolve()
            PosixPath('/srv/themes')
        """
        if self.themes_dir:
            return Path(self.themes_dir)
        return Path(__file__).parent.parent / "themes"


# Singleton instance - import this in your code
appsettings = AppSettings()
