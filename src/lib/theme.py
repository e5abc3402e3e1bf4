"""
Theme loader and manager for versemark rendering.

Themes decide the class names and CSS the layout renderer emits. Each theme
is a directory containing:
  - theme.yaml: Class tables (alignment, spacing, dividers, line groups)
    and header labels
  - theme.css: Styles for those classes, embedded into rendered documents
"""

from pathlib import Path
from typing import Dict, Any, Optional, Union

import yaml

from ..models.markers import Alignment


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


# Used for any key a theme.yaml leaves out
DEFAULT_CONFIG: Dict[str, Any] = {
    'alignment': {
        'right': 'align-right',
        'center': 'align-center',
        'indent': 'align-indent',
        'left': 'align-left',
        'header': 'align-right',
    },
    'spacing': {
        'header': {'normal': 'space-header', 'compact': 'space-header-compact'},
        'near_break': {'normal': 'space-break', 'compact': 'space-break-compact'},
        'normal': {'normal': 'space-normal', 'compact': 'space-normal-compact'},
    },
    'divider': {
        'rule': 'divider-rule',
        'margin': {'normal': 'divider-margin', 'compact': 'divider-margin-compact'},
        'before': {'normal': 'divider-before', 'compact': 'divider-before-compact'},
    },
    'lines': {
        'couplet': 'lines-couplet',
        'block': 'lines-block',
    },
    'labels': {
        'poet': 'شاعر',
        'reciter': 'منقبت خواں',
    },
}


def themesDir_default() -> Path:
    """Themes directory configured in settings (packaged themes/ by default)"""
    from ..config import appsettings
    return appsettings.themesDir_resolve()


class Theme:
    """
    Represents a versemark theme.

    A theme consists of:
      - Configuration (class tables, labels) from theme.yaml
      - Custom CSS from theme.css
    """

    def __init__(self, theme_name: str, themes_dir: Optional[Union[str, Path]] = None):
        """
        Load a theme by name.

        Args:
            theme_name: Name of the theme directory (e.g., "default", "paper")
            themes_dir: Path to themes directory (default: from settings)

        Raises:
            ThemeError: If theme directory or theme.yaml doesn't exist
        """
        self.name = theme_name
        self.themes_dir = Path(themes_dir) if themes_dir else themesDir_default()
        self.theme_dir = self.themes_dir / theme_name

        if not self.theme_dir.exists():
            raise ThemeError(
                f"Theme '{theme_name}' not found. "
                f"Expected directory: {self.theme_dir}"
            )

        self.config_path = self.theme_dir / "theme.yaml"
        if not self.config_path.exists():
            raise ThemeError(
                f"Theme '{theme_name}' missing theme.yaml"
            )

        self.config = self._config_load()
        self.css_path = self.theme_dir / "theme.css"

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse theme.yaml"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse theme.yaml: {e}")
        except OSError as e:
            raise ThemeError(f"Failed to load theme.yaml: {e}")
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ThemeError(f"Theme '{self.name}' theme.yaml must be a mapping")
        return config

    def css_has(self) -> bool:
        """Check if theme has custom CSS file"""
        return self.css_path.exists()

    def css_get(self) -> str:
        """Theme CSS text, or empty string if the theme has none"""
        if not self.css_has():
            return ''
        return self.css_path.read_text(encoding='utf-8')

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from theme.yaml.

        Supports nested keys with dot notation, falling back to the built-in
        defaults and then to default:
          theme.config_get('spacing.header.compact')

        Args:
            key: Configuration key (supports dot notation)
            default: Value used when neither the theme nor the defaults have key

        Returns:
            Configuration value or default
        """
        for source in (self.config, DEFAULT_CONFIG):
            value: Any = source
            for k in key.split('.'):
                if isinstance(value, dict) and k in value:
                    value = value[k]
                else:
                    value = None
                    break
            if value is not None:
                return value
        return default

    def alignmentClass_get(self, style: Alignment) -> str:
        """Class for a section alignment; unknown styles use the right class"""
        return self.config_get(f'alignment.{style.value}') or self.config_get('alignment.right', '')

    def spacingClass_get(self, role: str, compact: bool) -> str:
        """
        Vertical spacing class for a section role

        Args:
            role: "header", "near_break" or "normal"
            compact: Use the compact variant
        """
        return self.config_get(f"spacing.{role}.{'compact' if compact else 'normal'}", '')

    def dividerClass_get(self, placement: str, compact: bool) -> str:
        """
        Margin class for a divider rule

        Args:
            placement: "margin" for a standalone divider, "before" for the rule
                       framing the section after a break
            compact: Use the compact variant
        """
        return self.config_get(f"divider.{placement}.{'compact' if compact else 'normal'}", '')

    def label_get(self, key: str) -> str:
        return self.config_get(f'labels.{key}', '')

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', path='{self.theme_dir}')"


def themes_listAvailable(themes_dir: Optional[Union[str, Path]] = None) -> list[str]:
    """
    List all available theme names.

    Args:
        themes_dir: Path to themes directory (default: from settings)

    Returns:
        List of theme names (directory names with valid theme.yaml)
    """
    themes_path: Path = Path(themes_dir) if themes_dir else themesDir_default()

    if not themes_path.exists():
        return []

    themes: list[str] = []
    for item in themes_path.iterdir():
        if item.is_dir() and (item / "theme.yaml").exists():
            themes.append(item.name)

    return sorted(themes)


def theme_validate(theme_name: str, themes_dir: Optional[Union[str, Path]] = None) -> tuple[bool, str]:
    """
    Validate a theme's structure and configuration.

    Args:
        theme_name: Name of theme to validate
        themes_dir: Path to themes directory

    Returns:
        Tuple of (is_valid, message)
    """
    try:
        theme: Theme = Theme(theme_name, themes_dir)

        if not theme.css_has():
            return False, f"Warning: Theme '{theme_name}' has no theme.css file"

        if not theme.config:
            return False, f"Theme '{theme_name}' has empty configuration"

        return True, f"Theme '{theme_name}' is valid"

    except ThemeError as e:
        return False, str(e)
