"""Theme customization framework exports."""

from atelier.themes.applier import ThemeApplier, build_theme_css
from atelier.themes.constants import COLOR_TOKENS, DEFAULT_PRESET_ID, MAX_IMPORTED_THEMES
from atelier.themes.models import (
    ImportedTheme,
    ParsedTheme,
    ThemeConfig,
    ThemePreset,
    ThemeValidationError,
)
from atelier.themes.parser import parse_theme_css, serialize_theme_css

__all__ = [
    "COLOR_TOKENS",
    "DEFAULT_PRESET_ID",
    "MAX_IMPORTED_THEMES",
    "ImportedTheme",
    "ParsedTheme",
    "ThemeApplier",
    "ThemeConfig",
    "ThemePreset",
    "ThemeValidationError",
    "build_theme_css",
    "parse_theme_css",
    "serialize_theme_css",
]
