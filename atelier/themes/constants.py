"""Theme framework constants."""

from __future__ import annotations

DEFAULT_PRESET_ID = "minimalista"
MAX_IMPORTED_THEMES = 4
SETTINGS_CATEGORY = "appearance"

ROOT_SELECTOR = ":root"
DARK_SELECTOR = ".dark"

COLOR_TOKENS: tuple[str, ...] = (
    "background",
    "foreground",
    "card",
    "card-foreground",
    "popover",
    "popover-foreground",
    "primary",
    "primary-foreground",
    "secondary",
    "secondary-foreground",
    "muted",
    "muted-foreground",
    "accent",
    "accent-foreground",
    "destructive",
    "destructive-foreground",
    "border",
    "input",
    "ring",
)

# Recognized by registries but never required.
EXTENDED_TOKENS: tuple[str, ...] = (
    "chart-1",
    "chart-2",
    "chart-3",
    "chart-4",
    "chart-5",
    "sidebar-background",
    "sidebar-foreground",
    "sidebar-primary",
    "sidebar-primary-foreground",
    "sidebar-accent",
    "sidebar-accent-foreground",
    "sidebar-border",
    "sidebar-ring",
)

THEME_MODES: tuple[str, ...] = ("system", "light", "dark")
THEME_SOURCES: tuple[str, ...] = ("default", "preset", "tweakcn", "custom")

MAX_THEME_NAME_LEN = 120
