"""Application-wide Qt stylesheet compiled from theme tokens."""

from __future__ import annotations

import re
from typing import Mapping

from atelier.themes.colors import hsl_triplet_to_hex

# Fallbacks for tokens missing from a partially populated set.
DEFAULT_TOKENS = {
    "background": "0 0% 100%",
    "foreground": "0 0% 0%",
    "card": "0 0% 100%",
    "card-foreground": "0 0% 0%",
    "popover": "0 0% 100%",
    "popover-foreground": "0 0% 0%",
    "primary": "0 0% 0%",
    "primary-foreground": "0 0% 100%",
    "secondary": "0 0% 96%",
    "secondary-foreground": "0 0% 0%",
    "muted": "0 0% 96%",
    "muted-foreground": "0 0% 45%",
    "accent": "0 0% 96%",
    "accent-foreground": "0 0% 0%",
    "destructive": "0 84% 60%",
    "destructive-foreground": "0 0% 98%",
    "border": "0 0% 90%",
    "input": "0 0% 90%",
    "ring": "0 0% 0%",
}

_VAR_REF_RE = re.compile(r"var\(--([a-z0-9-]+)\)")

BASE_STYLES = """
QWidget {
    background-color: var(--background);
    color: var(--foreground);
    font-size: 10pt;
}

QDialog, QMainWindow {
    background-color: var(--background);
}

QLabel {
    color: var(--foreground);
    background-color: transparent;
}

#StatusDetail {
    color: var(--muted-foreground);
    font-size: 9pt;
}

#StatusError {
    color: var(--destructive);
    font-size: 9pt;
}
"""

FORM_STYLES = """
QLineEdit, QComboBox {
    background-color: var(--background);
    border: 1px solid var(--input);
    border-radius: 6px;
    padding: 5px 8px;
    selection-background-color: var(--accent);
    color: var(--foreground);
}

QLineEdit:focus, QComboBox:focus {
    border: 1px solid var(--ring);
}

QComboBox QAbstractItemView {
    background-color: var(--popover);
    color: var(--popover-foreground);
    border: 1px solid var(--border);
    selection-background-color: var(--accent);
    selection-color: var(--accent-foreground);
}
"""

BUTTON_STYLES = """
QPushButton {
    background-color: var(--secondary);
    color: var(--secondary-foreground);
    border: 1px solid var(--border);
    border-radius: 6px;
    padding: 5px 11px;
    min-height: 18px;
    font-weight: 600;
}

QPushButton:hover {
    background-color: var(--accent);
    color: var(--accent-foreground);
}

QPushButton:focus {
    border: 1px solid var(--ring);
}

QPushButton:disabled {
    background-color: var(--muted);
    color: var(--muted-foreground);
}

QPushButton[role="primary"] {
    background-color: var(--primary);
    color: var(--primary-foreground);
    border: 1px solid var(--primary);
}

QPushButton[role="destructive"] {
    background-color: var(--destructive);
    color: var(--destructive-foreground);
    border: 1px solid var(--destructive);
}
"""

STRUCTURE_STYLES = """
QGroupBox {
    background-color: var(--card);
    color: var(--card-foreground);
    border: 1px solid var(--border);
    border-radius: 8px;
    margin-top: 14px;
    padding: 10px;
}

QGroupBox::title {
    subcontrol-origin: margin;
    left: 10px;
    padding: 0 4px;
}

QTabWidget::pane {
    border: 1px solid var(--border);
    border-radius: 6px;
}

QTabBar::tab {
    background-color: var(--muted);
    color: var(--muted-foreground);
    padding: 6px 14px;
}

QTabBar::tab:selected {
    background-color: var(--background);
    color: var(--foreground);
}

QListWidget {
    background-color: var(--card);
    color: var(--card-foreground);
    border: 1px solid var(--border);
    border-radius: 6px;
}

QListWidget::item:selected {
    background-color: var(--accent);
    color: var(--accent-foreground);
}

QToolTip {
    background-color: var(--popover);
    color: var(--popover-foreground);
    border: 1px solid var(--border);
}
"""

APP_STYLESHEET = "\n".join(
    [
        BASE_STYLES,
        FORM_STYLES,
        BUTTON_STYLES,
        STRUCTURE_STYLES,
    ]
)


def resolve_token_colors(tokens: Mapping[str, str] | None = None) -> dict[str, str]:
    """Resolve tokens to ``#rrggbb``, falling back to defaults per token."""
    resolved: dict[str, str] = {}
    for key, default_value in DEFAULT_TOKENS.items():
        value = (tokens or {}).get(key)
        color = hsl_triplet_to_hex(value) if isinstance(value, str) and value else None
        resolved[key] = color or hsl_triplet_to_hex(default_value) or "#000000"
    return resolved


def build_stylesheet(tokens: Mapping[str, str] | None = None, *, extra_stylesheet: str = "") -> str:
    """Build the application stylesheet with token overrides."""
    colors = resolve_token_colors(tokens)
    stylesheet = _VAR_REF_RE.sub(lambda match: colors.get(match.group(1), "#000000"), APP_STYLESHEET)

    extra = extra_stylesheet.strip()
    if extra:
        stylesheet = f"{stylesheet}\n\n{extra}\n"
    return stylesheet
