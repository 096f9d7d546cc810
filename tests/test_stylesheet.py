"""Tests for the Qt stylesheet compiled from theme tokens."""

from __future__ import annotations

from atelier.ui.theme import APP_STYLESHEET, DEFAULT_TOKENS, build_stylesheet, resolve_token_colors
from atelier.ui.widgets.color_editor import EDITABLE_TOKENS, format_label


def test_resolve_token_colors_uses_overrides_and_defaults() -> None:
    colors = resolve_token_colors({"primary": "0 100% 50%", "ring": "oklch(0.5 0.1 20)"})
    assert colors["primary"] == "#ff0000"
    # unreadable values fall back to the default for that token
    assert colors["ring"] == "#000000"
    assert colors["background"] == "#ffffff"
    assert set(colors) == set(DEFAULT_TOKENS)


def test_build_stylesheet_resolves_every_reference() -> None:
    stylesheet = build_stylesheet({"background": "240 100% 50%"})
    assert "var(--" not in stylesheet
    assert "background-color: #0000ff;" in stylesheet
    assert "var(--" in APP_STYLESHEET


def test_build_stylesheet_appends_extra() -> None:
    stylesheet = build_stylesheet(extra_stylesheet="  QLabel { font-size: 12pt; }  ")
    assert stylesheet.endswith("QLabel { font-size: 12pt; }\n")


def test_format_label() -> None:
    assert format_label("card-foreground") == "Card Foreground"
    assert format_label("ring") == "Ring"


def test_editable_tokens_skip_card_and_popover() -> None:
    assert "card" not in EDITABLE_TOKENS
    assert "popover-foreground" not in EDITABLE_TOKENS
    assert "primary-foreground" in EDITABLE_TOKENS
    assert len(EDITABLE_TOKENS) == 15
