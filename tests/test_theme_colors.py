"""Tests for color conversion and theme normalization."""

from __future__ import annotations

import pytest

from atelier.themes.colors import hsl_triplet_to_hex, parse_hsl_triplet, to_hsl_triplet
from atelier.themes.normalizer import needs_normalization, normalize_theme


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("#ffffff", "0 0% 100%"),
        ("#000", "0 0% 0%"),
        ("#ff0000", "0 100% 50%"),
        ("rgb(0, 0, 255)", "240 100% 50%"),
        ("rgba(0 255 0 / 0.5)", "120 100% 50%"),
        ("hsl(220, 80%, 50%)", "220 80% 50%"),
        ("hsl(220deg 80% 50%)", "220 80% 50%"),
        ("220 80% 50%", "220 80% 50%"),
    ],
)
def test_to_hsl_triplet_converts(value: str, expected: str) -> None:
    assert to_hsl_triplet(value) == expected


def test_to_hsl_triplet_keeps_unconvertible_values() -> None:
    assert to_hsl_triplet("oklch(0.62 0.19 259.8)") == "oklch(0.62 0.19 259.8)"
    assert to_hsl_triplet("transparent") == "transparent"
    assert to_hsl_triplet("0.5rem") == "0.5rem"


def test_parse_hsl_triplet() -> None:
    assert parse_hsl_triplet("221 83% 53%") == (221.0, 83.0, 53.0)
    assert parse_hsl_triplet("221 83 53") is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0 0% 100%", "#ffffff"),
        ("0 0% 0%", "#000000"),
        ("0 100% 50%", "#ff0000"),
        ("240 100% 50%", "#0000ff"),
        ("360 100% 50%", "#ff0000"),
    ],
)
def test_hsl_triplet_to_hex(value: str, expected: str) -> None:
    assert hsl_triplet_to_hex(value) == expected


def test_hsl_triplet_to_hex_unreadable() -> None:
    assert hsl_triplet_to_hex("oklch(0.5 0.1 20)") is None


def test_needs_normalization_detects_alternate_encodings() -> None:
    assert needs_normalization({"primary": "oklch(0.62 0.19 259.8)"}, {}) is True
    assert needs_normalization({}, {"primary": "rgb(1, 2, 3)"}) is True
    assert needs_normalization({"primary": "#1a2b3c"}, {}) is True
    assert needs_normalization({"primary": "220 80% 50%"}, {"ring": "0 0% 0%"}) is False


def test_normalize_theme_converts_what_it_can() -> None:
    light = {"background": "#ffffff", "primary": "oklch(0.62 0.19 259.8)"}
    dark = {"background": "rgb(0, 0, 0)", "ring": "0 0% 83%"}
    result = normalize_theme(light, dark)
    assert result is not None
    assert result.light == {"background": "0 0% 100%", "primary": "oklch(0.62 0.19 259.8)"}
    assert result.dark == {"background": "0 0% 0%", "ring": "0 0% 83%"}


def test_normalize_theme_keeps_decimal_triplets() -> None:
    light = {"primary": "#ff0000", "background": "222.2 84% 4.9%"}
    dark = {"primary": "210 40% 98%", "muted": "217.2 32.6% 17.5%"}
    result = normalize_theme(light, dark)
    assert result is not None
    assert result.light == {"primary": "0 100% 50%", "background": "222.2 84% 4.9%"}
    assert result.dark == dark
