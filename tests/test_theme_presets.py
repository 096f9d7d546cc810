"""Tests for the built-in preset catalogue."""

from __future__ import annotations

from pathlib import Path

import pytest

from atelier.themes.constants import COLOR_TOKENS, DEFAULT_PRESET_ID
from atelier.themes.models import ThemeValidationError
from atelier.themes.presets import default_preset, get_preset, load_presets, load_presets_file


def test_builtin_presets_cover_every_token() -> None:
    presets = load_presets()
    assert [preset.preset_id for preset in presets] == [
        "minimalista",
        "professional-blue",
        "elegant-purple",
        "warm-orange",
    ]
    for preset in presets:
        assert set(preset.light) == set(COLOR_TOKENS)
        assert set(preset.dark) == set(COLOR_TOKENS)


def test_load_presets_is_cached() -> None:
    assert load_presets() is load_presets()


def test_default_preset_is_first() -> None:
    assert default_preset().preset_id == DEFAULT_PRESET_ID
    assert default_preset().light["background"] == "0 0% 100%"


def test_get_preset() -> None:
    preset = get_preset("professional-blue")
    assert preset is not None
    assert preset.light["primary"] == "221 83% 53%"
    assert get_preset("missing") is None


def test_load_presets_file_rejects_bad_yaml(tmp_path: Path) -> None:
    path = tmp_path / "presets.yaml"
    path.write_text("presets: [unterminated", encoding="utf-8")
    with pytest.raises(ThemeValidationError):
        load_presets_file(path)


def test_load_presets_file_rejects_duplicates(tmp_path: Path) -> None:
    path = tmp_path / "presets.yaml"
    entry = (
        "  - id: same\n    name: Same\n    description: d\n"
        "    light: {background: '0 0% 100%'}\n    dark: {background: '0 0% 0%'}\n"
    )
    path.write_text("presets:\n" + entry + entry, encoding="utf-8")
    with pytest.raises(ThemeValidationError, match="duplicate preset id"):
        load_presets_file(path)


def test_load_presets_file_rejects_missing_colors(tmp_path: Path) -> None:
    path = tmp_path / "presets.yaml"
    path.write_text(
        "presets:\n  - id: x\n    name: X\n    description: d\n    light: {}\n",
        encoding="utf-8",
    )
    with pytest.raises(ThemeValidationError):
        load_presets_file(path)
