"""Built-in preset catalogue."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Mapping

import yaml

from atelier.runtime_paths import presets_path
from atelier.themes.models import ThemePreset, ThemeValidationError


def load_presets_file(path: Path) -> tuple[ThemePreset, ...]:
    """Load and validate a preset catalogue file."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeValidationError(f"Unable to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ThemeValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, Mapping) or not isinstance(data.get("presets"), list):
        raise ThemeValidationError(f"{path}: expected a top-level 'presets' list")

    presets: list[ThemePreset] = []
    seen: set[str] = set()
    for index, raw in enumerate(data["presets"]):
        preset = _parse_preset(raw, f"{path}: preset #{index}")
        if preset.preset_id in seen:
            raise ThemeValidationError(f"{path}: duplicate preset id {preset.preset_id!r}")
        seen.add(preset.preset_id)
        presets.append(preset)
    if not presets:
        raise ThemeValidationError(f"{path}: at least one preset is required")
    return tuple(presets)


@lru_cache(maxsize=1)
def load_presets() -> tuple[ThemePreset, ...]:
    return load_presets_file(presets_path())


def get_preset(preset_id: str) -> ThemePreset | None:
    for preset in load_presets():
        if preset.preset_id == preset_id:
            return preset
    return None


def default_preset() -> ThemePreset:
    return load_presets()[0]


def _parse_preset(raw: object, context: str) -> ThemePreset:
    if not isinstance(raw, Mapping):
        raise ThemeValidationError(f"{context}: expected a mapping")
    fields: dict[str, str] = {}
    for key in ("id", "name", "description"):
        value = raw.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ThemeValidationError(f"{context}: field {key!r} must be a non-empty string")
        fields[key] = value.strip()
    return ThemePreset(
        preset_id=fields["id"],
        name=fields["name"],
        description=fields["description"],
        light=_parse_colors(raw.get("light"), f"{context} light"),
        dark=_parse_colors(raw.get("dark"), f"{context} dark"),
    )


def _parse_colors(raw: object, context: str) -> dict[str, str]:
    if not isinstance(raw, Mapping):
        raise ThemeValidationError(f"{context}: expected a token mapping")
    colors: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not isinstance(value, str) or not value.strip():
            raise ThemeValidationError(f"{context}: token {key!r} must be a non-empty string")
        colors[key] = value.strip()
    return colors
