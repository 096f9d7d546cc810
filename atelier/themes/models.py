"""Theme framework models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

ThemeColorSet = dict[str, str]
ThemeMode = Literal["system", "light", "dark"]
ThemeSource = Literal["default", "preset", "tweakcn", "custom"]


class ThemeValidationError(ValueError):
    """Raised when stored or shipped theme data fails validation."""


@dataclass(frozen=True, slots=True)
class ParsedTheme:
    """Light and dark token maps extracted from CSS or registry JSON."""

    light: ThemeColorSet
    dark: ThemeColorSet


@dataclass(frozen=True, slots=True)
class ThemePreset:
    """A built-in theme shipped with the application."""

    preset_id: str
    name: str
    description: str
    light: ThemeColorSet
    dark: ThemeColorSet


@dataclass(frozen=True, slots=True)
class ImportedTheme:
    """A theme fetched from a registry URL and kept in the local history."""

    id: str
    name: str
    source_url: str
    imported_at: str
    light: ThemeColorSet
    dark: ThemeColorSet
    is_default: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sourceUrl": self.source_url,
            "importedAt": self.imported_at,
            "light": dict(self.light),
            "dark": dict(self.dark),
            "isDefault": self.is_default,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImportedTheme:
        """Build from a stored record; raises ThemeValidationError when malformed."""
        theme_id = data.get("id")
        name = data.get("name")
        if not isinstance(theme_id, str) or not theme_id.strip():
            raise ThemeValidationError("imported theme record is missing an id")
        if not isinstance(name, str) or not name.strip():
            raise ThemeValidationError(f"imported theme {theme_id!r} is missing a name")
        return cls(
            id=theme_id,
            name=name,
            source_url=str(data.get("sourceUrl") or ""),
            imported_at=str(data.get("importedAt") or ""),
            light=_color_set(data.get("light"), theme_id, "light"),
            dark=_color_set(data.get("dark"), theme_id, "dark"),
            is_default=bool(data.get("isDefault", False)),
        )


@dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Runtime appearance state owned by the customization controller."""

    mode: ThemeMode = "system"
    light: ThemeColorSet = field(default_factory=dict)
    dark: ThemeColorSet = field(default_factory=dict)
    source: ThemeSource = "default"
    registry_url: str = ""
    active_preset: str | None = None
    imported_themes: tuple[ImportedTheme, ...] = ()

    def find_imported(self, theme_id: str) -> ImportedTheme | None:
        for theme in self.imported_themes:
            if theme.id == theme_id:
                return theme
        return None

    def default_imported(self) -> ImportedTheme | None:
        """Return the flagged default, else the first imported theme."""
        for theme in self.imported_themes:
            if theme.is_default:
                return theme
        if self.imported_themes:
            return self.imported_themes[0]
        return None


def _color_set(raw: object, theme_id: str, label: str) -> ThemeColorSet:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ThemeValidationError(f"imported theme {theme_id!r}: {label} colors must be a mapping")
    return {
        str(key): value
        for key, value in raw.items()
        if isinstance(key, str) and isinstance(value, str)
    }
