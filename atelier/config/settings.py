"""Appearance settings persisted via QSettings."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from PySide6.QtCore import QSettings

from atelier.errors import AtelierError, ErrorCode
from atelier.themes.constants import SETTINGS_CATEGORY, THEME_MODES, THEME_SOURCES
from atelier.themes.models import ImportedTheme, ThemeConfig, ThemeValidationError

logger = logging.getLogger(__name__)


class SettingsStore:
    """Key/value settings scoped by category."""

    def get(self, category: str) -> dict[str, Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, category: str) -> bool:
        raise NotImplementedError


class QSettingsStore(SettingsStore):
    """Stores JSON-encoded values under ``<category>/<key>`` in QSettings."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("Atelier", "Atelier")

    def get(self, category: str) -> dict[str, Any]:
        self._qs.sync()
        if self._qs.status() == QSettings.Status.FormatError:
            raise AtelierError(ErrorCode.SETTINGS_READ_FAILED, details={"category": category})
        values: dict[str, Any] = {}
        self._qs.beginGroup(category)
        try:
            for key in self._qs.childKeys():
                raw = self._qs.value(key, "", type=str)
                try:
                    values[key] = json.loads(raw)
                except ValueError:
                    logger.warning("skipping undecodable setting %s/%s", category, key)
        finally:
            self._qs.endGroup()
        return values

    def set(self, key: str, value: Any, category: str) -> bool:
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as exc:
            logger.warning("cannot encode setting %s/%s: %s", category, key, exc)
            return False
        self._qs.setValue(f"{category}/{key}", encoded)
        self._qs.sync()
        status = self._qs.status()
        if status != QSettings.Status.NoError:
            logger.warning("failed to write setting %s/%s: %s", category, key, status)
            return False
        return True


class AppearanceSettings:
    """Typed repository over the ``appearance`` settings category."""

    THEME_MODE = "theme_mode"
    LIGHT_COLORS = "custom_theme_light"
    DARK_COLORS = "custom_theme_dark"
    THEME_SOURCE = "theme_source"
    REGISTRY_URL = "tweakcn_registry_url"
    ACTIVE_PRESET = "active_preset"
    IMPORTED_THEMES = "imported_themes"

    def __init__(self, store: SettingsStore, category: str = SETTINGS_CATEGORY) -> None:
        self._store = store
        self._category = category

    @property
    def store(self) -> SettingsStore:
        return self._store

    def load(self) -> ThemeConfig:
        """Read the stored appearance state; invalid entries fall back to defaults."""
        data = self._store.get(self._category)

        mode = data.get(self.THEME_MODE)
        if mode not in THEME_MODES:
            mode = "system"
        source = data.get(self.THEME_SOURCE)
        if source not in THEME_SOURCES:
            source = "default"
        registry_url = data.get(self.REGISTRY_URL)
        active_preset = data.get(self.ACTIVE_PRESET)

        return ThemeConfig(
            mode=mode,
            light=_string_map(data.get(self.LIGHT_COLORS)),
            dark=_string_map(data.get(self.DARK_COLORS)),
            source=source,
            registry_url=registry_url if isinstance(registry_url, str) else "",
            active_preset=active_preset if isinstance(active_preset, str) and active_preset else None,
            imported_themes=self._load_imported(data.get(self.IMPORTED_THEMES)),
        )

    def save(self, **fields: Any) -> list[str]:
        """Write each field; return the keys whose write failed."""
        failed: list[str] = []
        for key, value in fields.items():
            if key == self.IMPORTED_THEMES:
                value = [theme.to_dict() for theme in value]
            if not self._store.set(key, value, self._category):
                failed.append(key)
        return failed

    def _load_imported(self, raw: object) -> tuple[ImportedTheme, ...]:
        if not isinstance(raw, list):
            return ()
        themes: list[ImportedTheme] = []
        seen: set[str] = set()
        for item in raw:
            if not isinstance(item, Mapping):
                continue
            try:
                theme = ImportedTheme.from_dict(item)
            except ThemeValidationError as exc:
                logger.warning("dropping stored imported theme: %s", exc)
                continue
            if theme.id in seen:
                continue
            seen.add(theme.id)
            themes.append(theme)
        return tuple(themes)


def _string_map(raw: object) -> dict[str, str]:
    if not isinstance(raw, Mapping):
        return {}
    return {
        key: value
        for key, value in raw.items()
        if isinstance(key, str) and isinstance(value, str)
    }
