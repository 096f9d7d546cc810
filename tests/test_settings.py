"""Tests for atelier.config.settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from atelier.config.settings import AppearanceSettings, QSettingsStore, SettingsStore
from atelier.themes.models import ImportedTheme


@pytest.fixture
def qsettings(tmp_path: Path) -> QSettings:
    return QSettings(str(tmp_path / "atelier.ini"), QSettings.Format.IniFormat)


class TestQSettingsStore:
    def test_round_trips_json_values(self, qsettings):
        store = QSettingsStore(qsettings)
        assert store.set("custom_theme_light", {"primary": "0 0% 0%"}, "appearance") is True
        assert store.set("theme_mode", "dark", "appearance") is True
        assert store.set("company_name", "Taller", "company") is True

        assert store.get("appearance") == {
            "custom_theme_light": {"primary": "0 0% 0%"},
            "theme_mode": "dark",
        }
        assert store.get("company") == {"company_name": "Taller"}

    def test_unknown_category_is_empty(self, qsettings):
        assert QSettingsStore(qsettings).get("appearance") == {}

    def test_unencodable_value_fails(self, qsettings):
        store = QSettingsStore(qsettings)
        assert store.set("bad", object(), "appearance") is False
        assert store.get("appearance") == {}

    def test_undecodable_value_is_skipped(self, qsettings):
        qsettings.setValue("appearance/theme_mode", "not json")
        qsettings.setValue("appearance/theme_source", '"preset"')
        assert QSettingsStore(qsettings).get("appearance") == {"theme_source": "preset"}


class _DictStore(SettingsStore):
    def __init__(self, data=None, failing=()):
        self.data = {"appearance": dict(data or {})}
        self.failing = set(failing)

    def get(self, category):
        return dict(self.data.get(category, {}))

    def set(self, key, value, category):
        if key in self.failing:
            return False
        self.data.setdefault(category, {})[key] = value
        return True


def _record(theme_id: str, **extra) -> dict:
    record = {
        "id": theme_id,
        "name": theme_id.upper(),
        "sourceUrl": "https://tweakcn.com/r/themes/x",
        "importedAt": "2026-10-01T10:00:00",
        "light": {"background": "0 0% 100%"},
        "dark": {"background": "0 0% 0%"},
        "isDefault": False,
    }
    record.update(extra)
    return record


class TestAppearanceSettings:
    def test_load_defaults_when_empty(self):
        config = AppearanceSettings(_DictStore()).load()
        assert config.mode == "system"
        assert config.source == "default"
        assert config.light == {}
        assert config.active_preset is None
        assert config.imported_themes == ()

    def test_load_reads_every_field(self):
        store = _DictStore(
            {
                "theme_mode": "dark",
                "custom_theme_light": {"primary": "1 1% 1%", "bad": 3},
                "custom_theme_dark": {"primary": "2 2% 2%"},
                "theme_source": "tweakcn",
                "tweakcn_registry_url": "https://tweakcn.com/r/themes/a",
                "active_preset": "a",
                "imported_themes": [_record("a", isDefault=True), _record("b")],
            }
        )
        config = AppearanceSettings(store).load()
        assert config.mode == "dark"
        assert config.light == {"primary": "1 1% 1%"}
        assert config.source == "tweakcn"
        assert config.active_preset == "a"
        assert [theme.id for theme in config.imported_themes] == ["a", "b"]
        assert config.imported_themes[0].is_default is True

    def test_load_is_lenient(self):
        store = _DictStore(
            {
                "theme_mode": "sepia",
                "theme_source": "registry",
                "active_preset": "",
                "imported_themes": [_record("a"), {"name": "no id"}, "junk", _record("a")],
            }
        )
        config = AppearanceSettings(store).load()
        assert config.mode == "system"
        assert config.source == "default"
        assert config.active_preset is None
        assert [theme.id for theme in config.imported_themes] == ["a"]

    def test_save_serializes_imported_themes(self):
        store = _DictStore()
        theme = ImportedTheme.from_dict(_record("a"))
        failed = AppearanceSettings(store).save(imported_themes=(theme,), theme_mode="light")
        assert failed == []
        assert store.data["appearance"]["imported_themes"] == [_record("a")]
        assert store.data["appearance"]["theme_mode"] == "light"

    def test_save_reports_failed_keys(self):
        store = _DictStore(failing={"theme_mode"})
        failed = AppearanceSettings(store).save(theme_mode="light", theme_source="custom")
        assert failed == ["theme_mode"]
        assert store.data["appearance"] == {"theme_source": "custom"}
