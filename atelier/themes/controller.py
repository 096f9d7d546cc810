"""Theme customization: import, apply, history and persistence."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
import logging
from typing import Any, Callable, Mapping
import uuid

from PySide6.QtCore import QObject, Signal

from atelier.config.settings import AppearanceSettings
from atelier.core.registry_client import fetch_theme_css, validate_registry_url
from atelier.errors import AtelierError, ErrorCode, format_error_for_user
from atelier.themes.applier import ThemeApplier
from atelier.themes.constants import MAX_IMPORTED_THEMES, MAX_THEME_NAME_LEN, THEME_MODES
from atelier.themes.models import ImportedTheme, ThemeConfig
from atelier.themes.normalizer import needs_normalization, normalize_theme
from atelier.themes.parser import parse_theme_css
from atelier.themes.presets import default_preset, get_preset

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]
Clock = Callable[[], datetime]


def enforce_single_default(themes: tuple[ImportedTheme, ...]) -> tuple[ImportedTheme, ...]:
    """Keep exactly one ``is_default`` entry (the first flagged, else the first)."""
    if not themes:
        return themes
    default_index = next((i for i, theme in enumerate(themes) if theme.is_default), 0)
    return tuple(
        replace(theme, is_default=index == default_index)
        for index, theme in enumerate(themes)
    )


class ThemeCustomizationController(QObject):
    """Owns the appearance config for the settings page.

    Every operation builds a new ThemeConfig and assigns it once after its
    I/O has completed. Callers serialize overlapping imports; a later
    completion overwrites an earlier one both here and in the store.
    """

    config_changed = Signal(object)
    notification = Signal(str, str, bool)  # title, message, is_error

    def __init__(
        self,
        settings: AppearanceSettings,
        applier: ThemeApplier,
        *,
        fetch: Fetcher = fetch_theme_css,
        clock: Clock = datetime.now,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._applier = applier
        self._fetch = fetch
        self._clock = clock
        self._config = ThemeConfig()

    @property
    def config(self) -> ThemeConfig:
        return self._config

    # -- lifecycle --

    def load(self) -> ThemeConfig:
        """Rehydrate from the store and apply the saved colors."""
        try:
            config = self._settings.load()
        except AtelierError as exc:
            logger.warning("appearance settings unavailable: %s", exc)
            self._notify_error("Error", exc)
            self._set_config(ThemeConfig())
            return self._config

        config = self._normalize_loaded(config)
        themes = enforce_single_default(config.imported_themes)
        if themes != config.imported_themes:
            logger.info("repaired default flag on imported themes")
            config = replace(config, imported_themes=themes)
            self._persist(imported_themes=themes)
        self._set_config(config)
        self._applier.set_color_scheme(config.mode)
        if config.light and config.dark:
            self._applier.apply(config.light, config.dark)
        return self._config

    # -- import --

    def import_from_tweakcn(self, url: str) -> bool:
        """Fetch, parse and commit a theme from a registry URL."""
        try:
            cleaned = validate_registry_url(url)
            text = self._fetch(cleaned)
        except AtelierError as exc:
            logger.info("theme import from %r failed: %s", url, exc.code.name)
            self._notify_error("Import failed", exc)
            return False
        return self.complete_import(cleaned, text)

    def validate_registry_url(self, url: str) -> str | None:
        """Return the cleaned URL, or notify and return None."""
        try:
            return validate_registry_url(url)
        except AtelierError as exc:
            self._notify_error("Import failed", exc)
            return None

    def complete_import(self, url: str, css_text: str) -> bool:
        """Parse fetched text and commit the new theme; nothing changes on failure."""
        parsed = parse_theme_css(css_text)
        if parsed is None:
            logger.info("theme import from %r failed: unparseable body", url)
            self._notify_error("Import failed", AtelierError(ErrorCode.THEME_INVALID_FORMAT, url=url))
            return False

        now = self._clock()
        theme = ImportedTheme(
            id=f"tweakcn-{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:6]}",
            name=f"TweakCN {now:%Y-%m-%d %H:%M:%S}",
            source_url=url,
            imported_at=now.isoformat(timespec="seconds"),
            light=dict(parsed.light),
            dark=dict(parsed.dark),
            is_default=False,
        )
        themes = enforce_single_default(
            (theme, *self._config.imported_themes)[:MAX_IMPORTED_THEMES]
        )
        config = replace(
            self._config,
            light=dict(theme.light),
            dark=dict(theme.dark),
            source="tweakcn",
            registry_url=url,
            active_preset=theme.id,
            imported_themes=themes,
        )
        self._commit(
            config,
            custom_theme_light=config.light,
            custom_theme_dark=config.dark,
            theme_source=config.source,
            tweakcn_registry_url=url,
            active_preset=theme.id,
            imported_themes=themes,
        )
        logger.info("imported theme %s from %s (%d kept)", theme.id, url, len(themes))
        self._notify("Theme imported", f"{theme.name} has been applied.")
        return True

    def import_failed(self, url: str, message: str) -> None:
        """Report a fetch failure raised off the UI thread."""
        logger.info("theme import from %r failed: %s", url, message)
        self.notification.emit("Import failed", message, True)

    # -- apply --

    def apply_imported_theme(self, theme_id: str) -> bool:
        theme = self._config.find_imported(theme_id)
        if theme is None:
            self._notify_error("Error", AtelierError(ErrorCode.THEME_NOT_FOUND, details={"id": theme_id}))
            return False
        self._activate_imported(self._config, theme)
        self._notify("Theme applied", f"{theme.name} has been applied.")
        return True

    def apply_preset(self, preset_id: str) -> bool:
        preset = get_preset(preset_id)
        if preset is None:
            self._notify_error("Error", AtelierError(ErrorCode.PRESET_NOT_FOUND, details={"id": preset_id}))
            return False
        config = replace(
            self._config,
            light=dict(preset.light),
            dark=dict(preset.dark),
            source="preset",
            active_preset=preset.preset_id,
        )
        self._commit(
            config,
            custom_theme_light=config.light,
            custom_theme_dark=config.dark,
            theme_source="preset",
            active_preset=preset.preset_id,
        )
        self._notify("Theme applied", f"{preset.name} has been applied.")
        return True

    def apply_custom_colors(self, light: Mapping[str, str], dark: Mapping[str, str]) -> bool:
        """Merge edits onto the active color sets and detach from any theme."""
        merged_light = {**self._config.light, **light}
        merged_dark = {**self._config.dark, **dark}
        config = replace(
            self._config,
            light=merged_light,
            dark=merged_dark,
            source="custom",
            active_preset=None,
        )
        self._commit(
            config,
            custom_theme_light=merged_light,
            custom_theme_dark=merged_dark,
            theme_source="custom",
            active_preset="",
        )
        self._notify("Colors applied", "Custom colors have been saved.")
        return True

    def set_mode(self, mode: str) -> bool:
        if mode not in THEME_MODES:
            self._notify_error("Error", AtelierError(ErrorCode.VALIDATION_INVALID_MODE, details={"mode": mode}))
            return False
        self._applier.set_color_scheme(mode)
        self._set_config(replace(self._config, mode=mode))
        self._persist(theme_mode=mode)
        return True

    # -- history management --

    def set_default_theme(self, theme_id: str) -> bool:
        if self._config.find_imported(theme_id) is None:
            self._notify_error("Error", AtelierError(ErrorCode.THEME_NOT_FOUND, details={"id": theme_id}))
            return False
        themes = tuple(
            replace(theme, is_default=theme.id == theme_id)
            for theme in self._config.imported_themes
        )
        self._set_config(replace(self._config, imported_themes=themes))
        self._persist(imported_themes=themes)
        self._notify("Default theme updated", "The default theme has been changed.")
        return True

    def rename_theme(self, theme_id: str, name: str) -> bool:
        cleaned = " ".join((name or "").split())[:MAX_THEME_NAME_LEN]
        if not cleaned:
            self._notify_error("Error", AtelierError(ErrorCode.VALIDATION_EMPTY_NAME))
            return False
        if self._config.find_imported(theme_id) is None:
            self._notify_error("Error", AtelierError(ErrorCode.THEME_NOT_FOUND, details={"id": theme_id}))
            return False
        themes = tuple(
            replace(theme, name=cleaned) if theme.id == theme_id else theme
            for theme in self._config.imported_themes
        )
        self._set_config(replace(self._config, imported_themes=themes))
        self._persist(imported_themes=themes)
        self._notify("Theme renamed", f"Theme renamed to {cleaned}.")
        return True

    def delete_theme(self, theme_id: str) -> bool:
        removed = self._config.find_imported(theme_id)
        if removed is None:
            self._notify_error("Error", AtelierError(ErrorCode.THEME_NOT_FOUND, details={"id": theme_id}))
            return False
        survivors = enforce_single_default(
            tuple(theme for theme in self._config.imported_themes if theme.id != theme_id)
        )
        config = replace(self._config, imported_themes=survivors)
        was_active = self._config.active_preset == theme_id

        if not was_active:
            self._set_config(config)
            self._persist(imported_themes=survivors)
        elif survivors:
            self._set_config(config)
            self._persist(imported_themes=survivors)
            self._activate_imported(config, config.default_imported())
        else:
            self._activate_builtin_default(config, imported_themes=survivors)
        logger.info("deleted imported theme %s (active=%s)", theme_id, was_active)
        self._notify("Theme deleted", f"{removed.name} has been removed.")
        return True

    def reset_to_default(self) -> bool:
        fallback = self._config.default_imported()
        if fallback is not None:
            self._activate_imported(self._config, fallback)
        else:
            self._activate_builtin_default(self._config, tweakcn_registry_url="")
        self._notify("Theme reset", "The default theme has been restored.")
        return True

    # -- internals --

    def _activate_imported(self, base: ThemeConfig, theme: ImportedTheme) -> None:
        config = replace(
            base,
            light=dict(theme.light),
            dark=dict(theme.dark),
            source="tweakcn",
            active_preset=theme.id,
        )
        self._commit(
            config,
            active_preset=theme.id,
            custom_theme_light=config.light,
            custom_theme_dark=config.dark,
            theme_source="tweakcn",
        )

    def _activate_builtin_default(self, base: ThemeConfig, **extra: Any) -> None:
        preset = default_preset()
        config = replace(
            base,
            light=dict(preset.light),
            dark=dict(preset.dark),
            source="default",
            active_preset=None,
        )
        if "tweakcn_registry_url" in extra:
            config = replace(config, registry_url=extra["tweakcn_registry_url"])
        self._commit(
            config,
            custom_theme_light=config.light,
            custom_theme_dark=config.dark,
            theme_source="default",
            active_preset="",
            **extra,
        )

    def _normalize_loaded(self, config: ThemeConfig) -> ThemeConfig:
        changed: dict[str, Any] = {}

        themes: list[ImportedTheme] = []
        themes_changed = False
        for theme in config.imported_themes:
            if needs_normalization(theme.light, theme.dark):
                normalized = normalize_theme(theme.light, theme.dark)
                if normalized is None:
                    logger.warning("could not normalize imported theme %s; keeping stored values", theme.id)
                elif (normalized.light, normalized.dark) != (theme.light, theme.dark):
                    theme = replace(theme, light=normalized.light, dark=normalized.dark)
                    themes_changed = True
            themes.append(theme)
        if themes_changed:
            config = replace(config, imported_themes=tuple(themes))
            changed["imported_themes"] = config.imported_themes

        if needs_normalization(config.light, config.dark):
            normalized = normalize_theme(config.light, config.dark)
            if normalized is None:
                logger.warning("could not normalize active colors; keeping stored values")
            elif (normalized.light, normalized.dark) != (config.light, config.dark):
                config = replace(config, light=normalized.light, dark=normalized.dark)
                changed["custom_theme_light"] = config.light
                changed["custom_theme_dark"] = config.dark

        if changed:
            self._persist(**changed)
        return config

    def _commit(self, config: ThemeConfig, **fields: Any) -> None:
        self._applier.apply(config.light, config.dark)
        self._set_config(config)
        self._persist(**fields)

    def _set_config(self, config: ThemeConfig) -> None:
        self._config = config
        self.config_changed.emit(config)

    def _persist(self, **fields: Any) -> bool:
        failed = self._settings.save(**fields)
        if not failed:
            return True
        # Applied state stays in place; the store is behind until the next write.
        logger.warning("appearance settings not saved: %s", ", ".join(failed))
        self._notify_error(
            "Error",
            AtelierError(ErrorCode.SETTINGS_WRITE_FAILED, details={"keys": ", ".join(failed)}),
        )
        return False

    def _notify(self, title: str, message: str) -> None:
        self.notification.emit(title, message, False)

    def _notify_error(self, title: str, error: AtelierError) -> None:
        self.notification.emit(title, format_error_for_user(error), True)
