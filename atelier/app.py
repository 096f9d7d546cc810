"""QApplication bootstrap for the appearance settings window."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import sys

from PySide6.QtWidgets import QApplication

from atelier import __version__
from atelier.config.settings import AppearanceSettings, QSettingsStore
from atelier.runtime_paths import app_data_dir, is_frozen, package_root
from atelier.themes.applier import ThemeApplier
from atelier.themes.controller import ThemeCustomizationController
from atelier.themes.sinks import ApplicationStyleSink
from atelier.ui.appearance_dialog import AppearanceDialog


def _configure_logger() -> logging.Logger:
    logger = logging.getLogger("atelier")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_dir = app_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "atelier.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def run_app() -> int:
    """Initialize and run the application."""
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("Atelier")
    app.setOrganizationName("Atelier")
    logger = _configure_logger()
    logger.info(
        "startup version=%s frozen=%s package_root=%s", __version__, is_frozen(), package_root()
    )

    settings = AppearanceSettings(QSettingsStore())
    sink = ApplicationStyleSink(app)
    controller = ThemeCustomizationController(settings, ThemeApplier(sink))
    config = controller.load()
    logger.info(
        "appearance loaded source=%s mode=%s imported=%d",
        config.source,
        config.mode,
        len(config.imported_themes),
    )

    dialog = AppearanceDialog(controller)
    dialog.show()

    exit_code = app.exec()
    return exit_code
