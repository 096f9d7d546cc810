"""Style sinks receiving the injected theme fragment."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile
from typing import TYPE_CHECKING

from atelier.themes.parser import parse_theme_css

if TYPE_CHECKING:
    from PySide6.QtWidgets import QApplication

logger = logging.getLogger(__name__)


class StyleSink:
    """Destination for the theme fragment. Each replace supersedes the last."""

    def replace(self, css: str) -> None:
        raise NotImplementedError

    def set_color_scheme(self, mode: str) -> None:
        """Hook for sinks that render only one scheme at a time."""


class MemoryStyleSink(StyleSink):
    """Keeps the last fragment in memory."""

    def __init__(self) -> None:
        self.css = ""
        self.writes = 0
        self.mode = "system"

    def replace(self, css: str) -> None:
        self.css = css
        self.writes += 1

    def set_color_scheme(self, mode: str) -> None:
        self.mode = mode


class FileStyleSink(StyleSink):
    """Writes the fragment to a CSS file served to the web front-end."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def replace(self, css: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=".theme-", suffix=".css", dir=str(self._path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(css)
                handle.write("\n")
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class ApplicationStyleSink(StyleSink):
    """Compiles the fragment into a Qt stylesheet for the running application."""

    def __init__(self, app: QApplication, mode: str = "system") -> None:
        self._app = app
        self._mode = mode
        self._css = ""

    def replace(self, css: str) -> None:
        self._css = css
        self._render()

    def set_color_scheme(self, mode: str) -> None:
        self._mode = mode
        if self._css:
            self._render()

    def effective_scheme(self) -> str:
        if self._mode in ("light", "dark"):
            return self._mode
        from PySide6.QtCore import Qt

        hints = self._app.styleHints()
        if hints.colorScheme() == Qt.ColorScheme.Dark:
            return "dark"
        return "light"

    def _render(self) -> None:
        from atelier.ui.theme import build_stylesheet

        parsed = parse_theme_css(self._css)
        if parsed is None:
            logger.warning("theme fragment could not be parsed; keeping current stylesheet")
            return
        tokens = parsed.dark if self.effective_scheme() == "dark" else parsed.light
        self._app.setStyleSheet(build_stylesheet(tokens))
