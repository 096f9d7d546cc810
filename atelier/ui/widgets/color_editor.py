"""Per-token color editor with light and dark tabs."""

from __future__ import annotations

from typing import Mapping

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from atelier.themes.colors import hsl_triplet_to_hex
from atelier.themes.constants import COLOR_TOKENS

# card/popover pairs follow background/foreground and are not edited directly.
EDITABLE_TOKENS: tuple[str, ...] = tuple(
    key for key in COLOR_TOKENS if not key.startswith(("card", "popover"))
)

_NEUTRAL_SWATCH = "#808080"


def format_label(key: str) -> str:
    return " ".join(word.capitalize() for word in key.split("-"))


class _ColorField(QWidget):
    def __init__(self, placeholder: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.edit = QLineEdit()
        self.edit.setPlaceholderText(placeholder)
        self.swatch = QFrame()
        self.swatch.setFixedSize(28, 28)
        self.swatch.setFrameShape(QFrame.Shape.Box)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.edit, 1)
        layout.addWidget(self.swatch)

        self.edit.textChanged.connect(self._update_swatch)
        self._update_swatch(self.edit.text())

    def _update_swatch(self, text: str) -> None:
        color = hsl_triplet_to_hex(text) or _NEUTRAL_SWATCH
        self.swatch.setStyleSheet(f"background-color: {color};")


class ColorEditor(QWidget):
    """Edits the token sets; emits only the tokens that hold a value."""

    apply_requested = Signal(dict, dict)  # light, dark

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._fields: dict[str, dict[str, _ColorField]] = {"light": {}, "dark": {}}

        tabs = QTabWidget()
        tabs.addTab(self._build_tab("light", "H S% L% (e.g. 0 0% 100%)"), "Light Mode")
        tabs.addTab(self._build_tab("dark", "H S% L% (e.g. 0 0% 0%)"), "Dark Mode")

        self._apply_btn = QPushButton("Apply Colors")
        self._apply_btn.setProperty("role", "primary")
        self._apply_btn.clicked.connect(self._emit_apply)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(tabs, 1)
        layout.addWidget(self._apply_btn)

    def set_colors(self, light: Mapping[str, str], dark: Mapping[str, str]) -> None:
        for scheme, colors in (("light", light), ("dark", dark)):
            for key, field in self._fields[scheme].items():
                field.edit.setText(colors.get(key, ""))

    def colors(self) -> tuple[dict[str, str], dict[str, str]]:
        return self._collect("light"), self._collect("dark")

    def set_busy(self, busy: bool) -> None:
        self._apply_btn.setEnabled(not busy)

    def _build_tab(self, scheme: str, placeholder: str) -> QWidget:
        body = QWidget()
        form = QFormLayout(body)
        for key in EDITABLE_TOKENS:
            field = _ColorField(placeholder)
            self._fields[scheme][key] = field
            form.addRow(f"{format_label(key)}:", field)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(body)
        return scroll

    def _collect(self, scheme: str) -> dict[str, str]:
        return {
            key: field.edit.text().strip()
            for key, field in self._fields[scheme].items()
            if field.edit.text().strip()
        }

    def _emit_apply(self) -> None:
        light, dark = self.colors()
        self.apply_requested.emit(light, dark)
