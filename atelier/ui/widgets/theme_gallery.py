"""List of imported themes with per-theme actions."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from atelier.themes.constants import MAX_IMPORTED_THEMES
from atelier.themes.models import ImportedTheme

_NAME_ROLE = Qt.ItemDataRole.UserRole + 1


def describe_theme(theme: ImportedTheme, *, active: bool) -> str:
    label = theme.name
    markers = []
    if theme.is_default:
        markers.append("default")
    if active:
        markers.append("active")
    if markers:
        label += f"  [{', '.join(markers)}]"
    try:
        imported = datetime.fromisoformat(theme.imported_at)
    except ValueError:
        return label
    return f"{label}\nImported {imported:%Y-%m-%d %H:%M}"


class ThemeGallery(QWidget):
    """Shows the imported theme history and forwards user actions by id."""

    apply_requested = Signal(str)
    set_default_requested = Signal(str)
    rename_requested = Signal(str, str)
    delete_requested = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._list = QListWidget()
        self._list.currentItemChanged.connect(self._update_buttons)
        self._list.itemDoubleClicked.connect(lambda _item: self._apply())
        self._empty_hint = QLabel(
            f"No imported themes yet. The last {MAX_IMPORTED_THEMES} imports are kept here."
        )
        self._empty_hint.setObjectName("StatusDetail")
        self._empty_hint.setWordWrap(True)

        self._apply_btn = QPushButton("Apply")
        self._apply_btn.clicked.connect(self._apply)
        self._default_btn = QPushButton("Set Default")
        self._default_btn.clicked.connect(self._set_default)
        self._rename_btn = QPushButton("Rename")
        self._rename_btn.clicked.connect(self._rename)
        self._delete_btn = QPushButton("Delete")
        self._delete_btn.setProperty("role", "destructive")
        self._delete_btn.clicked.connect(self._delete)

        buttons = QHBoxLayout()
        buttons.setContentsMargins(0, 0, 0, 0)
        for button in (self._apply_btn, self._default_btn, self._rename_btn, self._delete_btn):
            buttons.addWidget(button)
        buttons.addStretch(1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._empty_hint)
        layout.addWidget(self._list, 1)
        layout.addLayout(buttons)
        self._update_buttons()

    def set_themes(self, themes: Sequence[ImportedTheme], active_id: str | None) -> None:
        selected = self.selected_theme_id()
        self._list.clear()
        for theme in themes:
            item = QListWidgetItem(describe_theme(theme, active=theme.id == active_id))
            item.setData(Qt.ItemDataRole.UserRole, theme.id)
            item.setData(_NAME_ROLE, theme.name)
            item.setData(Qt.ItemDataRole.ToolTipRole, theme.source_url)
            self._list.addItem(item)
            if theme.id == (selected or active_id):
                self._list.setCurrentItem(item)
        self._empty_hint.setVisible(not themes)
        self._update_buttons()

    def selected_theme_id(self) -> str | None:
        item = self._list.currentItem()
        if item is None:
            return None
        value = item.data(Qt.ItemDataRole.UserRole)
        return value if isinstance(value, str) else None

    def _selected_name(self) -> str:
        item = self._list.currentItem()
        if item is None:
            return ""
        value = item.data(_NAME_ROLE)
        return value if isinstance(value, str) else ""

    def _update_buttons(self, *_args) -> None:
        has_selection = self.selected_theme_id() is not None
        for button in (self._apply_btn, self._default_btn, self._rename_btn, self._delete_btn):
            button.setEnabled(has_selection)

    def _apply(self) -> None:
        theme_id = self.selected_theme_id()
        if theme_id:
            self.apply_requested.emit(theme_id)

    def _set_default(self) -> None:
        theme_id = self.selected_theme_id()
        if theme_id:
            self.set_default_requested.emit(theme_id)

    def _rename(self) -> None:
        theme_id = self.selected_theme_id()
        if not theme_id:
            return
        name, ok = QInputDialog.getText(self, "Rename Theme", "Theme name:", text=self._selected_name())
        if ok:
            self.rename_requested.emit(theme_id, name)

    def _delete(self) -> None:
        theme_id = self.selected_theme_id()
        if not theme_id:
            return
        answer = QMessageBox.question(
            self,
            "Delete Theme",
            f"Delete {self._selected_name()!r} from the imported themes?",
        )
        if answer == QMessageBox.StandardButton.Yes:
            self.delete_requested.emit(theme_id)
