"""Appearance settings page."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable

from PySide6.QtCore import Qt, QThread
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from atelier.core.registry_client import fetch_theme_css
from atelier.themes.presets import load_presets
from atelier.ui.widgets.color_editor import ColorEditor
from atelier.ui.widgets.theme_gallery import ThemeGallery
from atelier.workers.theme_import_worker import ThemeImportWorker

if TYPE_CHECKING:
    from atelier.themes.controller import ThemeCustomizationController
    from atelier.themes.models import ThemeConfig


_SOURCE_LABELS = {
    "default": "Default theme",
    "preset": "Built-in preset",
    "tweakcn": "Imported from TweakCN",
    "custom": "Custom colors",
}


class AppearanceDialog(QDialog):
    """Dialog for importing, selecting and editing application themes."""

    _MODE_ITEMS: tuple[tuple[str, str], ...] = (
        ("Follow system", "system"),
        ("Light", "light"),
        ("Dark", "dark"),
    )

    def __init__(
        self,
        controller: ThemeCustomizationController,
        parent=None,
        *,
        fetch: Callable[[str], str] = fetch_theme_css,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._fetch = fetch
        self._import_thread: QThread | None = None
        self._import_worker: ThemeImportWorker | None = None
        self.setWindowTitle("Appearance")
        self.setMinimumWidth(640)
        self._setup_ui()
        self._controller.config_changed.connect(self._refresh)
        self._controller.notification.connect(self._show_notification)
        self._refresh(self._controller.config)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self._mode_combo = QComboBox()
        for label, value in self._MODE_ITEMS:
            self._mode_combo.addItem(label, value)
        self._mode_combo.activated.connect(self._on_mode_selected)

        self._preset_combo = QComboBox()
        for preset in load_presets():
            self._preset_combo.addItem(preset.name, preset.preset_id)
            self._preset_combo.setItemData(
                self._preset_combo.count() - 1,
                preset.description,
                Qt.ItemDataRole.ToolTipRole,
            )
        self._preset_apply_btn = QPushButton("Apply Preset")
        self._preset_apply_btn.clicked.connect(self._apply_preset)
        preset_row = QHBoxLayout()
        preset_row.setContentsMargins(0, 0, 0, 0)
        preset_row.addWidget(self._preset_combo, 1)
        preset_row.addWidget(self._preset_apply_btn)

        self._url_edit = QLineEdit()
        self._url_edit.setPlaceholderText("https://tweakcn.com/r/themes/...")
        self._url_edit.returnPressed.connect(self._start_import)
        self._import_btn = QPushButton("Import")
        self._import_btn.setProperty("role", "primary")
        self._import_btn.clicked.connect(self._start_import)
        import_row = QHBoxLayout()
        import_row.setContentsMargins(0, 0, 0, 0)
        import_row.addWidget(self._url_edit, 1)
        import_row.addWidget(self._import_btn)

        self._source_label = QLabel("")
        self._source_label.setObjectName("StatusDetail")

        form.addRow("Color Mode:", self._mode_combo)
        form.addRow("Preset:", preset_row)
        form.addRow("Import from TweakCN:", import_row)
        form.addRow("Current Theme:", self._source_label)
        layout.addLayout(form)

        gallery_box = QGroupBox("Imported Themes")
        gallery_layout = QVBoxLayout(gallery_box)
        self._gallery = ThemeGallery()
        self._gallery.apply_requested.connect(self._controller.apply_imported_theme)
        self._gallery.set_default_requested.connect(self._controller.set_default_theme)
        self._gallery.rename_requested.connect(self._controller.rename_theme)
        self._gallery.delete_requested.connect(self._controller.delete_theme)
        gallery_layout.addWidget(self._gallery)
        layout.addWidget(gallery_box)

        editor_box = QGroupBox("Custom Colors")
        editor_layout = QVBoxLayout(editor_box)
        self._color_editor = ColorEditor()
        self._color_editor.apply_requested.connect(self._controller.apply_custom_colors)
        editor_layout.addWidget(self._color_editor)
        layout.addWidget(editor_box, 1)

        self._status_label = QLabel("")
        self._status_label.setObjectName("StatusDetail")
        self._status_label.setWordWrap(True)
        layout.addWidget(self._status_label)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        self._reset_btn = buttons.addButton("Reset to Default", QDialogButtonBox.ButtonRole.ResetRole)
        self._reset_btn.clicked.connect(self._controller.reset_to_default)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _refresh(self, config: ThemeConfig) -> None:
        index = self._mode_combo.findData(config.mode)
        self._mode_combo.setCurrentIndex(max(0, index))
        preset_index = self._preset_combo.findData(config.active_preset)
        if preset_index >= 0:
            self._preset_combo.setCurrentIndex(preset_index)
        self._gallery.set_themes(config.imported_themes, config.active_preset)
        self._color_editor.set_colors(config.light, config.dark)
        self._source_label.setText(self._describe_source(config))

    def _describe_source(self, config: ThemeConfig) -> str:
        text = _SOURCE_LABELS.get(config.source, config.source)
        if config.source == "tweakcn" and config.active_preset:
            theme = config.find_imported(config.active_preset)
            if theme is not None:
                text = f"{text}: {theme.name}"
        elif config.source == "preset":
            text = f"{text}: {self._preset_combo.currentText()}"
        return text

    def _on_mode_selected(self, _index: int) -> None:
        mode = self._mode_combo.currentData()
        if isinstance(mode, str):
            self._controller.set_mode(mode)

    def _apply_preset(self) -> None:
        preset_id = self._preset_combo.currentData()
        if isinstance(preset_id, str):
            self._controller.apply_preset(preset_id)

    def _start_import(self) -> None:
        if self._import_thread is not None:
            return
        url = self._controller.validate_registry_url(self._url_edit.text())
        if url is None:
            return

        self._set_importing(True)
        worker = ThemeImportWorker(url, fetch=self._fetch)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(self._on_import_finished)
        worker.error.connect(self._on_import_failed)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        thread.finished.connect(partial(self._cleanup_import, worker, thread))
        self._import_worker = worker
        self._import_thread = thread
        thread.start()

    def is_importing(self) -> bool:
        return self._import_thread is not None

    def _on_import_finished(self, text: object) -> None:
        url = self._import_worker.url if self._import_worker is not None else ""
        self._set_importing(False)
        if isinstance(text, str) and self._controller.complete_import(url, text):
            self._url_edit.clear()

    def _on_import_failed(self, message: str) -> None:
        url = self._import_worker.url if self._import_worker is not None else ""
        self._set_importing(False)
        self._controller.import_failed(url, message)

    def _cleanup_import(self, worker: ThemeImportWorker, thread: QThread) -> None:
        worker.deleteLater()
        thread.deleteLater()
        if self._import_worker is worker:
            self._import_worker = None
        if self._import_thread is thread:
            self._import_thread = None

    def _set_importing(self, busy: bool) -> None:
        self._import_btn.setEnabled(not busy)
        self._url_edit.setEnabled(not busy)
        self._color_editor.set_busy(busy)
        self._import_btn.setText("Importing..." if busy else "Import")

    def _show_notification(self, title: str, message: str, is_error: bool) -> None:
        self._status_label.setObjectName("StatusError" if is_error else "StatusDetail")
        self._status_label.style().unpolish(self._status_label)
        self._status_label.style().polish(self._status_label)
        self._status_label.setText(f"{title}: {message}")

    def reject(self) -> None:
        if self._import_worker is not None:
            self._import_worker.cancel()
        if self._import_thread is not None:
            self._import_thread.quit()
            self._import_thread.wait(2000)
        super().reject()
