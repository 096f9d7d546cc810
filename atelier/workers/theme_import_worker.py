"""Worker that downloads theme CSS off the UI thread."""

from __future__ import annotations

from typing import Callable

from atelier.core.registry_client import fetch_theme_css
from atelier.errors import format_error_for_user
from atelier.workers.base_worker import BaseWorker


class ThemeImportWorker(BaseWorker):
    """Fetches registry text; the controller parses and commits it on the UI thread.

    A fetch already in flight cannot be aborted. Cancelling only suppresses
    the result signal.
    """

    def __init__(self, url: str, fetch: Callable[[str], str] = fetch_theme_css) -> None:
        super().__init__()
        self._url = url
        self._fetch = fetch

    @property
    def url(self) -> str:
        return self._url

    def run(self) -> None:
        self.started.emit()
        try:
            text = self._fetch(self._url)
        except Exception as exc:
            if not self._is_cancelled:
                self.error.emit(format_error_for_user(exc))
            return
        if not self._is_cancelled:
            self.finished.emit(text)
