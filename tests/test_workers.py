"""Tests for atelier.workers."""

from __future__ import annotations

import pytest

from atelier.errors import AtelierError, ErrorCode
from atelier.workers.base_worker import BaseWorker
from atelier.workers.theme_import_worker import ThemeImportWorker


class TestBaseWorker:
    """Tests for the BaseWorker class."""

    def test_base_worker_cancel(self):
        worker = BaseWorker()
        assert worker._is_cancelled is False
        worker.cancel()
        assert worker._is_cancelled is True

    def test_base_worker_signals_exist(self):
        worker = BaseWorker()
        assert hasattr(worker, "started")
        assert hasattr(worker, "finished")
        assert hasattr(worker, "error")

    def test_base_worker_run_not_implemented(self):
        with pytest.raises(NotImplementedError):
            BaseWorker().run()


class TestThemeImportWorker:
    """Tests for ThemeImportWorker run in the calling thread."""

    def test_emits_fetched_text(self):
        worker = ThemeImportWorker("https://x.test/a", fetch=lambda url: f"body of {url}")
        results, errors = [], []
        worker.finished.connect(results.append)
        worker.error.connect(errors.append)
        worker.run()
        assert results == ["body of https://x.test/a"]
        assert errors == []
        assert worker.url == "https://x.test/a"

    def test_emits_formatted_error(self):
        def _fail(url):
            raise AtelierError(ErrorCode.NETWORK_TIMEOUT, url=url)

        worker = ThemeImportWorker("https://x.test/a", fetch=_fail)
        results, errors = [], []
        worker.finished.connect(results.append)
        worker.error.connect(errors.append)
        worker.run()
        assert results == []
        assert len(errors) == 1
        assert "timed out" in errors[0]

    def test_cancelled_worker_suppresses_result(self):
        worker = ThemeImportWorker("https://x.test/a", fetch=lambda url: "text")
        results = []
        worker.finished.connect(results.append)
        worker.cancel()
        worker.run()
        assert results == []
