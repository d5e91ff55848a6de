import logging
import sys

from photo_editor import logger as pe_logger


def _record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)


def _stderr_handler(base: logging.Logger) -> logging.Handler:
    return next(h for h in base.handlers if getattr(h, "stream", None) is sys.stderr)


def test_category_filter_matches_logger_suffix():
    f = pe_logger._CategoryFilter({"workflow", "gemini"})
    assert f.filter(_record("photo_editor.workflow"))
    assert f.filter(_record("photo_editor.gemini"))
    assert not f.filter(_record("photo_editor.ui_main"))


def test_log_cats_env_installs_filter_and_clearing_removes_it(monkeypatch):
    monkeypatch.setenv("PHOTO_EDITOR_LOG_CATS", "workflow, gemini")
    base = pe_logger.setup_logger()
    filters = [f for f in _stderr_handler(base).filters if isinstance(f, pe_logger._CategoryFilter)]
    assert len(filters) == 1
    assert filters[0].allowed == {"workflow", "gemini"}

    monkeypatch.delenv("PHOTO_EDITOR_LOG_CATS")
    base = pe_logger.setup_logger()
    assert not _stderr_handler(base).filters
