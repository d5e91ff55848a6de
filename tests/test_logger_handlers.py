import logging
import sys

from photo_editor import logger as pe_logger


def _stderr_handlers(base: logging.Logger) -> list[logging.Handler]:
    return [
        h for h in base.handlers if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
    ]


def test_setup_logger_idempotent_handlers(tmp_path, monkeypatch):
    """Calling setup_logger() repeatedly should leave exactly one stderr StreamHandler."""
    monkeypatch.chdir(tmp_path)
    base = pe_logger.setup_logger(level=logging.DEBUG)
    _ = pe_logger.setup_logger(level=logging.DEBUG)
    _ = pe_logger.get_logger("workflow")

    assert len(_stderr_handlers(base)) == 1
    assert base.propagate is False


def test_env_level_overrides_argument(monkeypatch):
    monkeypatch.setenv("PHOTO_EDITOR_LOG_LEVEL", "error")
    base = pe_logger.setup_logger(level=logging.DEBUG)
    assert base.level == logging.ERROR

    monkeypatch.delenv("PHOTO_EDITOR_LOG_LEVEL")
    base = pe_logger.setup_logger(level=logging.INFO)
    assert base.level == logging.INFO


def test_get_logger_returns_child_of_project_logger():
    child = pe_logger.get_logger("gemini")
    assert child.name == "photo_editor.gemini"
    assert pe_logger.get_logger() is logging.getLogger("photo_editor")
