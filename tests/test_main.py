from __future__ import annotations

import os
from pathlib import Path

import pytest

PySide6 = pytest.importorskip("PySide6")  # noqa: F401

from photo_editor import main as pe_main
from photo_editor.options import BackgroundOption
from photo_editor.settings_manager import SettingsManager


def test_cli_logging_options_are_stripped_and_exported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PHOTO_EDITOR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PHOTO_EDITOR_LOG_CATS", raising=False)

    argv = pe_main._apply_cli_logging_options(
        ["photo-editor", "--log-level", "debug", "photo.jpg", "--log-cats", "workflow,gemini"]
    )

    assert argv == ["photo-editor", "photo.jpg"]
    assert os.environ["PHOTO_EDITOR_LOG_LEVEL"] == "debug"
    assert os.environ["PHOTO_EDITOR_LOG_CATS"] == "workflow,gemini"


def test_build_controller_uses_configured_default_option(tmp_path: Path) -> None:
    settings = SettingsManager(str(tmp_path / "settings.json"))
    settings.set("default_background", "original")

    controller = pe_main.build_controller(settings)
    try:
        assert controller.state.option is BackgroundOption.ORIGINAL
        assert controller.can_process is False
    finally:
        controller.shutdown()


def test_unknown_default_option_falls_back_to_white(tmp_path: Path) -> None:
    settings = SettingsManager(str(tmp_path / "settings.json"))
    settings.set("default_background", "sepia")

    assert pe_main._default_option(settings) is BackgroundOption.WHITE
