from __future__ import annotations

import json
from pathlib import Path

from photo_editor.settings_manager import SettingsManager


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))

    assert sm.gemini_model == "gemini-2.5-flash-image-preview"
    assert sm.get("default_background") == "white"
    assert sm.get("theme") == "light"
    assert sm.api_key is None
    assert sm.request_timeout_ms is None
    assert sm.last_open_dir is None
    assert not (tmp_path / "settings.json").exists()


def test_set_persists_and_reloads(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    sm = SettingsManager(str(path))
    sm.set("gemini_model", "other-model")
    sm.set("request_timeout_ms", 30000)

    assert json.loads(path.read_text(encoding="utf-8"))["gemini_model"] == "other-model"
    again = SettingsManager(str(path))
    assert again.gemini_model == "other-model"
    assert again.request_timeout_ms == 30000
    assert again.has("gemini_model")
    assert not again.has("theme")


def test_invalid_json_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    sm = SettingsManager(str(path))

    assert sm.data == {}
    assert sm.gemini_model == "gemini-2.5-flash-image-preview"


def test_non_positive_or_bad_timeout_means_no_timeout(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    sm.set("request_timeout_ms", 0)
    assert sm.request_timeout_ms is None
    sm.set("request_timeout_ms", "soon")
    assert sm.request_timeout_ms is None


def test_blank_api_key_is_ignored(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    sm.set("api_key", "   ")
    assert sm.api_key is None
    sm.set("api_key", "abc")
    assert sm.api_key == "abc"


def test_last_open_dir_is_normalized_and_directory(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    folder = tmp_path / "some_folder"
    folder.mkdir()

    sm.set("last_open_dir", str(folder))

    assert sm.last_open_dir is not None
    assert Path(sm.last_open_dir) == folder.resolve()


def test_setting_last_save_dir_to_file_coerces_to_parent_dir(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    folder = tmp_path / "out"
    folder.mkdir()
    file_path = folder / "portrait-enhanced.png"
    file_path.write_bytes(b"x")

    sm.set("last_save_dir", str(file_path))

    assert sm.last_save_dir == str(folder.resolve())


def test_missing_directory_reads_as_none(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    gone = tmp_path / "gone"
    gone.mkdir()
    sm.set("last_open_dir", str(gone))
    gone.rmdir()

    assert sm.last_open_dir is None
