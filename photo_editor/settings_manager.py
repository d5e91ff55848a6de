from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger
from .path_utils import abs_dir_str

_logger = get_logger("settings")


class SettingsManager:
    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "gemini_model": "gemini-2.5-flash-image-preview",
        "default_background": "white",
        "theme": "light",
        "font_size": 10,
        "request_timeout_ms": None,
    }

    _DIR_KEYS = ("last_open_dir", "last_save_dir")

    def load(self) -> None:
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except Exception as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except Exception as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        # Directories are stored absolute; a file path is coerced to its folder.
        if key in self._DIR_KEYS and isinstance(value, str) and value:
            value = abs_dir_str(value)
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def gemini_model(self) -> str:
        return str(self.get("gemini_model"))

    @property
    def api_key(self) -> str | None:
        val = self.get("api_key")
        return val if isinstance(val, str) and val.strip() else None

    @property
    def request_timeout_ms(self) -> int | None:
        val = self.get("request_timeout_ms")
        try:
            ms = int(val) if val is not None else None
        except (TypeError, ValueError):
            _logger.warning("request_timeout_ms invalid: %r", val)
            return None
        return ms if ms and ms > 0 else None

    @property
    def last_open_dir(self) -> str | None:
        val = self.get("last_open_dir")
        return val if isinstance(val, str) and os.path.isdir(val) else None

    @property
    def last_save_dir(self) -> str | None:
        val = self.get("last_save_dir")
        return val if isinstance(val, str) and os.path.isdir(val) else None
