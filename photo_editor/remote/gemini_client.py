from __future__ import annotations

import base64
import binascii
import contextlib
import os
import threading
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from photo_editor.errors import RemoteError
from photo_editor.logger import get_logger

_logger = get_logger("gemini")

DEFAULT_MODEL = "gemini-2.5-flash-image-preview"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def load_env_file(env_path: str = ".env") -> None:
    """Copy KEY=VALUE lines from `env_path` into os.environ (existing keys win)."""
    try:
        if not os.path.exists(env_path):
            return
        with open(env_path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k, v = k.strip(), v.strip().strip('"').strip("'")
                if k and v and k not in os.environ:
                    os.environ[k] = v
    except (OSError, UnicodeError) as e:
        # .env load failure is not critical
        _logger.debug("env load skipped: %s", e)


def resolve_api_key(explicit: str | None = None) -> str | None:
    if explicit:
        return explicit
    for name in API_KEY_ENV_VARS:
        val = (os.getenv(name) or "").strip()
        if val:
            return val
    return None


class GeminiImageClient:
    """Image-to-image transformation through the Gemini API.

    The SDK client is created lazily on first use so that a missing API key is
    reported as a RemoteError for that attempt instead of failing at startup.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout_ms: int | None = None,
        client: Any | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model or DEFAULT_MODEL
        self._timeout_ms = timeout_ms
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> Any:
        with self._client_lock:
            if self._client is None:
                key = resolve_api_key(self._api_key)
                if not key:
                    raise RemoteError("Gemini API key is not configured. Set GEMINI_API_KEY.")
                http_options = types.HttpOptions(timeout=self._timeout_ms) if self._timeout_ms else None
                self._client = genai.Client(api_key=key, http_options=http_options)
            return self._client

    def process_image(self, image_b64: str, mime_type: str, prompt: str) -> str:
        try:
            raw = base64.b64decode(image_b64, validate=True)
        except binascii.Error as e:
            raise RemoteError("The image could not be prepared for upload.") from e

        client = self._get_client()
        _logger.info("requesting %s (%s, %d bytes)", self._model, mime_type, len(raw))
        try:
            response = client.models.generate_content(
                model=self._model,
                contents=[
                    types.Part.from_bytes(data=raw, mime_type=mime_type),
                    prompt,
                ],
                config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
            )
        except genai_errors.APIError as e:
            _logger.warning("gemini request failed: code=%s message=%s", e.code, e.message)
            raise RemoteError(e.message or f"Gemini request failed ({e.code}).") from e

        return extract_image_b64(response)


def _response_parts(response: Any) -> list[Any]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


def extract_image_b64(response: Any) -> str:
    """Return the first inline image of `response` as base64 text."""
    texts: list[str] = []
    for part in _response_parts(response):
        inline = getattr(part, "inline_data", None)
        data = getattr(inline, "data", None) if inline is not None else None
        if data:
            if isinstance(data, str):
                # Some transports hand back base64 text instead of bytes.
                return data
            return base64.b64encode(data).decode("ascii")
        text = getattr(part, "text", None)
        if text:
            texts.append(text.strip())

    feedback = None
    with contextlib.suppress(AttributeError):
        feedback = response.prompt_feedback
    if feedback:
        _logger.warning("gemini prompt feedback: %s", feedback)

    if texts:
        raise RemoteError("The model did not return an image: " + " ".join(texts))
    raise RemoteError("The model did not return an image. Please try a different photo.")
