"""Remote image-generation services.

The workflow only depends on the `ImageTransformer` protocol; the Gemini
client is the production implementation.
"""

from __future__ import annotations

from typing import Protocol


class ImageTransformer(Protocol):
    def process_image(self, image_b64: str, mime_type: str, prompt: str) -> str:
        """Return the transformed image as base64 PNG text or raise RemoteError."""
        ...


__all__ = ["ImageTransformer"]
