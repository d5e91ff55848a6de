"""Renderable image references.

A reference is a small immutable handle the UI can turn into pixels without
the workflow handing raw bytes around:

- preview refs point at the uploaded file (`file:` URL),
- result refs embed the model output (`data:image/png;base64,...`).

Every handle is owned by the registry that created it and must be released
when superseded. Release listeners let views evict whatever they cached for
the handle (decoded pixmaps).
"""

from __future__ import annotations

import base64
import binascii
import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from .logger import get_logger
from .path_utils import file_uri

_logger = get_logger("image_refs")

PREVIEW = "preview"
RESULT = "result"


@dataclass(frozen=True, slots=True)
class ImageRef:
    key: int
    kind: str
    mime_type: str
    url: str

    @property
    def is_data_url(self) -> bool:
        return self.url.startswith("data:")

    @property
    def local_path(self) -> str | None:
        if not self.url.startswith("file:"):
            return None
        return url2pathname(urlparse(self.url).path)


class ImageRefRegistry:
    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._live: dict[int, ImageRef] = {}
        self._lock = threading.Lock()
        self._listeners: list[Callable[[ImageRef], None]] = []

    def add_release_listener(self, fn: Callable[[ImageRef], None]) -> None:
        self._listeners.append(fn)

    def create_file_ref(self, path: str | Path, mime_type: str) -> ImageRef:
        return self._register(PREVIEW, mime_type, file_uri(path))

    def create_data_ref(self, payload_b64: str, mime_type: str = "image/png") -> ImageRef:
        return self._register(RESULT, mime_type, f"data:{mime_type};base64,{payload_b64}")

    def _register(self, kind: str, mime_type: str, url: str) -> ImageRef:
        with self._lock:
            ref = ImageRef(key=next(self._ids), kind=kind, mime_type=mime_type, url=url)
            self._live[ref.key] = ref
        _logger.debug("allocated %s ref #%d", kind, ref.key)
        return ref

    def release(self, ref: ImageRef | None) -> None:
        if ref is None:
            return
        with self._lock:
            if self._live.pop(ref.key, None) is None:
                return
        _logger.debug("released %s ref #%d", ref.kind, ref.key)
        for fn in list(self._listeners):
            try:
                fn(ref)
            except Exception:
                _logger.exception("release listener failed for ref #%d", ref.key)

    def release_all(self) -> None:
        with self._lock:
            refs = list(self._live.values())
        for ref in refs:
            self.release(ref)

    def is_live(self, ref: ImageRef) -> bool:
        with self._lock:
            return ref.key in self._live

    @property
    def live_count(self) -> int:
        with self._lock:
            return len(self._live)

    def resolve(self, ref: ImageRef) -> bytes:
        """Return the image bytes behind `ref`.

        Raises KeyError for released handles and OSError/ValueError when the
        underlying data is gone or malformed.
        """
        if not self.is_live(ref):
            raise KeyError(f"image ref #{ref.key} was released")
        if ref.is_data_url:
            _, _, payload = ref.url.partition(",")
            try:
                return base64.b64decode(payload, validate=True)
            except binascii.Error as e:
                raise ValueError(f"image ref #{ref.key} holds invalid base64 data") from e
        path = ref.local_path
        if path is None:
            raise ValueError(f"image ref #{ref.key} has an unsupported url")
        return Path(path).read_bytes()
