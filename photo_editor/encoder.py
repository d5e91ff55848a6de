"""Turn an uploaded file into the base64 payload sent to the image model."""

from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ReadError
from .logger import get_logger
from .path_utils import abs_path_str

_logger = get_logger("encoder")

_FALLBACK_MIME = "application/octet-stream"

# mimetypes tables differ per platform; make sure the accepted upload types resolve.
mimetypes.add_type("image/webp", ".webp")


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """A user-chosen image file together with its declared media type."""

    path: str
    mime_type: str
    name: str = field(default="")

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> UploadedFile:
        p = abs_path_str(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(p)[0] or _FALLBACK_MIME
        return cls(path=p, mime_type=mime_type, name=Path(p).name)


@dataclass(frozen=True, slots=True)
class EncodedPayload:
    data: str  # base64 text
    mime_type: str


def encode_file(upload: UploadedFile) -> EncodedPayload:
    """Read `upload` fully and return it base64-encoded.

    Raises ReadError when the file cannot be read or is empty.
    """
    try:
        raw = Path(upload.path).read_bytes()
    except OSError as e:
        _logger.debug("read failed for %s: %s", upload.path, e)
        reason = e.strerror or str(e)
        raise ReadError(f"Could not read {upload.name or upload.path}: {reason}") from e

    if not raw:
        raise ReadError(f"The selected file is empty: {upload.name or upload.path}")

    _logger.debug("encoded %s (%d bytes, %s)", upload.name, len(raw), upload.mime_type)
    return EncodedPayload(data=base64.b64encode(raw).decode("ascii"), mime_type=upload.mime_type)
