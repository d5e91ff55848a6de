from __future__ import annotations

import contextlib
import math
import os
from dataclasses import dataclass
from typing import Any

from photo_editor.logger import get_logger

_logger = get_logger("image_info")

_LIBVIPS_BIN = os.environ.get("LIBVIPS_BIN")
if _LIBVIPS_BIN and os.name == "nt":
    # Best-effort only; reading will report import errors if any
    with contextlib.suppress(Exception):
        os.add_dll_directory(_LIBVIPS_BIN)

_pyvips: Any | None = None


def _get_pyvips_module() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        _pyvips = pyvips
    return _pyvips


@dataclass(frozen=True, slots=True)
class ImageInfo:
    width: int
    height: int
    loader: str
    size_bytes: int

    def caption(self) -> str:
        fmt = self.loader.removesuffix("_source").removesuffix("load").upper() or "?"
        return f"{self.width}x{self.height} · {fmt} · {format_size(self.size_bytes)}"


def format_size(size_bytes: int) -> str:
    if size_bytes == 0:
        return "0B"
    if size_bytes < 0:
        raise ValueError("size_bytes must be non-negative")
    size_name = ("B", "KB", "MB", "GB")
    i = min(math.floor(math.log(size_bytes, 1024)), len(size_name) - 1)
    s = round(size_bytes / math.pow(1024, i), 2)
    return f"{s} {size_name[i]}"


def read_image_info(path: str) -> ImageInfo | None:
    """Header-only probe of `path`. Returns None when it is not a readable image."""
    try:
        pyvips = _get_pyvips_module()
        image = pyvips.Image.new_from_file(path, access="sequential")
        loader = ""
        with contextlib.suppress(Exception):
            loader = str(image.get("vips-loader"))
        return ImageInfo(
            width=int(image.width),
            height=int(image.height),
            loader=loader,
            size_bytes=os.path.getsize(path),
        )
    except Exception as e:
        _logger.debug("image info failed for %s: %s", path, e)
        return None
