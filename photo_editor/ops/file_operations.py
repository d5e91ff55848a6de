from __future__ import annotations

from pathlib import Path

from photo_editor.image_refs import ImageRef, ImageRefRegistry
from photo_editor.logger import get_logger

_logger = get_logger("file_ops")

ACCEPTED_EXTS = {".png", ".jpg", ".jpeg", ".webp"}
OPEN_FILTER = "Images (*.png *.jpg *.jpeg *.webp)"
SAVE_FILTER = "PNG image (*.png)"
DEFAULT_RESULT_NAME = "enhanced-photo.png"


def is_supported_image(path: str | Path) -> bool:
    return Path(path).suffix.lower() in ACCEPTED_EXTS


def suggest_result_name(source_name: str | None) -> str:
    """`portrait.jpg` -> `portrait-enhanced.png`."""
    stem = Path(source_name).stem if source_name else ""
    return f"{stem}-enhanced.png" if stem else DEFAULT_RESULT_NAME


def save_image_ref(registry: ImageRefRegistry, ref: ImageRef, dest: str | Path) -> Path:
    """Write the bytes behind `ref` to `dest` (a `.png` suffix is enforced).

    Raises KeyError for released refs and OSError when the write fails.
    """
    target = Path(dest)
    if target.suffix.lower() != ".png":
        target = target.with_suffix(".png")
    data = registry.resolve(ref)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(target.name + ".part")
    try:
        tmp.write_bytes(data)
        tmp.replace(target)
    finally:
        tmp.unlink(missing_ok=True)
    _logger.info("saved %s ref #%d -> %s (%d bytes)", ref.kind, ref.key, target, len(data))
    return target
