from __future__ import annotations

import base64
from pathlib import Path

import pytest

from photo_editor.image_refs import ImageRefRegistry
from photo_editor.ops.file_operations import (
    DEFAULT_RESULT_NAME,
    is_supported_image,
    save_image_ref,
    suggest_result_name,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("a.png", True),
        ("b.JPG", True),
        ("c.jpeg", True),
        ("d.webp", True),
        ("e.gif", False),
        ("notes.txt", False),
        ("no_suffix", False),
    ],
)
def test_is_supported_image(name: str, expected: bool) -> None:
    assert is_supported_image(name) is expected


def test_suggest_result_name() -> None:
    assert suggest_result_name("portrait.jpg") == "portrait-enhanced.png"
    assert suggest_result_name("/photos/me.webp") == "me-enhanced.png"
    assert suggest_result_name(None) == DEFAULT_RESULT_NAME
    assert suggest_result_name("") == DEFAULT_RESULT_NAME


def test_save_result_ref_writes_decoded_bytes(tmp_path: Path) -> None:
    registry = ImageRefRegistry()
    ref = registry.create_data_ref(base64.b64encode(b"\x89PNG-data").decode())

    saved = save_image_ref(registry, ref, tmp_path / "out" / "result.png")

    assert saved == tmp_path / "out" / "result.png"
    assert saved.read_bytes() == b"\x89PNG-data"
    assert not (tmp_path / "out" / "result.png.part").exists()


def test_save_enforces_png_suffix(tmp_path: Path) -> None:
    registry = ImageRefRegistry()
    ref = registry.create_data_ref(base64.b64encode(b"x").decode())

    saved = save_image_ref(registry, ref, tmp_path / "result.jpg")

    assert saved.name == "result.png"
    assert saved.read_bytes() == b"x"


def test_save_released_ref_raises_and_writes_nothing(tmp_path: Path) -> None:
    registry = ImageRefRegistry()
    ref = registry.create_data_ref(base64.b64encode(b"x").decode())
    registry.release(ref)

    with pytest.raises(KeyError):
        save_image_ref(registry, ref, tmp_path / "result.png")
    assert list(tmp_path.iterdir()) == []
