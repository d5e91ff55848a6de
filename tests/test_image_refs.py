from __future__ import annotations

from pathlib import Path

import pytest

from photo_editor.image_refs import PREVIEW, RESULT, ImageRefRegistry


def test_file_ref_resolves_to_file_bytes(tmp_path: Path) -> None:
    p = tmp_path / "my photo.jpg"
    p.write_bytes(b"jpeg-bytes")
    reg = ImageRefRegistry()

    ref = reg.create_file_ref(p, "image/jpeg")

    assert ref.kind == PREVIEW
    assert ref.url.startswith("file:")
    assert ref.is_data_url is False
    assert Path(ref.local_path) == p.resolve()
    assert reg.resolve(ref) == b"jpeg-bytes"


def test_data_ref_embeds_payload() -> None:
    reg = ImageRefRegistry()

    ref = reg.create_data_ref("Zm9v")

    assert ref.kind == RESULT
    assert ref.url == "data:image/png;base64,Zm9v"
    assert ref.local_path is None
    assert reg.resolve(ref) == b"foo"


def test_keys_are_unique_and_increasing() -> None:
    reg = ImageRefRegistry()
    keys = [reg.create_data_ref("Zm9v").key for _ in range(5)]
    assert keys == sorted(set(keys))


def test_release_notifies_listeners_once() -> None:
    reg = ImageRefRegistry()
    seen: list[int] = []
    reg.add_release_listener(lambda r: seen.append(r.key))
    ref = reg.create_data_ref("Zm9v")

    reg.release(ref)
    reg.release(ref)
    reg.release(None)

    assert seen == [ref.key]
    assert reg.is_live(ref) is False
    assert reg.live_count == 0


def test_released_ref_cannot_be_resolved() -> None:
    reg = ImageRefRegistry()
    ref = reg.create_data_ref("Zm9v")
    reg.release(ref)

    with pytest.raises(KeyError):
        reg.resolve(ref)


def test_failing_listener_does_not_block_release() -> None:
    reg = ImageRefRegistry()
    seen: list[int] = []

    def _boom(_ref) -> None:  # noqa: ANN001
        raise RuntimeError("listener failed")

    reg.add_release_listener(_boom)
    reg.add_release_listener(lambda r: seen.append(r.key))
    ref = reg.create_data_ref("Zm9v")

    reg.release(ref)

    assert seen == [ref.key]
    assert reg.live_count == 0


def test_release_all(tmp_path: Path) -> None:
    p = tmp_path / "a.png"
    p.write_bytes(b"a")
    reg = ImageRefRegistry()
    reg.create_file_ref(p, "image/png")
    reg.create_data_ref("Zm9v")

    reg.release_all()

    assert reg.live_count == 0
