from __future__ import annotations

import pytest

from photo_editor.options import DEFAULT_OPTION, BackgroundOption, build_instruction


def test_default_option_is_white() -> None:
    assert DEFAULT_OPTION is BackgroundOption.WHITE


@pytest.mark.parametrize("option", list(BackgroundOption))
def test_build_instruction_is_deterministic(option: BackgroundOption) -> None:
    assert build_instruction(option) == build_instruction(option)
    assert build_instruction(option.value) == build_instruction(option)


def test_variants_yield_distinct_instructions() -> None:
    white = build_instruction(BackgroundOption.WHITE)
    original = build_instruction(BackgroundOption.ORIGINAL)

    assert white != original
    assert "plain white background" in white
    assert "Keep the original background" in original


def test_every_option_has_label_and_description() -> None:
    for option in BackgroundOption:
        assert option.label
        assert option.description
    assert BackgroundOption.ORIGINAL.label == "Keep Original"
    assert BackgroundOption.WHITE.label == "Clean White"


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_instruction("sepia")
