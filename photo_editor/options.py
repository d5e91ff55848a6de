from __future__ import annotations

from enum import Enum


class BackgroundOption(str, Enum):
    """How the enhanced photo treats the original background."""

    ORIGINAL = "original"
    WHITE = "white"

    @property
    def label(self) -> str:
        return _LABELS[self][0]

    @property
    def description(self) -> str:
        return _LABELS[self][1]


DEFAULT_OPTION = BackgroundOption.WHITE

_LABELS: dict[BackgroundOption, tuple[str, str]] = {
    BackgroundOption.ORIGINAL: ("Keep Original", "Enhance photo with original background."),
    BackgroundOption.WHITE: ("Clean White", "Replace background with natural white lighting."),
}

_INSTRUCTIONS: dict[BackgroundOption, str] = {
    BackgroundOption.ORIGINAL: (
        "Enhance this photo to be a clean, modern, professional, realistic headshot with great "
        "natural lighting. Keep the original background but make it look more polished, slightly "
        "blurred, and high-quality, as if taken by a professional photographer."
    ),
    BackgroundOption.WHITE: (
        "Enhance this photo to be a clean, modern, professional, realistic headshot. Replace the "
        "background with a clean, plain white background with natural, soft studio lighting."
    ),
}


def build_instruction(option: BackgroundOption | str) -> str:
    """Prompt sent to the image model for `option`."""
    return _INSTRUCTIONS[BackgroundOption(option)]
