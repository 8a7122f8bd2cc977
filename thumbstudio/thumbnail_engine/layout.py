"""
Hook text layout - pure math, no drawing surface.

Words are measured individually and laid out on a single centered row
with a fixed gap between them, so the spacing is controlled per font
instead of by the font's own space glyph.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

CANVAS_W = 1280
CANVAS_H = 720

# Bottom of the text run, 30px above the canvas edge
TEXT_BOTTOM_Y = 690

LONG_HOOK_CHARS = 15
LARGE_FONT_SIZE = 135
SMALL_FONT_SIZE = 100


@dataclass(frozen=True)
class WordPlacement:
    text: str
    x: float
    width: float


@dataclass(frozen=True)
class HookLayout:
    words: Tuple[WordPlacement, ...]
    font_size: int
    gap: int
    total_width: float
    start_x: float
    bottom_y: int = TEXT_BOTTOM_Y

    @property
    def is_empty(self) -> bool:
        return not self.words


def tokenize_hook(text: str) -> List[str]:
    """Upper-case the hook and split it on whitespace runs."""
    return [w for w in text.upper().split() if w]


def choose_font_size(text: str) -> int:
    """Long hooks (measured before upper-casing) get the smaller size."""
    return SMALL_FONT_SIZE if len(text) > LONG_HOOK_CHARS else LARGE_FONT_SIZE


def layout_hook(
    text: str,
    gap: int,
    measure: Callable[[str], float],
    canvas_width: int = CANVAS_W,
) -> HookLayout:
    """
    Place every word of the hook on one row, centered horizontally.

    `measure` returns a word's advance width at the chosen font size.
    """
    font_size = choose_font_size(text)
    tokens = tokenize_hook(text)
    if not tokens:
        return HookLayout((), font_size, gap, 0.0, canvas_width / 2)

    widths = [measure(token) for token in tokens]
    total_width = sum(widths) + gap * (len(tokens) - 1)
    start_x = (canvas_width - total_width) / 2

    words = []
    x = start_x
    for token, width in zip(tokens, widths):
        words.append(WordPlacement(token, x, width))
        x += width + gap

    return HookLayout(tuple(words), font_size, gap, total_width, start_x)
