"""
Font table - hook font identifiers mapped to render names, font files and
the fixed word gap used by the layout (canonical 1280x720 pixels).
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from PIL import ImageFont

from ..config import FONTS_DIR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontSpec:
    key: str
    display_name: str
    render_name: str
    files: Tuple[str, ...]  # heaviest weight first
    gap: int


FONTS = {
    "cinzel": FontSpec("cinzel", "Cinzel", "Cinzel",
                       ("Cinzel-Black.ttf", "Cinzel-ExtraBold.ttf", "Cinzel-Bold.ttf"), 25),
    "space-mono": FontSpec("space-mono", "Space Mono", "Space Mono",
                           ("SpaceMono-Bold.ttf", "SpaceMono-Regular.ttf"), 20),
    "anton": FontSpec("anton", "Anton", "Anton", ("Anton-Regular.ttf",), 35),
    "bebas": FontSpec("bebas", "Bebas", "Bebas Neue", ("BebasNeue-Regular.ttf",), 30),
    "inter-bold": FontSpec("inter-bold", "Inter Bold", "Inter",
                           ("Inter-Black.ttf", "Inter-ExtraBold.ttf", "Inter-Bold.ttf"), 20),
}

DEFAULT_FONT = "bebas"


def resolve_font(key) -> FontSpec:
    """Look up a font selection; anything unknown resolves to bebas."""
    return FONTS.get(key, FONTS[DEFAULT_FONT])


def load_font(spec: FontSpec, size: int) -> ImageFont.FreeTypeFont:
    """
    Load the font face for a spec at the given pixel size.

    Priority: fonts dir → system font path → Pillow's bundled default.
    """
    for name in spec.files:
        path = FONTS_DIR / name
        if path.exists():
            return ImageFont.truetype(str(path), size)

    if sys.platform == "win32":
        for name in spec.files:
            winpath = Path("C:/Windows/Fonts") / name
            if winpath.exists():
                return ImageFont.truetype(str(winpath), size)

    for name in spec.files:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue

    logger.warning("Font '%s' not found in %s, using default", spec.render_name, FONTS_DIR)
    return ImageFont.load_default(size=size)
