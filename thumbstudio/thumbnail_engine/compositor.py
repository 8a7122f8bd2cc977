"""
Compositor - flattens a generated image and its hook text into the final
1280x720 PNG.

Layer order: photo (cover fit) → bottom gradient → per-word shadow → word.
The output depends only on the RenderSpec, so identical inputs always give
byte-identical PNGs.
"""

import io
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageOps, UnidentifiedImageError

from ..config import EXPORT_PREFIX, OUTPUT_DIR
from ..errors import ImageLoadError, RenderUnavailable
from .fonts import load_font, resolve_font
from .layout import CANVAS_H, CANVAS_W, HookLayout, choose_font_size, layout_hook

logger = logging.getLogger(__name__)

# Gradient: (offset within the span, alpha)
GRADIENT_TOP = 450
GRADIENT_BOTTOM = 720
GRADIENT_STOPS = ((0.0, 0.0), (0.6, 0.75), (1.0, 0.95))

TEXT_COLOR = (255, 255, 255, 255)
SHADOW_COLOR = (0, 0, 0)
SHADOW_BLUR = 35  # canvas-style blur; Gaussian sigma is half of it
SHADOW_OFFSET = (0, 15)


@dataclass(frozen=True)
class RenderSpec:
    image: bytes
    hook_text: str
    font: str = "bebas"


def render(spec: RenderSpec) -> bytes:
    """Render the thumbnail and return it encoded as PNG."""
    photo = _decode(spec.image)
    canvas = _new_canvas()

    canvas.paste(ImageOps.fit(photo, (CANVAS_W, CANVAS_H), Image.Resampling.LANCZOS), (0, 0))
    canvas = Image.alpha_composite(canvas, _bottom_gradient(CANVAS_W, CANVAS_H))

    font_spec = resolve_font(spec.font)
    size = choose_font_size(spec.hook_text)
    try:
        font = load_font(font_spec, size)
    except OSError as e:
        raise RenderUnavailable(f"Cannot load font '{font_spec.render_name}': {e}")

    layout = layout_hook(spec.hook_text, font_spec.gap, font.getlength)
    if not layout.is_empty:
        canvas = _draw_hook(canvas, layout, font)
        logger.debug(
            "Hook %r: %s %dpx, start_x=%.1f, width=%.1f",
            spec.hook_text, font_spec.render_name, size, layout.start_x, layout.total_width,
        )

    buf = io.BytesIO()
    canvas.convert("RGB").save(buf, "PNG")
    return buf.getvalue()


def export(
    spec: RenderSpec,
    output_dir: Optional[Path] = None,
    prefix: str = EXPORT_PREFIX,
) -> Path:
    """Render and write `<prefix>-<timestamp>.png`. Returns the written path."""
    data = render(spec)
    out_dir = Path(output_dir) if output_dir else OUTPUT_DIR
    out_dir.mkdir(parents=True, exist_ok=True)

    stamp = int(time.time() * 1000)
    out_path = out_dir / f"{prefix}-{stamp}.png"
    while out_path.exists():
        stamp += 1
        out_path = out_dir / f"{prefix}-{stamp}.png"

    out_path.write_bytes(data)
    logger.info("Exported %s (%dx%d, %d bytes)", out_path.name, CANVAS_W, CANVAS_H, len(data))
    return out_path


# ── Helpers ────────────────────────────────────────────────────────────

def _decode(data: bytes) -> Image.Image:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.convert("RGB")
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"Cannot decode source image: {e}")


def _new_canvas() -> Image.Image:
    try:
        return Image.new("RGBA", (CANVAS_W, CANVAS_H), (0, 0, 0, 255))
    except (MemoryError, ValueError) as e:
        raise RenderUnavailable(f"Cannot allocate {CANVAS_W}x{CANVAS_H} canvas: {e}")


def _gradient_alpha(y: np.ndarray) -> np.ndarray:
    """Alpha (0..1) of the bottom gradient at canvas rows y."""
    offsets = np.clip((y - GRADIENT_TOP) / (GRADIENT_BOTTOM - GRADIENT_TOP), 0.0, 1.0)
    stops_x = [s[0] for s in GRADIENT_STOPS]
    stops_a = [s[1] for s in GRADIENT_STOPS]
    return np.interp(offsets, stops_x, stops_a)


def _bottom_gradient(w: int, h: int) -> Image.Image:
    """Full-canvas black overlay darkening the lower third."""
    rows = np.arange(h, dtype=np.float64) + 0.5  # pixel centers
    alpha = np.rint(_gradient_alpha(rows) * 255).astype(np.uint8)

    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[:, :, 3] = alpha[:, None]
    return Image.fromarray(arr, "RGBA")


def _draw_hook(canvas: Image.Image, layout: HookLayout, font) -> Image.Image:
    """Draw every word with its own shadow pass, left to right."""
    dx, dy = SHADOW_OFFSET
    for word in layout.words:
        mask = Image.new("L", canvas.size, 0)
        ImageDraw.Draw(mask).text(
            (word.x + dx, layout.bottom_y + dy), word.text, font=font, fill=255, anchor="ld",
        )
        shadow = Image.new("RGBA", canvas.size, (*SHADOW_COLOR, 0))
        shadow.putalpha(mask.filter(ImageFilter.GaussianBlur(radius=SHADOW_BLUR / 2)))
        canvas = Image.alpha_composite(canvas, shadow)

        glyphs = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        ImageDraw.Draw(glyphs).text(
            (word.x, layout.bottom_y), word.text, font=font, fill=TEXT_COLOR, anchor="ld",
        )
        canvas = Image.alpha_composite(canvas, glyphs)
    return canvas
