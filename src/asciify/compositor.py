from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from loguru import logger
from PIL import Image, ImageFont

from asciify.config import parse_colour
from asciify.errors import InvalidConfiguration, RenderFailure
from asciify.glyphs import Glyph, GlyphAtlas
from asciify.grid import Colour, Grid


@dataclass
class Composite:
    image: Image.Image
    failures: list[RenderFailure] = field(default_factory=list)


def blend_over(canvas: np.ndarray, x: int, y: int, coverage: np.ndarray, rgb: np.ndarray) -> None:
    """Alpha-blend a solid colour through a coverage mask onto an RGBA float canvas.

    ``canvas`` holds straight (non-premultiplied) channels in 0-1. The mask's
    top-left lands on (x, y); whatever falls outside the canvas is discarded.
    """
    h, w = coverage.shape
    canvas_h, canvas_w = canvas.shape[:2]
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + w, canvas_w), min(y + h, canvas_h)
    if x1 <= x0 or y1 <= y0:
        return

    src_a = np.rint(coverage[y0 - y : y1 - y, x0 - x : x1 - x] * 255.0)[..., None] / 255.0
    region = canvas[y0:y1, x0:x1]
    dst_rgb = region[..., :3]
    dst_a = region[..., 3:]

    out_a = src_a + dst_a * (1.0 - src_a)
    weighted = rgb * src_a + dst_rgb * dst_a * (1.0 - src_a)
    out_rgb = np.divide(weighted, out_a, out=np.zeros_like(weighted), where=out_a > 0)

    region[..., :3] = out_rgb
    region[..., 3:] = out_a


def _draw_glyph(canvas: np.ndarray, glyph: Glyph, x: int, y: int, rgb: np.ndarray) -> None:
    dx, dy = glyph.offset
    blend_over(canvas, x + dx, y + dy, glyph.coverage, rgb)


def compose(
    grid: Grid,
    font: ImageFont.FreeTypeFont,
    font_size: int,
    background: Colour | None = None,
    colour: Colour | None = None,
) -> Composite:
    """Draw every cell's character in its colour onto a new RGBA image.

    The canvas is ``(width * font_size, height * font_size)`` pixels, either
    transparent or filled with ``background``. Cells whose character the font
    can't draw are left as background and reported in ``failures``.
    """
    if isinstance(font_size, bool) or not isinstance(font_size, int) or font_size <= 0:
        raise InvalidConfiguration(f"Font size must be a positive integer, got {font_size!r}")

    size = (grid.width * font_size, grid.height * font_size)
    canvas = np.zeros((size[1], size[0], 4), dtype=np.float64)
    if background is not None:
        background = parse_colour(background)
        canvas[...] = np.asarray(background, dtype=np.float64) / 255.0

    atlas = GlyphAtlas(font)
    failures: list[RenderFailure] = []
    override = None if colour is None else np.asarray(colour[:3], dtype=np.float64) / 255.0

    for y, row in enumerate(grid.rows()):
        for x, cell in enumerate(row):
            try:
                glyph = atlas.coverage(cell.character)
            except RenderFailure as exc:
                failure = exc.at(x, y)
                logger.warning("{}; leaving cell blank", failure)
                failures.append(failure)
                continue
            if glyph.is_blank:
                continue
            rgb = override if override is not None else np.asarray(cell.colour[:3], dtype=np.float64) / 255.0
            _draw_glyph(canvas, glyph, x * font_size, y * font_size, rgb)

    pixels = np.clip(np.rint(canvas * 255.0), 0, 255).astype(np.uint8)
    image = Image.fromarray(pixels) if pixels.size else Image.new("RGBA", size, background or (0, 0, 0, 0))
    logger.debug("Composited {}x{} grid into {}x{} image", grid.width, grid.height, *size)
    return Composite(image=image, failures=failures)
