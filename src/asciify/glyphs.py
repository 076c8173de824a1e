from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from asciify.errors import RenderFailure

# A noncharacter no font maps, so rendering it gives the font's .notdef box
_NOTDEF_PROBE = "\uffff"


@dataclass(frozen=True)
class Glyph:
    coverage: np.ndarray  # (h, w) float32, 0-1
    offset: tuple[int, int]  # top-left of coverage relative to the drawing origin

    @property
    def is_blank(self) -> bool:
        return self.coverage.size == 0 or not self.coverage.any()


BLANK = Glyph(np.zeros((0, 0), dtype=np.float32), (0, 0))


def rasterize(char: str, font: ImageFont.FreeTypeFont) -> Glyph:
    """Render one character as an anti-aliased coverage mask.

    The drawing origin is the left edge at the top of the font's ascent, so
    a glyph drawn at (x, y) sits inside a cell whose top-left is (x, y).
    """
    left, top, right, bottom = font.getbbox(char)
    if right <= left or bottom <= top:
        return BLANK
    img = Image.new("L", (right - left, bottom - top), 0)
    draw = ImageDraw.Draw(img)
    draw.text((-left, -top), char, fill=255, font=font)
    return Glyph(np.asarray(img, dtype=np.float32) / 255.0, (left, top))


class GlyphAtlas:
    """Caches coverage masks per character and detects glyphs the font lacks."""

    def __init__(self, font: ImageFont.FreeTypeFont):
        self.font = font
        self._glyphs: dict[str, Glyph] = {}
        notdef = rasterize(_NOTDEF_PROBE, font)
        self._notdef = None if notdef.is_blank else notdef

    def _is_notdef(self, glyph: Glyph) -> bool:
        if self._notdef is None:
            return False
        return glyph.offset == self._notdef.offset and np.array_equal(glyph.coverage, self._notdef.coverage)

    def coverage(self, char: str) -> Glyph:
        """Glyph for a character. Raises RenderFailure if the font can't draw it.

        Whitespace is never a failure; it simply has no coverage.
        """
        glyph = self._glyphs.get(char)
        if glyph is None:
            glyph = rasterize(char, self.font)
            self._glyphs[char] = glyph
        if char.isspace():
            return BLANK
        if glyph.is_blank or self._is_notdef(glyph):
            raise RenderFailure(char)
        return glyph
