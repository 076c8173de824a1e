import pytest
from PIL import Image

from asciify.fonts import find_monospace_font

FONT_PATH = find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")


class BlankFont:
    """Stands in for a font that has no glyphs at all."""

    def getbbox(self, text):
        return (0, 0, 0, 0)


@pytest.fixture
def blank_font():
    return BlankFont()


def split_image(block_width, block_height, left, right, mode="RGB"):
    """Two blocks side by side, the left in one colour and the right in another."""
    img = Image.new(mode, (block_width * 2, block_height), left)
    img.paste(right, (block_width, 0, block_width * 2, block_height))
    return img
