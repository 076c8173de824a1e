import os
import shutil
import subprocess
from pathlib import Path

from loguru import logger
from PIL import ImageFont

from asciify.errors import InvalidConfiguration

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
    "/Library/Fonts/Courier New.ttf",
    "/System/Library/Fonts/Menlo.ttc",
]


def find_monospace_font() -> str | None:
    """Find a monospace TrueType font on the system, asking fontconfig as a last resort."""
    for path in _FONT_CANDIDATES:
        if os.path.exists(path):
            return path
    if shutil.which("fc-match"):
        result = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()
    return None


def load_font(font_size: int, path: str | Path | None = None) -> ImageFont.FreeTypeFont:
    """Load a font scaled so that font_size pixels is one cell edge.

    Uses ``path`` when given, otherwise a system monospace font, otherwise
    Pillow's bundled default font.
    """
    if isinstance(font_size, bool) or not isinstance(font_size, int) or font_size <= 0:
        raise InvalidConfiguration(f"Font size must be a positive integer, got {font_size!r}")
    if path is None:
        path = find_monospace_font()
    if path is None:
        logger.warning("No monospace font found, falling back to Pillow's default font")
        return ImageFont.load_default(size=font_size)
    logger.debug("Loading font {} at {}px", path, font_size)
    return ImageFont.truetype(str(path), font_size)
