import sys
from typing import TextIO

from asciify.grid import Colour, Grid

RESET = "\033[0m"


def _foreground(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"


def render_ansi(grid: Grid, colour: Colour | None = None, monochrome: bool = False) -> str:
    """Render a grid as truecolor terminal text.

    Each character is preceded by a foreground colour escape (the cell's own
    colour, or ``colour`` when given). Every row ends with a line break and
    the colour is reset after the final cell. ``monochrome`` gives plain text.
    """
    if monochrome:
        return grid.to_text()
    if grid.is_empty:
        return ""

    lines = []
    for row in grid.rows():
        parts = []
        for cell in row:
            r, g, b = (colour or cell.colour)[:3]
            parts.append(_foreground(r, g, b) + cell.character)
        lines.append("".join(parts))
    return "\n".join(lines) + RESET + "\n"


def print_grid(grid: Grid, file: TextIO | None = None, colour: Colour | None = None, monochrome: bool = False):
    file = sys.stdout if file is None else file
    file.write(render_ansi(grid, colour=colour, monochrome=monochrome))
    file.flush()
