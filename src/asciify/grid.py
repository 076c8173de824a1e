from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

Colour = tuple[int, int, int, int]

OPAQUE = 255


@dataclass(frozen=True)
class Cell:
    character: str
    colour: Colour = (0, 0, 0, OPAQUE)


@dataclass(frozen=True)
class Grid:
    """Row-major cells of a converted image.

    ``grid[x, y]`` is ``cells[x + width * y]``; coordinates outside the grid
    raise ``IndexError`` rather than wrapping.
    """

    cells: tuple[Cell, ...]
    dimensions: tuple[int, int]

    def __post_init__(self):
        object.__setattr__(self, "cells", tuple(self.cells))
        width, height = self.dimensions
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must not be negative, got {self.dimensions}")
        if len(self.cells) != width * height:
            raise ValueError(f"Grid of {width}x{height} needs {width * height} cells, got {len(self.cells)}")

    @classmethod
    def empty(cls) -> Grid:
        return cls(cells=(), dimensions=(0, 0))

    @property
    def width(self) -> int:
        return self.dimensions[0]

    @property
    def height(self) -> int:
        return self.dimensions[1]

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __getitem__(self, position: tuple[int, int]) -> Cell:
        x, y = position
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) is outside a {self.width}x{self.height} grid")
        return self.cells[x + self.width * y]

    def rows(self) -> Iterator[tuple[Cell, ...]]:
        for y in range(self.height):
            start = y * self.width
            yield self.cells[start : start + self.width]

    def characters(self) -> str:
        """All characters in row-major order, without line breaks."""
        return "".join(cell.character for cell in self.cells)

    def to_text(self) -> str:
        if self.is_empty:
            return ""
        return "".join("".join(cell.character for cell in row) + "\n" for row in self.rows())

    def __str__(self) -> str:
        return self.to_text()
