from __future__ import annotations

from typing import NamedTuple

import numpy as np
from PIL import Image

from asciify.errors import InvalidConfiguration

# Channel sums for a whole block, wide enough that no block size can overflow
_ACCUMULATOR = np.uint64


class SampleBlock(NamedTuple):
    """The width x height pixel footprint averaged into one cell."""

    width: int
    height: int

    @classmethod
    def square(cls, scale: int) -> SampleBlock:
        return cls(scale, scale).validated()

    @classmethod
    def for_terminal(cls, scale: int) -> SampleBlock:
        """Twice as tall as wide, since terminal character cells are roughly 1:2."""
        return cls(scale, scale * 2).validated()

    def validated(self) -> SampleBlock:
        for name, value in zip(self._fields, self):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidConfiguration(f"Sample block {name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidConfiguration(f"Sample block {name} must be positive, got {value}")
        return self

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


def grid_shape(image_size: tuple[int, int], block: SampleBlock) -> tuple[int, int]:
    """Number of (columns, rows) of whole blocks that fit in an image. Remainders are dropped."""
    block = SampleBlock(*block).validated()
    return image_size[0] // block.width, image_size[1] // block.height


def block_averages(image: Image.Image, block: SampleBlock) -> np.ndarray:
    """Average RGBA colour of every whole sample block in an image.

    Each channel is summed over the block's pixels and divided once by the
    pixel count (floor division). Images without alpha are treated as opaque.

    Returns a uint8 array of shape (rows, cols, 4) in row-major block order.
    """
    block = SampleBlock(*block).validated()
    cols, rows = grid_shape(image.size, block)
    if rows == 0 or cols == 0:
        return np.zeros((rows, cols, 4), dtype=np.uint8)

    if image.mode != "RGBA":
        image = image.convert("RGBA")
    arr = np.asarray(image, dtype=np.uint8)

    bw, bh = block
    # Trim to exact grid and reshape into (rows, block_h, cols, block_w, 4)
    trimmed = arr[: rows * bh, : cols * bw]
    cells = trimmed.reshape(rows, bh, cols, bw, 4)

    sums = cells.sum(axis=(1, 3), dtype=_ACCUMULATOR)
    return (sums // block.pixel_count).astype(np.uint8)
