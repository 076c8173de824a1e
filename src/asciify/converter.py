from __future__ import annotations

import time
from pathlib import Path

from loguru import logger
from PIL import Image

from asciify.errors import SourceTooSmall
from asciify.grid import Cell, Grid
from asciify.ramp import CharacterRamp, luma_array
from asciify.sampling import SampleBlock, block_averages

DEFAULT_BLOCK = SampleBlock(10, 10)


def _open(image: Image.Image | str | Path) -> Image.Image:
    if not isinstance(image, Image.Image):
        image = Image.open(image)
    return image


def build_grid(
    image: Image.Image,
    block: SampleBlock = DEFAULT_BLOCK,
    ramp: CharacterRamp | str | None = None,
    strict: bool = False,
) -> Grid:
    """Average each sample block of an image and quantize it to a character.

    Deterministic for a given image, block and ramp. An image smaller than
    one block gives an empty grid, or raises SourceTooSmall when ``strict``.
    """
    block = SampleBlock(*block).validated()
    if not isinstance(ramp, CharacterRamp):
        ramp = CharacterRamp.default() if ramp is None else CharacterRamp(ramp)

    start = time.perf_counter()
    averages = block_averages(image, block)
    rows, cols = averages.shape[:2]

    if rows == 0 or cols == 0:
        if strict:
            raise SourceTooSmall(image.size, tuple(block))
        logger.debug("Image {}x{} yields an empty grid for block {}x{}", *image.size, *block)
        return Grid(cells=(), dimensions=(cols, rows))

    indices = ramp.index_array(luma_array(averages))
    cells = tuple(
        Cell(ramp[int(indices[y, x])], tuple(int(c) for c in averages[y, x]))
        for y in range(rows)
        for x in range(cols)
    )
    logger.debug(
        "Sampled {}x{} image into {}x{} grid in {:.3f}s",
        *image.size,
        cols,
        rows,
        time.perf_counter() - start,
    )
    return Grid(cells=cells, dimensions=(cols, rows))


def image_to_grid(
    image: Image.Image | str | Path,
    block: SampleBlock = DEFAULT_BLOCK,
    ramp: CharacterRamp | str | None = None,
    strict: bool = False,
) -> Grid:
    return build_grid(_open(image), block, ramp, strict=strict)


def image_to_ascii(
    image: Image.Image | str | Path,
    block: SampleBlock = DEFAULT_BLOCK,
    ramp: CharacterRamp | str | None = None,
) -> str:
    """Convert an image straight to plain text, one line per grid row."""
    return image_to_grid(image, block, ramp).to_text()
