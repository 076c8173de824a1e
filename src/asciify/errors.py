class AsciifyError(Exception):
    """Base class for errors raised by asciify."""


class InvalidConfiguration(AsciifyError, ValueError):
    """A sample block, ramp, font size or colour that can't be used."""


class SourceTooSmall(AsciifyError):
    """The source image is smaller than one sample block, so the grid is empty."""

    def __init__(self, image_size: tuple[int, int], block: tuple[int, int]):
        self.image_size = image_size
        self.block = block
        super().__init__(
            f"Image of {image_size[0]}x{image_size[1]} pixels is smaller than one "
            f"{block[0]}x{block[1]} sample block"
        )


class RenderFailure(AsciifyError):
    """The font produced no usable coverage for a cell's character."""

    def __init__(self, character: str, x: int | None = None, y: int | None = None):
        self.character = character
        self.x = x
        self.y = y
        where = f" at cell ({x}, {y})" if x is not None else ""
        super().__init__(f"No glyph for {character!r} (U+{ord(character):04X}){where}")

    def at(self, x: int, y: int) -> "RenderFailure":
        """Return a copy of this failure tied to a grid position."""
        return RenderFailure(self.character, x, y)
