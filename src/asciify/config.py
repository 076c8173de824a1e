from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from asciify.charsets import DEFAULT
from asciify.errors import InvalidConfiguration
from asciify.grid import OPAQUE, Colour
from asciify.ramp import CharacterRamp
from asciify.sampling import SampleBlock

DEFAULT_SAMPLE_SCALE = 5
DEFAULT_FONT_SIZE = 25


def parse_colour(values) -> Colour:
    """Turn 3 or 4 channel values into an RGBA colour, opaque unless alpha is given."""
    values = tuple(values)
    if len(values) not in (3, 4):
        raise InvalidConfiguration(f"A colour needs 3 or 4 channel values, got {len(values)}")
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
            raise InvalidConfiguration(f"Colour channels must be integers in 0-255, got {value!r}")
    if len(values) == 3:
        values += (OPAQUE,)
    return values


@dataclass(frozen=True)
class ConversionConfig:
    sample_scale: int = DEFAULT_SAMPLE_SCALE
    ramp: str = DEFAULT
    font_size: int = DEFAULT_FONT_SIZE
    font_path: str | Path | None = None
    background: Colour | None = None
    colour: Colour | None = None
    monochrome: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        SampleBlock.square(self.sample_scale)
        CharacterRamp(self.ramp)
        if isinstance(self.font_size, bool) or not isinstance(self.font_size, int) or self.font_size <= 0:
            raise InvalidConfiguration(f"Font size must be a positive integer, got {self.font_size!r}")
        if self.background is not None:
            object.__setattr__(self, "background", parse_colour(self.background))
        if self.colour is not None:
            object.__setattr__(self, "colour", parse_colour(self.colour))

    @property
    def character_ramp(self) -> CharacterRamp:
        return CharacterRamp(self.ramp)

    def block_for(self, raster: bool) -> SampleBlock:
        """Square samples for image output, double-height samples for the terminal."""
        if raster:
            return SampleBlock.square(self.sample_scale)
        return SampleBlock.for_terminal(self.sample_scale)
