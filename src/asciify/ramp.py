from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from asciify.charsets import DEFAULT, SOLID
from asciify.errors import InvalidConfiguration

# ITU-R 601-2 weights in 16.16 fixed point, the same ones Pillow uses for convert("L")
_LUMA_R = 19595
_LUMA_G = 38470
_LUMA_B = 7471
_LUMA_ROUND = 0x8000

LUMA_LEVELS = 256


def luma(r: int, g: int, b: int) -> int:
    """Perceptual brightness of an 8-bit RGB colour, 0-255."""
    return (r * _LUMA_R + g * _LUMA_G + b * _LUMA_B + _LUMA_ROUND) >> 16


def luma_array(rgb: np.ndarray) -> np.ndarray:
    """Vectorized luma for an array whose last axis holds at least R, G, B."""
    channels = np.asarray(rgb, dtype=np.int64)
    weighted = channels[..., 0] * _LUMA_R + channels[..., 1] * _LUMA_G + channels[..., 2] * _LUMA_B
    return ((weighted + _LUMA_ROUND) >> 16).astype(np.uint8)


@dataclass(frozen=True)
class CharacterRamp:
    """Ordered characters, one per equal-width luma bucket.

    Bucket 0 covers the darkest luma values. Nothing is reordered: whatever
    order the caller supplies is the order the buckets map to.
    """

    characters: tuple[str, ...]

    def __init__(self, characters: str | Iterable[str] = DEFAULT):
        chars = tuple(characters)
        if not chars:
            raise InvalidConfiguration("Character ramp must contain at least one character")
        for char in chars:
            if not isinstance(char, str) or len(char) != 1:
                raise InvalidConfiguration(f"Ramp entries must be single characters, got {char!r}")
        object.__setattr__(self, "characters", chars)

    @classmethod
    def default(cls) -> CharacterRamp:
        return cls(DEFAULT)

    @classmethod
    def solid(cls) -> CharacterRamp:
        return cls(SOLID)

    def __len__(self) -> int:
        return len(self.characters)

    def __iter__(self) -> Iterator[str]:
        return iter(self.characters)

    def __getitem__(self, index: int) -> str:
        return self.characters[index]

    def __str__(self) -> str:
        return "".join(self.characters)

    def index_for(self, value: int) -> int:
        """Bucket index for a luma value: floor(value * N / 256), clamped to [0, N-1]."""
        n = len(self.characters)
        index = int(value) * n // LUMA_LEVELS
        return min(max(index, 0), n - 1)

    def index_array(self, values: np.ndarray) -> np.ndarray:
        n = len(self.characters)
        indices = np.asarray(values, dtype=np.int64) * n // LUMA_LEVELS
        return np.clip(indices, 0, n - 1)

    def character_for(self, colour: Sequence[int]) -> str:
        """Quantize a colour to a character by its luma. Alpha is ignored."""
        return self.characters[self.index_for(luma(colour[0], colour[1], colour[2]))]
