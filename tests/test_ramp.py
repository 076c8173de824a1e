import numpy as np
import pytest
from PIL import Image

from asciify.charsets import DEFAULT, SOLID
from asciify.errors import InvalidConfiguration
from asciify.ramp import CharacterRamp, luma, luma_array


@pytest.mark.parametrize("n", [1, 2, 10, 256])
def test_darkest_and_brightest_buckets(n):
    ramp = CharacterRamp("".join(chr(0x100 + i) for i in range(n)))
    assert ramp.index_for(0) == 0
    assert ramp.index_for(255) == n - 1


def test_index_is_floor_of_scaled_luma():
    ramp = CharacterRamp(DEFAULT)
    for v in range(256):
        assert ramp.index_for(v) == v * 10 // 256


def test_uneven_buckets_boundaries():
    # 256 doesn't divide by 3, so buckets are 86, 85 and 85 values wide
    ramp = CharacterRamp("abc")
    assert ramp.index_for(85) == 0
    assert ramp.index_for(86) == 1
    assert ramp.index_for(170) == 1
    assert ramp.index_for(171) == 2
    assert ramp.index_for(255) == 2


def test_index_never_decreases_with_luma():
    for ramp in (CharacterRamp(DEFAULT), CharacterRamp("ab"), CharacterRamp("abcdefg")):
        indices = [ramp.index_for(v) for v in range(256)]
        assert indices == sorted(indices)


def test_out_of_range_luma_is_clamped():
    ramp = CharacterRamp(DEFAULT)
    assert ramp.index_for(-5) == 0
    assert ramp.index_for(300) == 9


def test_index_array_matches_scalar():
    ramp = CharacterRamp(DEFAULT)
    values = np.arange(256, dtype=np.uint8).reshape(16, 16)
    expected = np.array([[ramp.index_for(int(v)) for v in row] for row in values])
    np.testing.assert_array_equal(ramp.index_array(values), expected)


def test_ramp_order_is_preserved():
    ramp = CharacterRamp("@ ")
    assert ramp.character_for((0, 0, 0, 255)) == "@"
    assert ramp.character_for((255, 255, 255, 255)) == " "


def test_character_for_ignores_alpha():
    ramp = CharacterRamp(DEFAULT)
    assert ramp.character_for((255, 255, 255, 0)) == ramp.character_for((255, 255, 255, 255)) == "@"


@pytest.mark.parametrize(
    "rgb",
    [(0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 255, 0), (0, 0, 255), (12, 200, 99), (128, 128, 128)],
)
def test_luma_matches_pillow(rgb):
    expected = Image.new("RGB", (1, 1), rgb).convert("L").getpixel((0, 0))
    assert luma(*rgb) == expected
    assert luma_array(np.array([rgb]))[0] == expected


def test_white_luma_is_full_scale():
    assert luma(255, 255, 255) == 255


def test_empty_ramp_is_rejected():
    with pytest.raises(InvalidConfiguration):
        CharacterRamp("")


def test_multi_character_entries_are_rejected():
    with pytest.raises(InvalidConfiguration):
        CharacterRamp(["ab", "c"])


def test_named_constructors():
    assert str(CharacterRamp.default()) == DEFAULT
    assert str(CharacterRamp.solid()) == SOLID
    assert len(CharacterRamp.solid()) == 1
