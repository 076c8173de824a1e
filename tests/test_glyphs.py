import numpy as np
import pytest

from asciify.errors import RenderFailure
from asciify.fonts import load_font
from asciify.glyphs import GlyphAtlas, rasterize
from tests.conftest import FONT_PATH, needs_font


def test_font_without_glyphs_fails(blank_font):
    atlas = GlyphAtlas(blank_font)
    with pytest.raises(RenderFailure) as excinfo:
        atlas.coverage("#")
    assert excinfo.value.character == "#"


def test_whitespace_is_never_a_failure(blank_font):
    atlas = GlyphAtlas(blank_font)
    assert atlas.coverage(" ").is_blank
    assert atlas.coverage("\t").is_blank


def test_failure_can_be_tied_to_a_cell():
    failure = RenderFailure("x").at(3, 4)
    assert (failure.character, failure.x, failure.y) == ("x", 3, 4)
    assert "(3, 4)" in str(failure)


@needs_font
def test_coverage_in_range():
    font = load_font(16, FONT_PATH)
    atlas = GlyphAtlas(font)
    for char in "#@ABCxyz":
        glyph = atlas.coverage(char)
        assert glyph.coverage.dtype == np.float32
        assert glyph.coverage.min() >= 0.0
        assert glyph.coverage.max() <= 1.0


@needs_font
def test_dense_char_has_ink():
    atlas = GlyphAtlas(load_font(16, FONT_PATH))
    assert atlas.coverage("@").coverage.sum() > 0.0


@needs_font
def test_space_is_blank():
    atlas = GlyphAtlas(load_font(16, FONT_PATH))
    assert atlas.coverage(" ").is_blank


@needs_font
def test_glyph_sits_inside_its_cell():
    font = load_font(16, FONT_PATH)
    glyph = rasterize("M", font)
    _, dy = glyph.offset
    assert dy >= 0
    assert dy < 16
    assert not glyph.is_blank


@needs_font
def test_noncharacter_is_reported_missing():
    atlas = GlyphAtlas(load_font(16, FONT_PATH))
    with pytest.raises(RenderFailure):
        atlas.coverage("\uffff")


@needs_font
def test_coverage_is_cached():
    atlas = GlyphAtlas(load_font(16, FONT_PATH))
    assert atlas.coverage("A") is atlas.coverage("A")
