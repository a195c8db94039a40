"""Shared fixtures: an in-memory fake font and a tiny generated TrueType font."""
import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from fontbake.face import EMPTY_RASTER, LineMetrics, Raster

TEST_FAMILY = "FontBake Test"


# --------------------------------------------------------------------------- #
# Fake font collaborator
# --------------------------------------------------------------------------- #
def solid_raster(width=5, height=7, advance=6, x_min=0, y_min=0):
    return Raster(width, height, advance, x_min, y_min, bytes([255]) * (width * height))


class FakeFont:
    """Glyph ids 1..n in the order chars are given; 0 means missing."""

    def __init__(self, chars, rasters=None, metrics=LineMetrics(16, 13)):
        self.cmap = {}
        for ch in chars:
            cp = ord(ch) if isinstance(ch, str) else ch
            self.cmap.setdefault(cp, len(self.cmap) + 1)
        self.rasters = rasters or {}
        self.metrics = metrics
        self.rasterized = []

    def has_glyph(self, cp):
        return cp in self.cmap

    def glyph_id(self, cp):
        return self.cmap.get(cp, 0)

    def rasterize(self, glyph_id, size_px):
        self.rasterized.append(glyph_id)
        if glyph_id == 0:
            return EMPTY_RASTER
        return self.rasters.get(glyph_id, solid_raster())

    def line_metrics(self, size_px):
        return self.metrics


class UntouchableFont:
    def __getattr__(self, name):
        raise AssertionError(f"font.{name} must not be called")


@pytest.fixture
def latin_font():
    font = FakeFont([chr(cp) for cp in range(0x20, 0x7F)])
    font.rasters[font.glyph_id(0x20)] = Raster(0, 0, 4, 0, 0, b"")
    return font


# --------------------------------------------------------------------------- #
# Generated TrueType font
# --------------------------------------------------------------------------- #
def rect_glyph(*boxes):
    pen = TTGlyphPen(None)
    for x0, y0, x1, y1 in boxes:
        pen.moveTo((x0, y0))
        pen.lineTo((x0, y1))
        pen.lineTo((x1, y1))
        pen.lineTo((x1, y0))
        pen.closePath()
    return pen.glyph()


def build_test_font(path):
    glyph_order = [".notdef", "space", "A", "B", "question"]
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({0x20: "space", 0x41: "A", 0x42: "B", 0x3F: "question"})
    fb.setupGlyf({
        ".notdef": rect_glyph((100, 0, 500, 700)),
        "space": rect_glyph(),
        "A": rect_glyph((100, 0, 600, 700)),
        "B": rect_glyph((100, 0, 300, 700), (300, 300, 600, 400)),
        "question": rect_glyph((200, 400, 500, 700), (300, 0, 400, 100)),
    })
    fb.setupHorizontalMetrics({
        ".notdef": (600, 100),
        "space": (500, 0),
        "A": (700, 100),
        "B": (700, 100),
        "question": (600, 200),
    })
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupNameTable({"familyName": TEST_FAMILY, "styleName": "Regular"})
    fb.setupPost()
    fb.setupMaxp()
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def font_dir(tmp_path_factory):
    d = tmp_path_factory.mktemp("fonts")
    build_test_font(d / "FontBakeTest-Regular.ttf")
    return d


@pytest.fixture(scope="session")
def test_font_path(font_dir):
    return font_dir / "FontBakeTest-Regular.ttf"
