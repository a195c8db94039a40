"""FreeType-backed font collaborator.

Exposes the four calls the pipeline needs: has_glyph, glyph_id,
rasterize and line_metrics. Nothing else in the package touches FreeType.
"""

from collections import namedtuple

import freetype
from freetype.ft_errors import FT_Exception

from .errors import FontLoadFailure

Raster = namedtuple("Raster", ["width", "height", "advance", "x_min", "y_min", "coverage"])
LineMetrics = namedtuple("LineMetrics", ["line_height", "ascent"])

EMPTY_RASTER = Raster(0, 0, 0, 0, 0, b"")


def estimate_line_metrics(size_px):
    """Line metrics for fonts that report none."""
    return LineMetrics(size_px, int(round(0.8 * size_px)))


def round_26_6(value):
    return (value + 32) >> 6


class FreetypeFont:
    def __init__(self, face, source=None):
        self.face = face
        self.source = source
        self._size = None

    def _set_size(self, size_px):
        if self._size != size_px:
            self.face.set_pixel_sizes(0, size_px)
            self._size = size_px

    def has_glyph(self, codepoint):
        return self.face.get_char_index(codepoint) != 0

    def glyph_id(self, codepoint):
        return self.face.get_char_index(codepoint)

    def rasterize(self, glyph_id, size_px):
        if glyph_id == 0:
            return EMPTY_RASTER
        self._set_size(size_px)
        self.face.load_glyph(glyph_id, freetype.FT_LOAD_RENDER)
        glyph = self.face.glyph
        bitmap = glyph.bitmap
        width, rows, pitch = bitmap.width, bitmap.rows, abs(bitmap.pitch)
        advance = round_26_6(glyph.advance.x)
        if width == 0 or rows == 0:
            return Raster(0, 0, advance, 0, 0, b"")

        buffer = bytes(bitmap.buffer)
        coverage = bytearray()
        if bitmap.pixel_mode == freetype.FT_PIXEL_MODE_MONO:
            # bitmap strikes (BDF/PCF, embedded sbits) come back 1 bit per pixel
            for y in range(rows):
                for x in range(width):
                    byte = buffer[y * pitch + x // 8]
                    coverage.append(255 if byte & (0x80 >> (x % 8)) else 0)
        else:
            for y in range(rows):
                coverage += buffer[y * pitch:y * pitch + width]
        return Raster(width, rows, advance, glyph.bitmap_left,
                      glyph.bitmap_top - rows, bytes(coverage))

    def line_metrics(self, size_px):
        self._set_size(size_px)
        metrics = self.face.size
        line_height = round_26_6(metrics.height)
        ascent = round_26_6(metrics.ascender)
        if line_height <= 0 or ascent <= 0:
            return estimate_line_metrics(size_px)
        return LineMetrics(line_height, ascent)


def open_font(path):
    """Load a font file, raising FontLoadFailure with the reason on error."""
    try:
        face = freetype.Face(str(path))
    except (FT_Exception, OSError, ValueError) as e:
        raise FontLoadFailure(path, e) from e
    return FreetypeFont(face, source=str(path))
