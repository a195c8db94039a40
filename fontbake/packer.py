"""Rasterize distinct glyphs and pack them into one 1-bit bitmap blob."""

from collections import namedtuple

THRESHOLD = 128

PackedGlyph = namedtuple("PackedGlyph", ["offset", "length", "width", "height",
                                         "advance", "x_offset", "y_offset"])
GlyphEntry = namedtuple("GlyphEntry", ["codepoint", "glyph_id", "offset", "width", "height",
                                       "advance", "x_offset", "y_offset"])


def stride(width):
    return (width + 7) // 8


def pack_coverage(width, height, coverage):
    """Grayscale coverage -> row-major, MSB-first, byte-aligned 1-bit rows."""
    row_bytes = stride(width)
    packed = bytearray(row_bytes * height)
    for y in range(height):
        row = y * width
        for x in range(width):
            if coverage[row + x] >= THRESHOLD:
                packed[y * row_bytes + (x >> 3)] |= 0x80 >> (x & 7)
    return bytes(packed)


def unpack_bits(data, width, height):
    """Inverse of pack_coverage; returns rows of booleans."""
    row_bytes = stride(width)
    return [[bool(data[y * row_bytes + (x >> 3)] & (0x80 >> (x & 7))) for x in range(width)]
            for y in range(height)]


def pack_glyphs(font, glyphs, size_px):
    """Rasterize each glyph id once, appending it to a shared buffer.

    `glyphs` iterates glyph ids in packing order. Returns (bitmap bytes,
    {glyph_id: PackedGlyph}).
    """
    bitmap = bytearray()
    packed = {}
    for glyph_id in glyphs:
        raster = font.rasterize(glyph_id, size_px)
        offset = len(bitmap)
        if raster.width == 0 or raster.height == 0:
            packed[glyph_id] = PackedGlyph(offset, 0, 0, 0, raster.advance, 0, 0)
            continue
        data = pack_coverage(raster.width, raster.height, raster.coverage)
        bitmap += data
        # y_offset: glyph top to baseline, y-down
        packed[glyph_id] = PackedGlyph(offset, len(data), raster.width, raster.height,
                                       raster.advance, raster.x_min,
                                       raster.y_min + raster.height)
    return bytes(bitmap), packed


def glyph_entries(mapping, packed):
    """One GlyphEntry per codepoint, ascending; shared glyphs share offsets."""
    entries = []
    for cp in sorted(mapping):
        glyph_id = mapping[cp]
        p = packed[glyph_id]
        entries.append(GlyphEntry(cp, glyph_id, p.offset, p.width, p.height,
                                  p.advance, p.x_offset, p.y_offset))
    return entries
