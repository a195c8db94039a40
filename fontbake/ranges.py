"""Contiguous codepoint ranges over the glyph table."""

from collections import namedtuple

RangeEntry = namedtuple("RangeEntry", ["start", "length", "glyph_index"])


def build_ranges(codepoints):
    """Split ascending codepoints into maximal runs of consecutive values.

    Adjacency is purely numeric; glyph identity plays no part.
    """
    ranges = []
    start = prev = None
    first = 0
    for i, cp in enumerate(codepoints):
        if prev is None:
            start, first = cp, i
        elif cp != prev + 1:
            ranges.append(RangeEntry(start, i - first, first))
            start, first = cp, i
        prev = cp
    if start is not None:
        ranges.append(RangeEntry(start, len(codepoints) - first, first))
    return ranges


def expand_ranges(ranges):
    """Walk a range table back into (codepoint, glyph_index) pairs."""
    for r in ranges:
        for k in range(r.length):
            yield r.start + k, r.glyph_index + k
