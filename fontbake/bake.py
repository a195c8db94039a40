"""The bake pipeline: resolve -> dedupe -> pack -> ranges -> emit."""

from collections import namedtuple

from .dedup import distinct_glyphs
from .emitter import BakeArtifact, BitmapSlice, EmitOptions, emit
from .errors import InvalidJob
from .packer import glyph_entries, pack_glyphs
from .ranges import build_ranges
from .resolver import check_range, fallback_codepoint, resolve

BakeStats = namedtuple("BakeStats", ["glyph_count", "distinct_glyphs", "range_count",
                                     "bitmap_bytes", "max_width", "max_height",
                                     "line_height", "baseline", "text_bytes"])
BakeResult = namedtuple("BakeResult", ["code", "artifact", "warnings", "stats"])


def find_fallback_index(font, mapping, entries, fallback):
    """Glyph-table index the renderer should use for unknown codepoints."""
    if fallback is None or not font.has_glyph(fallback):
        return None
    if fallback in mapping:
        return list(mapping).index(fallback)
    fallback_glyph = font.glyph_id(fallback)
    for i, entry in enumerate(entries):
        if entry.glyph_id == fallback_glyph:
            return i
    return None


def build_artifact(font, size_px, request):
    """Run every stage short of serialization. Returns (artifact, warnings)."""
    if size_px <= 0:
        raise InvalidJob(f"Font size must be positive, got {size_px}")
    check_range(request.start, request.end)

    mapping, warnings = resolve(font, request)
    glyphs = distinct_glyphs(mapping)
    bitmap, packed = pack_glyphs(font, glyphs, size_px)
    entries = glyph_entries(mapping, packed)
    ranges = build_ranges([e.codepoint for e in entries])
    slices = [BitmapSlice(cp, packed[gid].offset, packed[gid].length) for gid, cp in glyphs.items()]

    metrics = font.line_metrics(size_px)
    fallback = fallback_codepoint(request.fallback, [])
    artifact = BakeArtifact(
        bitmap=bitmap,
        slices=slices,
        glyphs=entries,
        ranges=ranges,
        fallback_index=find_fallback_index(font, mapping, entries, fallback),
        line_height=metrics.line_height,
        baseline=metrics.ascent,
    )
    return artifact, warnings


def summarize(artifact, code):
    return BakeStats(
        glyph_count=len(artifact.glyphs),
        distinct_glyphs=len(artifact.slices),
        range_count=len(artifact.ranges),
        bitmap_bytes=len(artifact.bitmap),
        max_width=max((g.width for g in artifact.glyphs), default=0),
        max_height=max((g.height for g in artifact.glyphs), default=0),
        line_height=artifact.line_height,
        baseline=artifact.baseline,
        text_bytes=len(code.encode("utf-8")),
    )


def bake(font, size_px, request, options=None):
    """Bake `request` from `font` at `size_px` pixels into C++ source text."""
    artifact, warnings = build_artifact(font, size_px, request)
    code = emit(artifact, options or EmitOptions())
    return BakeResult(code, artifact, warnings, summarize(artifact, code))
