"""Collapse a codepoint -> glyph mapping to the glyphs that need rasterizing."""


def distinct_glyphs(mapping):
    """Unique glyph ids in first-seen order, each with a representative codepoint.

    Returns a dict {glyph_id: codepoint}; iteration follows ascending
    codepoint of first use so bitmap offsets are deterministic.
    """
    glyphs = {}
    for cp in sorted(mapping):
        glyphs.setdefault(mapping[cp], cp)
    return glyphs
