"""Codepoint resolution: requested characters -> font glyph identifiers."""

from collections import namedtuple

from .errors import InvalidRange

MAX_CODEPOINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)

CodepointRequest = namedtuple("CodepointRequest", ["start", "end", "custom", "fallback"])
CodepointRequest.__new__.__defaults__ = ("", None)


def is_scalar_value(cp):
    return 0 <= cp <= MAX_CODEPOINT and cp not in SURROGATES


def check_range(start, end):
    if start > end or start < 0 or end > MAX_CODEPOINT:
        raise InvalidRange(start, end)


def candidate_codepoints(start, end, custom=""):
    """Every legal codepoint of [start, end] plus those of the custom text."""
    check_range(start, end)
    candidates = {cp for cp in range(start, end + 1) if cp not in SURROGATES}
    candidates.update(ord(ch) for ch in custom or "" if is_scalar_value(ord(ch)))
    return candidates


def fallback_codepoint(fallback, warnings):
    """First character of the trimmed fallback text, or None."""
    text = (fallback or "").strip()
    if not text:
        return None
    if len(text) > 1:
        warnings.append(f"Fallback '{text}' has more than one character, using U+{ord(text[0]):04X}")
    return ord(text[0])


def resolve(font, request):
    """Map every requested codepoint to a glyph identifier.

    Returns (mapping, warnings). The mapping is a dict in ascending codepoint
    order. Missing codepoints are substituted with the fallback glyph when
    that is renderable, otherwise they keep their own (empty) lookup; either
    way one warning is recorded and the codepoint stays in the mapping.
    """
    candidates = candidate_codepoints(request.start, request.end, request.custom)
    warnings = []
    fallback = fallback_codepoint(request.fallback, warnings)
    fallback_ok = fallback is not None and font.has_glyph(fallback)

    mapping = {}
    for cp in sorted(candidates):
        if font.has_glyph(cp):
            mapping[cp] = font.glyph_id(cp)
        elif fallback_ok:
            mapping[cp] = font.glyph_id(fallback)
            warnings.append(f"U+{cp:04X} missing, using fallback U+{fallback:04X}")
        else:
            mapping[cp] = font.glyph_id(cp)
            if fallback is None:
                warnings.append(f"U+{cp:04X} missing")
            else:
                warnings.append(f"U+{cp:04X} missing, fallback U+{fallback:04X} also missing")
    return mapping, warnings
