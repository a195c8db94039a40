"""Serialize a baked font as a C++ module of constexpr tables."""

from collections import namedtuple

DEFAULT_MODULE_NAME = "font_generated"
DEFAULT_EXPORT_NAME = "font"
NUMBER_FORMATS = ("hex", "dec", "bin")
BYTES_PER_LINE = {"hex": 12, "dec": 12, "bin": 8}

BitmapSlice = namedtuple("BitmapSlice", ["codepoint", "offset", "length"])
BakeArtifact = namedtuple("BakeArtifact", ["bitmap", "slices", "glyphs", "ranges",
                                           "fallback_index", "line_height", "baseline"])
EmitOptions = namedtuple("EmitOptions", ["number_format", "comments", "module_name", "export_name"])
EmitOptions.__new__.__defaults__ = ("hex", True, None, None)


def display_char(cp):
    """Printable-ASCII stand-in for a codepoint, for comments only."""
    return chr(cp) if 0x20 <= cp < 0x7F else "?"


def label(cp):
    return f"U+{cp:04X} '{display_char(cp)}'"


def format_byte(value, number_format):
    if number_format == "hex":
        return f"0x{value:02X}"
    if number_format == "bin":
        return f"0b{value:08b}"
    return str(value)


def format_codepoint(cp, number_format):
    return f"0x{cp:04X}" if number_format == "hex" else str(cp)


def name_or_default(name, default):
    name = (name or "").strip()
    return name or default


def emit_bitmaps(lines, artifact, options):
    per_line = BYTES_PER_LINE[options.number_format]
    lines.append("static constexpr uint8_t glyph_bitmaps[] = {")
    if not artifact.bitmap:
        # zero-length arrays are ill-formed
        lines.append(f"    {format_byte(0, options.number_format)},")
    for s in artifact.slices:
        if s.length == 0:
            continue
        if options.comments:
            lines.append(f"    // {label(s.codepoint)} @ {s.offset}")
        data = artifact.bitmap[s.offset:s.offset + s.length]
        for i in range(0, len(data), per_line):
            chunk = data[i:i + per_line]
            lines.append("    " + ", ".join(format_byte(b, options.number_format) for b in chunk) + ",")
    lines.append("};")
    lines.append("")


def emit_glyph_table(lines, artifact, options):
    if not artifact.glyphs:
        lines.append("static constexpr Glyph glyph_table[1] = {};")
        lines.append("")
        return
    lines.append("static constexpr Glyph glyph_table[] = {")
    for g in artifact.glyphs:
        if options.comments:
            lines.append(f"    // {label(g.codepoint)}")
        lines.append(f"    {{ glyph_bitmaps + {g.offset}, {g.width}, {g.height}, "
                     f"{g.advance}, {g.x_offset}, {g.y_offset} }},")
    lines.append("};")
    lines.append("")


def emit_range_table(lines, artifact, options):
    if not artifact.ranges:
        lines.append("static constexpr GlyphRange glyph_ranges[1] = {};")
        lines.append("")
        return
    lines.append("static constexpr GlyphRange glyph_ranges[] = {")
    for r in artifact.ranges:
        entry = f"    {{ {format_codepoint(r.start, options.number_format)}, {r.length}, {r.glyph_index} }},"
        if options.comments:
            entry += f"  // U+{r.start:04X}..U+{r.start + r.length - 1:04X}"
        lines.append(entry)
    lines.append("};")
    lines.append("")


def emit(artifact, options=None):
    """Render the artifact as text; same inputs always give the same bytes."""
    options = options or EmitOptions()
    if options.number_format not in NUMBER_FORMATS:
        raise ValueError(f"Unknown number format: {options.number_format}")
    module_name = name_or_default(options.module_name, DEFAULT_MODULE_NAME)
    export_name = name_or_default(options.export_name, DEFAULT_EXPORT_NAME)

    lines = [
        "// Generated by fontbake. Do not edit.",
        f"// glyphs: {len(artifact.glyphs)}, ranges: {len(artifact.ranges)}, "
        f"bitmap bytes: {len(artifact.bitmap)}",
        "",
        "module;",
        "#include <cstdint>",
        "#include <span>",
        f"export module {module_name};",
        "",
        "import ui_font;",
        "",
    ]
    emit_bitmaps(lines, artifact, options)
    emit_glyph_table(lines, artifact, options)
    emit_range_table(lines, artifact, options)

    if artifact.fallback_index is None:
        fallback = "nullptr"
    else:
        fallback = f"&glyph_table[{artifact.fallback_index}]"
    lines.append(f"export constexpr Font {export_name} = {{")
    lines.append("    .table = glyph_table,")
    lines.append("    .ranges = glyph_ranges,")
    lines.append(f"    .fallback_glyph = {fallback},")
    lines.append(f"    .line_height = {artifact.line_height},")
    lines.append(f"    .baseline = {artifact.baseline}")
    lines.append("};")
    return "\n".join(lines) + "\n"
