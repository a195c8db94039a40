"""PNG contact sheet of a baked font, drawn from the packed bitmaps."""

from PIL import Image, ImageDraw, ImageFont

from .packer import stride, unpack_bits
from .ranges import expand_ranges

FG_COLOR = (255, 255, 255)
BG_COLOR = (0, 0, 0)
LABEL_COLOR = (255, 255, 0)
HIGHLIGHT_COLOR = (255, 0, 0)
LABEL_HEIGHT = 12
PADDING = 2


def glyph_image(artifact, entry):
    """1-bit glyph as an RGB image, baseline-aligned in a line-height cell."""
    # glyphs with a negative x_offset (j, f) start left of the pen position
    shift = -min(0, entry.x_offset)
    width = max(entry.advance, entry.x_offset + entry.width, 1) + shift
    height = max(artifact.line_height, 1)
    img = Image.new("RGB", (width, height), BG_COLOR)
    if entry.width == 0 or entry.height == 0:
        return img
    length = stride(entry.width) * entry.height
    data = artifact.bitmap[entry.offset:entry.offset + length]
    top = artifact.baseline - entry.y_offset
    for y, row in enumerate(unpack_bits(data, entry.width, entry.height)):
        for x, bit in enumerate(row):
            px, py = shift + entry.x_offset + x, top + y
            if bit and 0 <= px < width and 0 <= py < height:
                img.putpixel((px, py), FG_COLOR)
    return img


def build_preview(artifact, path, columns=16, scale=3):
    """Save a grid of every glyph-table entry, labelled with its codepoint."""
    cells = list(expand_ranges(artifact.ranges))
    widest = max([max(g.advance, g.x_offset + g.width) - min(0, g.x_offset) for g in artifact.glyphs] + [8])
    cell_w = max(widest * scale, 36) + PADDING * 2
    cell_h = max(artifact.line_height, 1) * scale + LABEL_HEIGHT + PADDING * 3
    rows = max((len(cells) + columns - 1) // columns, 1)

    sheet = Image.new("RGB", (columns * cell_w, rows * cell_h), BG_COLOR)
    draw = ImageDraw.Draw(sheet)
    label_font = ImageFont.load_default()

    for i, (cp, index) in enumerate(cells):
        entry = artifact.glyphs[index]
        glyph = glyph_image(artifact, entry)
        glyph = glyph.resize((glyph.width * scale, glyph.height * scale), Image.NEAREST)
        x = (i % columns) * cell_w
        y = (i // columns) * cell_h
        sheet.paste(glyph, (x + PADDING, y + PADDING))
        label_y = y + glyph.height + PADDING * 2
        draw.text((x + PADDING, label_y), f"{cp:04X}", font=label_font, fill=LABEL_COLOR)
        if index == artifact.fallback_index:
            box = [x, y, x + cell_w - 1, y + glyph.height + PADDING * 2 - 1]
            draw.rectangle(box, outline=HIGHLIGHT_COLOR, width=2)

    sheet.save(path)
    return path
