#!/usr/bin/env python
#-------------------------------------------------------------------------
#
#    fontbake - TTF/OTF font to C++ glyph module converter for embedded
#    text rendering
#
#    Bakes a range of codepoints (plus custom characters) into a packed
#    1-bit bitmap blob, a per-glyph metrics table and a contiguous range
#    table, substituting a fallback glyph for characters the font lacks.
#
#    Usage:
#        fontbake -f <font_file> -s <font_size> [--start A --end Z] [-o out.cppm]
#        fontbake --system-font "DejaVu Sans" -s 16 --fallback ?
#        fontbake --config job.json
#        fontbake --list-fonts
#
#-------------------------------------------------------------------------
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
#-------------------------------------------------------------------------

import argparse
import sys
from dataclasses import replace

from . import VERSION
from .bake import bake
from .emitter import NUMBER_FORMATS
from .errors import BakeError
from .face import open_font
from .job import Job, load_job, parse_codepoint, parse_ranges, validate_job
from .output import write_atomic
from .preview import build_preview
from .sysfonts import find_system_font, list_system_fonts


def codepoint_arg(text):
    try:
        return parse_codepoint(text)
    except BakeError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser():
    parser = argparse.ArgumentParser(prog="fontbake", description="TTF to C++ glyph module converter.")
    parser.add_argument('-f', '--font', dest='font_path', help='Path to the TTF/OTF font file.')
    parser.add_argument('--system-font', dest='system_font', help='Installed font family name.')
    parser.add_argument('-s', '--size', dest='size_px', type=int, help='Font size in pixels (default: 16).')
    parser.add_argument('--start', dest='range_start', type=codepoint_arg,
                        help="First codepoint: a character, U+XXXX, 0x.. or decimal (default: ' ').")
    parser.add_argument('--end', dest='range_end', type=codepoint_arg,
                        help="Last codepoint, inclusive (default: '~').")
    parser.add_argument('--custom', dest='custom_chars', help='Extra characters to include.')
    parser.add_argument('--chars', dest='chars', help='Extra codepoint ranges, e.g. "0x4E00-0x4E0F,169".')
    parser.add_argument('--fallback', dest='fallback_char', help="Character substituted for missing glyphs (default: '?').")
    parser.add_argument('--format', dest='number_format', choices=NUMBER_FORMATS, help='Bitmap literal style (default: hex).')
    parser.add_argument('--module-name', dest='module_name', help='C++ module name.')
    parser.add_argument('--export-name', dest='export_name', help='Name of the exported Font constant.')
    parser.add_argument('--no-comments', dest='comments', action='store_const', const=False, help='Omit per-glyph comments.')
    parser.add_argument('-o', '--output', dest='output', help='Output file (default: stdout).')
    parser.add_argument('--preview', dest='preview', help='Also save a PNG preview of the baked glyphs.')
    parser.add_argument('--config', dest='config', help='JSON job file; command-line options override it.')
    parser.add_argument('--list-fonts', action='store_true', help='List installed font families and exit.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')
    return parser


def job_from_args(args):
    job = load_job(args.config) if args.config else Job()
    overrides = {k: v for k, v in vars(args).items()
                 if v is not None and k not in ("config", "chars", "list_fonts")}
    job = replace(job, **overrides)
    if args.chars:
        job = replace(job, custom_chars=(job.custom_chars or "") + "".join(chr(cp) for cp in parse_ranges(args.chars)))
    return job


def run(job, log):
    font_path = job.font_path
    if job.system_font:
        font_path = find_system_font(job.system_font)
        log(f"Using system font {job.system_font}: {font_path}")

    log(f"Loading font: {font_path}")
    font = open_font(font_path)
    log(f"Baking U+{job.range_start:04X}..U+{job.range_end:04X} at {job.size_px}px...")
    result = bake(font, job.size_px, job.request(), job.emit_options())

    for warning in result.warnings:
        log(f"warning: {warning}")

    if job.output:
        write_atomic(job.output, result.code)
        log(f"{job.output} written")
    else:
        sys.stdout.write(result.code)

    if job.preview:
        build_preview(result.artifact, job.preview)
        log(f"Preview saved to {job.preview}")

    s = result.stats
    log(f"Glyphs: {s.glyph_count} ({s.distinct_glyphs} distinct), ranges: {s.range_count}, "
        f"bitmap: {s.bitmap_bytes} bytes, max glyph: {s.max_width}x{s.max_height}, "
        f"line height: {s.line_height}, baseline: {s.baseline}, "
        f"warnings: {len(result.warnings)}")
    return result


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.list_fonts:
        for family, path in list_system_fonts():
            print(f"{family}\t{path}")
        return 0

    try:
        job = job_from_args(args)
    except BakeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    errors = validate_job(job)
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    # code goes to stdout when there is no output file; keep status off it
    out = sys.stdout if job.output else sys.stderr

    def log(message):
        print(message, file=out)

    try:
        run(job, log)
    except BakeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    log("fontbake finished")
    return 0


if __name__ == '__main__':
    sys.exit(main())
