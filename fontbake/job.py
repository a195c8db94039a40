"""Job description: defaults, codepoint parsing, JSON job files, validation."""

import json
from dataclasses import dataclass, fields, replace

from .emitter import DEFAULT_EXPORT_NAME, DEFAULT_MODULE_NAME, EmitOptions, NUMBER_FORMATS
from .errors import InvalidJob
from .resolver import MAX_CODEPOINT, CodepointRequest


@dataclass
class Job:
    font_path: str = None
    system_font: str = None
    size_px: int = 16
    range_start: int = 0x20
    range_end: int = 0x7E
    custom_chars: str = ""
    fallback_char: str = "?"
    number_format: str = "hex"
    module_name: str = DEFAULT_MODULE_NAME
    export_name: str = DEFAULT_EXPORT_NAME
    comments: bool = True
    output: str = None
    preview: str = None

    def request(self):
        return CodepointRequest(self.range_start, self.range_end, self.custom_chars, self.fallback_char)

    def emit_options(self):
        return EmitOptions(self.number_format, self.comments, self.module_name, self.export_name)


def parse_codepoint(text):
    """'A' -> 65, 'U+0041' / '0x41' -> 65, '65' -> 65."""
    if isinstance(text, int):
        return text
    if not isinstance(text, str) or not text:
        raise InvalidJob(f"Invalid codepoint: {text!r}")
    if len(text) == 1:
        return ord(text)
    try:
        if text[:2].upper() == "U+":
            return int(text[2:], 16)
        return int(text, 0)
    except ValueError:
        raise InvalidJob(f"Invalid codepoint: {text!r}") from None


def parse_ranges(text):
    """'32-126,0x4E00-0x4E0F,A' -> sorted, deduplicated codepoints."""
    codepoints = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        # a lone '-' is the character itself, not a range
        if "-" in part[1:]:
            start, _, end = part[1:].partition("-")
            start, end = parse_codepoint(part[0] + start), parse_codepoint(end)
            if start > end:
                raise InvalidJob(f"Invalid range: {part}")
        else:
            start = end = parse_codepoint(part)
        if start < 0 or end > MAX_CODEPOINT:
            raise InvalidJob(f"Codepoint out of range 0..0x10FFFF: {part}")
        codepoints.update(range(start, end + 1))
    return sorted(codepoints)


def load_job(path, base=None):
    """Read a JSON job file; keys are Job field names."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise InvalidJob(f"Cannot read job file {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidJob(f"Job file {path} must contain a JSON object")

    known = {f.name for f in fields(Job)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidJob(f"Unknown job keys in {path}: {', '.join(unknown)}")
    for key in ("range_start", "range_end"):
        if key in data:
            data[key] = parse_codepoint(data[key])
    return replace(base or Job(), **data)


def validate_job(job):
    """Return a list of problems; empty when the job can run."""
    errors = []
    if not job.font_path and not job.system_font:
        errors.append("No font given: use a font file or a system font name.")
    if job.font_path and job.system_font:
        errors.append("Give either a font file or a system font name, not both.")
    if not isinstance(job.size_px, int) or job.size_px <= 0:
        errors.append(f"Font size must be a positive integer, got {job.size_px!r}.")
    if job.number_format not in NUMBER_FORMATS:
        errors.append(f"Number format must be one of {', '.join(NUMBER_FORMATS)}.")
    if job.fallback_char is not None and not isinstance(job.fallback_char, str):
        errors.append(f"Fallback must be a character, got {job.fallback_char!r}.")
    if not isinstance(job.custom_chars, str):
        errors.append(f"Custom characters must be a string, got {job.custom_chars!r}.")
    if job.range_start > job.range_end:
        errors.append(f"Range start U+{job.range_start:04X} is after range end U+{job.range_end:04X}.")
    return errors
