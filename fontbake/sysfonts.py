"""Find installed fonts by family name using fontTools' name table."""

import os
import struct
import sys
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from .errors import FontLoadFailure

FONT_EXTENSIONS = {".ttf", ".otf"}
FAMILY_NAME_IDS = (16, 1)
FULL_NAME_ID = 4


def font_dirs():
    """Existing font directories for this platform."""
    home = Path.home()
    if sys.platform == "win32":
        dirs = [Path(os.environ.get("WINDIR", "C:/Windows")) / "Fonts"]
        local = os.environ.get("LOCALAPPDATA")
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
    elif sys.platform == "darwin":
        dirs = [Path("/System/Library/Fonts"), Path("/Library/Fonts"), home / "Library" / "Fonts"]
    else:
        dirs = [Path("/usr/share/fonts"), Path("/usr/local/share/fonts"),
                home / ".fonts", home / ".local" / "share" / "fonts"]
    return [d for d in dirs if d.is_dir()]


def font_names(path):
    """(family, full name) from the font's name table, or None if unreadable."""
    try:
        tt = TTFont(str(path), lazy=True)
    except (TTLibError, OSError, ValueError, AssertionError, struct.error):
        return None
    try:
        if "name" not in tt:
            return None
        name = tt["name"]
        family = None
        for name_id in FAMILY_NAME_IDS:
            family = name.getDebugName(name_id)
            if family:
                break
        full = name.getDebugName(FULL_NAME_ID) or family
    finally:
        tt.close()
    if not family:
        return None
    return family, full


def scan_fonts(dirs=None):
    """Yield (family, full name, path) for every readable font file."""
    for d in font_dirs() if dirs is None else dirs:
        for p in sorted(Path(d).rglob("*")):
            if p.suffix.lower() not in FONT_EXTENSIONS or not p.is_file():
                continue
            names = font_names(p)
            if names:
                yield names[0], names[1], p


def list_system_fonts(dirs=None):
    """Sorted (family, path) pairs; rescans on every call."""
    return sorted((family, str(path)) for family, _, path in scan_fonts(dirs))


def find_system_font(family, dirs=None):
    """Path of the installed font best matching `family`.

    Matches family or full name case-insensitively, preferring the
    regular face.
    """
    wanted = family.strip().lower()
    best = None
    for fam, full, path in scan_fonts(dirs):
        fam_l, full_l = fam.lower(), (full or "").lower()
        if wanted not in (fam_l, full_l):
            continue
        score = 0
        if full_l == wanted:
            score = 3
        elif "regular" in full_l or full_l == fam_l:
            score = 2
        elif fam_l == wanted:
            score = 1
        if best is None or score > best[0]:
            best = (score, path)
    if best is None:
        raise FontLoadFailure(family, "no installed font with that family name")
    return str(best[1])
