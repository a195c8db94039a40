"""Bake fonts into packed 1-bit glyph tables for embedded renderers."""

from .bake import BakeResult, BakeStats, bake, build_artifact
from .emitter import BakeArtifact, EmitOptions, emit
from .errors import BakeError, FontLoadFailure, InvalidJob, InvalidRange
from .resolver import CodepointRequest, resolve

VERSION = '0.1.0'

__all__ = [
    "VERSION",
    "BakeArtifact",
    "BakeError",
    "BakeResult",
    "BakeStats",
    "CodepointRequest",
    "EmitOptions",
    "FontLoadFailure",
    "InvalidJob",
    "InvalidRange",
    "bake",
    "build_artifact",
    "emit",
    "resolve",
]
