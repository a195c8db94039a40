"""Exceptions raised by the font baker."""


class BakeError(Exception):
    """Base class for fatal bake errors."""


class InvalidRange(BakeError):
    def __init__(self, start, end):
        super().__init__(f"Invalid codepoint range: {start} .. {end}")
        self.start = start
        self.end = end


class FontLoadFailure(BakeError):
    def __init__(self, source, reason):
        super().__init__(f"Failed to load font {source}: {reason}")
        self.source = source
        self.reason = reason


class InvalidJob(BakeError):
    """Malformed job description (bad option value, unknown config key)."""
