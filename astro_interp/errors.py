"""Exception types raised by the interpretation core."""


class InterpretationError(Exception):
    """Base class for every error raised by :mod:`astro_interp`."""


class StyleFileNotFoundError(InterpretationError, FileNotFoundError):
    """A single-file interpretation style could not be opened."""


class StyleNotFoundError(InterpretationError, LookupError):
    """No discovered style folder matches the requested name."""


class StyleLimitError(InterpretationError):
    """The style registry already holds the maximum number of styles."""


class MalformedKeyError(InterpretationError, ValueError):
    """A composite key (``A+B+C``) or one of its tokens could not be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Malformed key '{key}': {reason}")
        self.key = key
        self.reason = reason
