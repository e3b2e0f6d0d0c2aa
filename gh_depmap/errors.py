"""Exceptions raised by gh-depmap."""


class GhDepmapError(Exception):
    """Base class for gh-depmap errors."""


class InputDecodeError(GhDepmapError):
    """An input document or record could not be decoded.

    Args:
        source: Name of the offending input (file path or ``<stdin>``)
        message: What was wrong with it
    """

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")
