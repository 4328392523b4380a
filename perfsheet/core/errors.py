"""
Error types raised while reading and normalizing capture files.
"""

from typing import Optional


class CaptureError(Exception):
    """Base class for capture processing errors."""


class ParseError(CaptureError):
    """
    A capture document could not be parsed.

    Raised when the input is not valid JSON, cannot be read, or lacks the
    top-level shape of a known capture kind. Fatal for that file only.

    Attributes
    ----------
    source : str
        Filename (or label) of the offending document
    """

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


class InvalidEntry(CaptureError):
    """
    A single capture entry could not be normalized into a row.

    Attributes
    ----------
    index : int, optional
        1-based ordinal of the entry in its source document
    reason : str
        Why the entry was rejected
    """

    def __init__(self, index: Optional[int], reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"entry {index}: {reason}" if index is not None else reason)
