"""
Readers for HAR and Lighthouse capture files.
"""

from .capture_reader import detect_kind, load_capture, parse_capture

__all__ = [
    "detect_kind",
    "load_capture",
    "parse_capture",
]
