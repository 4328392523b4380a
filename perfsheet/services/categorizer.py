"""
URL categorization for network requests.

Groups requests into readable categories from the URL path alone, with no
configuration: static assets are recognized by extension, otherwise the
first path segment that is not a version prefix or generic wrapper names
the category.
"""
import logging
import re
from typing import Optional
from urllib.parse import urlsplit

from perfsheet.core.constants import (
    GENERAL_CATEGORY,
    STATIC_ASSET_CATEGORY,
    STATIC_ASSET_EXTENSIONS,
    WRAPPER_SEGMENTS,
)

logger = logging.getLogger(__name__)

_TRAILING_EXTENSION = re.compile(r"\.[^.]+$")
_SEPARATORS = re.compile(r"[-_]")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_WORD_START = re.compile(r"\b\w", re.ASCII)


def _url_path(url: str) -> Optional[str]:
    try:
        path = urlsplit(url).path
    except ValueError:
        return None
    return path or "/"


def is_static_asset(path: str) -> bool:
    """
    Check whether a URL path ends in a static asset extension.

    The extension is whatever follows the last '.' of the whole path,
    compared case-insensitively.
    """
    return path.rsplit(".", 1)[-1].lower() in STATIC_ASSET_EXTENSIONS


def category_seed(path: str) -> Optional[str]:
    """
    Find the first path segment that is not a wrapper segment.

    Parameters
    ----
    path : str
        URL path

    Returns
    ----
    str or None
        Seed segment, or None if every segment is a wrapper
    """
    for segment in path.split("/"):
        if segment and segment.lower() not in WRAPPER_SEGMENTS:
            return segment
    return None


def humanize_segment(segment: str) -> str:
    """
    Turn a path segment into a Title Case label.

    'user_profile.json' -> 'User Profile', 'orderHistory' -> 'Order History'.
    """
    label = _TRAILING_EXTENSION.sub("", segment)
    label = _SEPARATORS.sub(" ", label)
    label = _CAMEL_BOUNDARY.sub(r"\1 \2", label)
    label = _WORD_START.sub(lambda m: m.group(0).upper(), label)
    return label.strip()


def categorize(url: str) -> str:
    """
    Categorize a request URL.

    1. A static asset extension returns 'Static Asset'.
    2. Otherwise the first non-wrapper path segment is humanized.
    3. No usable segment returns 'General'.

    Never raises; an unparseable URL is 'General'.

    Parameters
    ----
    url : str
        Request URL

    Returns
    ----
    str
        Category label
    """
    path = _url_path(url)
    if path is None:
        logger.debug("Unparseable URL categorized as %s: %s", GENERAL_CATEGORY, url)
        return GENERAL_CATEGORY

    if is_static_asset(path):
        return STATIC_ASSET_CATEGORY

    seed = category_seed(path)
    if seed is None:
        return GENERAL_CATEGORY

    return humanize_segment(seed) or GENERAL_CATEGORY
