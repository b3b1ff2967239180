"""Utility modules for sitepost."""

from sitepost.utils.datetime_utils import coerce_datetime, parse_datetime_flexible, utcnow
from sitepost.utils.filesystem import LocalFileSystem
from sitepost.utils.paths import PathTraversalError, safe_path_join, slugify

__all__ = [
    "LocalFileSystem",
    "PathTraversalError",
    "coerce_datetime",
    "parse_datetime_flexible",
    "safe_path_join",
    "slugify",
    "utcnow",
]
