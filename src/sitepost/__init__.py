"""sitepost: read and write static-site posts and pages as front matter files."""

from sitepost.config.settings import SiteSettings, load_settings
from sitepost.data_primitives.post import Post, PostKind
from sitepost.storage import ParsedPost, PostStorage, SkippedFile

__version__ = "0.1.0"
__all__ = [
    "ParsedPost",
    "Post",
    "PostKind",
    "PostStorage",
    "SiteSettings",
    "SkippedFile",
    "load_settings",
]
