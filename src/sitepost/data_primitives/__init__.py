"""Data primitives for sitepost."""

from sitepost.data_primitives.post import Post, PostKind

__all__ = ["Post", "PostKind"]
