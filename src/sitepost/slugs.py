"""Collision-free slug resolution.

The resolver only asks whether a candidate slug's target path already exists.
Which directory that path lives in is decided by the caller, so the same
resolver serves posts and pages.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sitepost.utils.paths import slugify

logger = logging.getLogger(__name__)

# Suffixes -1 .. -999 are tried after the bare slug.
MAX_SLUG_SUFFIX = 999

SlugExistsProbe = Callable[[str], bool]


def resolve_slug(
    preferred: str,
    exists: SlugExistsProbe,
    *,
    safe: bool = True,
    fallback_id: Callable[[], str],
) -> str:
    """Derive a slug from ``preferred`` text.

    Args:
        preferred: Free text to build the slug from (a title or a wanted slug).
        exists: Returns True when the file for a candidate slug already exists.
        safe: When False the normalized slug is returned without any probing.
        fallback_id: Returns the post id; only called when no readable
            candidate is available.

    Returns:
        The bare slug, the first free ``<slug>-N`` candidate, or the slugified
        post id when every candidate is taken or the text has no safe characters.

    """
    base = slugify(preferred)
    if not safe:
        return base

    if base:
        if not exists(base):
            return base
        for suffix in range(1, MAX_SLUG_SUFFIX + 1):
            candidate = f"{base}-{suffix}"
            if not exists(candidate):
                return candidate
        logger.warning(
            "No free slug for %r after %d attempts, falling back to post id",
            base,
            MAX_SLUG_SUFFIX + 1,
        )

    return slugify(fallback_id())
