"""The in-memory post record."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from sitepost.utils.datetime_utils import utcnow


class PostKind(str, Enum):
    """Kind of content item, selecting its directory and layout."""

    POST = "post"
    PAGE = "page"


@dataclass
class Post:
    """A single post or page of a static site.

    ``source_path`` is the file backing this record on disk. It is filled in
    once, by a successful load, a save, or the first id lookup, and is never
    invalidated afterwards: changing ``slug``, ``is_page`` or the publish date
    does not move the file. Use ``PostStorage.relocate`` for that.
    """

    id: str = ""
    title: str = ""
    slug: str = ""
    is_page: bool = False
    date_published: datetime | None = None
    date_published_override: datetime | None = None
    contents: str = ""
    body_metadata: dict[str, Any] = field(default_factory=dict)
    source_path: Path | None = None

    @property
    def kind(self) -> PostKind:
        return PostKind.PAGE if self.is_page else PostKind.POST

    @property
    def effective_date(self) -> datetime | None:
        """Publish date after applying the optional override."""
        if self.date_published_override is not None:
            return self.date_published_override
        return self.date_published

    @property
    def is_bound(self) -> bool:
        return self.source_path is not None

    def publish_at(self, when: datetime) -> None:
        """Set both the natural publish date and its override."""
        self.date_published = when
        self.date_published_override = when

    def ensure_id(self) -> str:
        """Assign a new unique id if the post has none. Returns the id."""
        if not self.id:
            self.id = str(uuid.uuid4())
        return self.id

    def ensure_date_published(self) -> datetime:
        """Publish the post now if it has no publish date. Returns the effective date."""
        current = self.effective_date
        if current is None:
            current = utcnow()
            self.publish_at(current)
        return current
