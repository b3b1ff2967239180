"""Filename and URL conventions for posts and pages.

Published files are named ``YYYY-MM-DD-<slug><ext>`` from the post's
effective publish date and slug. Posts and pages share the filename
template; only the directory differs, and pages use their own directory
only when paging is enabled for the site.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sitepost.data_primitives.post import Post, PostKind
from sitepost.exceptions import MissingPublishDateError, UnsupportedPostKindError
from sitepost.utils.paths import safe_path_join

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from sitepost.config.settings import SiteSettings

FILENAME_DATE_FORMAT = "%Y-%m-%d"


class PostPathConvention:
    """Maps posts to directories, filenames and site URLs for one site."""

    def __init__(self, settings: SiteSettings) -> None:
        self.settings = settings
        self._filename_slug = re.compile(
            r"^(?:.*?)\d{4}-\d{2}-\d{2}-(.*?)" + re.escape(settings.file_extension) + r"$"
        )

    def filename_for(self, date: datetime, slug: str) -> str:
        return f"{date.strftime(FILENAME_DATE_FORMAT)}-{slug}{self.settings.file_extension}"

    def directory_for(self, is_page: bool) -> Path:
        if is_page and self.settings.pages_enabled:
            return self.settings.pages_dir
        return self.settings.posts_dir

    def content_dirs(self) -> list[Path]:
        """Directories that may hold published files, posts first."""
        dirs = [self.settings.posts_dir]
        if self.settings.pages_enabled and self.settings.pages_dir not in dirs:
            dirs.append(self.settings.pages_dir)
        return dirs

    def path_for_slug(self, post: Post, slug: str) -> Path:
        """Return where ``post`` would live if it had ``slug``."""
        date = post.effective_date
        if date is None:
            raise MissingPublishDateError(post.id or post.title)
        directory = self.directory_for(post.is_page)
        return safe_path_join(directory, self.filename_for(date, slug))

    def slug_from_filename(self, filename: str) -> str:
        """Extract the slug from a published filename, or ``""`` if it does not match."""
        match = self._filename_slug.match(filename)
        return match.group(1) if match else ""

    def layout_for(self, is_page: bool) -> str:
        return self.settings.page_layout if is_page else self.settings.post_layout

    def is_page_layout(self, layout: object) -> bool:
        return layout == self.settings.page_layout

    def site_path(self, post: Post) -> str:
        """Return the site URL path of a post, e.g. ``/2019/01/02/hello.html``."""
        if post.is_page:
            raise UnsupportedPostKindError(PostKind.PAGE.value, "site_path")
        date = post.effective_date
        if date is None:
            raise MissingPublishDateError(post.id or post.title)
        return (
            self.settings.post_url_format.replace("%y", date.strftime("%Y"))
            .replace("%m", date.strftime("%m"))
            .replace("%d", date.strftime("%d"))
            .replace("%f", f"{post.slug}{self.settings.file_extension}")
        )
