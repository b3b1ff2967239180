"""Filesystem storage for static-site posts and pages.

Structure:
    site_root/_posts/{date}-{slug}.html
    site_root/_pages/{date}-{slug}.html   (only when paging is enabled)

Each file holds YAML front matter followed by the body::

    ---
    title: My Post
    date: 2019-01-10 12:00:00+00:00
    layout: post
    tags: [tag1, tag2]
    id: 0b6f...
    ---

    Post content here...

A post's id lives only inside the file, so finding the file for an id means
parsing every file in the content directories. Files that fail to parse are
reported as skipped and never abort a scan.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sitepost.conventions import PostPathConvention
from sitepost.data_primitives.post import Post
from sitepost.exceptions import (
    DateTimeError,
    MalformedDocumentError,
    MissingPostIdError,
    PostLoadError,
    UnreadableFrontMatterError,
)
from sitepost.markdown.frontmatter import render_document
from sitepost.markdown.frontmatter import decode as decode_document
from sitepost.slugs import resolve_slug
from sitepost.utils.datetime_utils import coerce_datetime
from sitepost.utils.filesystem import LocalFileSystem
from sitepost.utils.paths import slugify

if TYPE_CHECKING:
    from sitepost.config.settings import SiteSettings

logger = logging.getLogger(__name__)

ID_KEY = "id"
TITLE_KEY = "title"
DATE_KEY = "date"
LAYOUT_KEY = "layout"
RESERVED_KEYS = frozenset({ID_KEY, TITLE_KEY, DATE_KEY, LAYOUT_KEY})


@dataclass(frozen=True, slots=True)
class ParsedPost:
    """Scan outcome for a file that loaded successfully."""

    path: Path
    post: Post


@dataclass(frozen=True, slots=True)
class SkippedFile:
    """Scan outcome for a file that could not be loaded."""

    path: Path
    reason: str


ScanResult = ParsedPost | SkippedFile


class PostStorage:
    """Loads, saves and looks up posts in a local static-site tree."""

    def __init__(self, settings: SiteSettings, filesystem: LocalFileSystem | None = None) -> None:
        self.settings = settings
        self.convention = PostPathConvention(settings)
        self.fs = filesystem or LocalFileSystem()

    # ------------------------------------------------------------------
    # Single files
    # ------------------------------------------------------------------

    def load(self, path: Path) -> Post:
        """Load a post from ``path``.

        The returned post is bound to ``path`` and its slug is taken from the
        filename (empty when the filename does not follow the date-slug template).

        Raises:
            UnreadableFrontMatterError: If the front matter cannot be decoded.
            MissingPostIdError: If the front matter has no non-empty ``id``.
            OSError: If the file cannot be read.

        """
        text = self.fs.read_text(path)
        try:
            metadata, body = decode_document(text)
        except MalformedDocumentError as exc:
            raise UnreadableFrontMatterError(str(path)) from exc

        post_id = metadata.get(ID_KEY)
        if post_id is None or not str(post_id).strip():
            raise MissingPostIdError(str(path))

        post = Post(
            id=str(post_id),
            title="" if metadata.get(TITLE_KEY) is None else str(metadata[TITLE_KEY]),
            is_page=self.convention.is_page_layout(metadata.get(LAYOUT_KEY)),
            contents=body,
            body_metadata={k: v for k, v in metadata.items() if k not in RESERVED_KEYS},
            source_path=path,
        )

        raw_date = metadata.get(DATE_KEY)
        if raw_date is not None:
            try:
                post.date_published = coerce_datetime(raw_date)
            except DateTimeError as exc:
                raise UnreadableFrontMatterError(str(path)) from exc

        post.slug = self.convention.slug_from_filename(path.name)
        return post

    def to_front_matter(self, post: Post) -> dict[str, Any]:
        """Build the front matter mapping written for ``post``."""
        metadata: dict[str, Any] = {TITLE_KEY: post.title}
        if post.effective_date is not None:
            metadata[DATE_KEY] = post.effective_date
        metadata[LAYOUT_KEY] = self.convention.layout_for(post.is_page)
        metadata.update((k, v) for k, v in post.body_metadata.items() if k not in RESERVED_KEYS)
        metadata[ID_KEY] = post.id
        return metadata

    def render(self, post: Post) -> str:
        """Return the full file text for ``post``, with ``\\n`` line endings."""
        return render_document(self.to_front_matter(post), post.contents)

    def save(self, post: Post, path: Path | None = None) -> Path:
        """Write ``post`` to ``path`` (default: :meth:`path_for`), replacing any existing file.

        Returns:
            The path written. The post becomes bound to it.

        """
        target = path if path is not None else self.path_for(post)
        self.fs.write_text(target, self.render(post))
        post.source_path = target
        logger.info("Saved post %s to %s", post.id, target)
        return target

    # ------------------------------------------------------------------
    # Directory scans
    # ------------------------------------------------------------------

    def scan(self, directory: Path | None = None) -> Iterator[ScanResult]:
        """Try to load every published file in ``directory`` (default: posts dir)."""
        directory = directory if directory is not None else self.settings.posts_dir
        for path in self.fs.list_files(directory, self.settings.file_pattern):
            try:
                yield ParsedPost(path, self.load(path))
            except (OSError, UnicodeDecodeError, PostLoadError) as exc:
                logger.debug("Skipping %s: %s", path, exc)
                yield SkippedFile(path, str(exc))

    def list_all(self, directory: Path | None = None) -> Iterator[Post]:
        """Yield every post in ``directory`` that loads, in enumeration order."""
        for result in self.scan(directory):
            if isinstance(result, ParsedPost):
                yield result.post

    def find_path_by_id(self, post_id: str, directory: Path | None = None) -> Path | None:
        """Return the first file in ``directory`` whose front matter id is ``post_id``."""
        for post in self.list_all(directory):
            if post.id == post_id:
                return post.source_path
        return None

    def get_by_id(self, post_id: str, directory: Path | None = None) -> Post | None:
        directories = [directory] if directory is not None else self.convention.content_dirs()
        for candidate_dir in directories:
            for post in self.list_all(candidate_dir):
                if post.id == post_id:
                    return post
        return None

    def find_path(self, post: Post) -> Path | None:
        """Return the file backing ``post``, searching by id on first use.

        The result is remembered on ``post.source_path`` for the lifetime of
        the record and is not refreshed if the directory changes later.
        """
        if post.source_path is not None:
            return post.source_path
        if not post.id:
            return None
        for directory in self.convention.content_dirs():
            found = self.find_path_by_id(post.id, directory)
            if found is not None:
                post.source_path = found
                return found
        return None

    # ------------------------------------------------------------------
    # Paths and slugs
    # ------------------------------------------------------------------

    def path_for(self, post: Post) -> Path:
        """Return where ``post`` should live given its kind, effective date and slug."""
        return self.convention.path_for_slug(post, post.slug)

    def site_path(self, post: Post) -> str:
        return self.convention.site_path(post)

    def disk_slug(self, post: Post) -> str | None:
        """Return the slug encoded in the filename of the file backing ``post``."""
        path = self.find_path(post)
        return None if path is None else self.convention.slug_from_filename(path.name)

    def find_new_slug(self, post: Post, preferred: str | None = None, *, safe: bool = True) -> str:
        """Derive a slug for ``post`` from ``preferred`` text or its title.

        In safe mode the slug is free on disk: no other file exists at the path
        the post would get with it. The post's own backing file does not count.
        """
        text = preferred or post.title
        own_path = post.source_path

        def exists(candidate: str) -> bool:
            return self._occupied_by_other(self.convention.path_for_slug(post, candidate), own_path)

        return resolve_slug(text, exists, safe=safe, fallback_id=post.ensure_id)

    def ensure_safe_slug(self, post: Post) -> str:
        """Give ``post`` a normalized, collision-free slug. Returns the slug.

        A slug that is already normalized and whose path is free (or is the
        post's own file) is kept. Otherwise a new one is resolved from the
        slug, or from the title when the post has no slug.
        """
        if (
            post.slug
            and slugify(post.slug) == post.slug
            and not self._occupied_by_other(self.path_for(post), post.source_path)
        ):
            return post.slug
        post.slug = self.find_new_slug(post, post.slug)
        return post.slug

    def _occupied_by_other(self, target: Path, own_path: Path | None) -> bool:
        """Whether a file other than ``own_path`` already exists at ``target``."""
        if not self.fs.exists(target):
            return False
        return own_path is None or own_path.resolve() != target.resolve()

    # ------------------------------------------------------------------
    # Explicit moves
    # ------------------------------------------------------------------

    def relocate(self, post: Post) -> Path:
        """Save ``post`` at :meth:`path_for` and remove its old file if that differs.

        If another file already sits at the target path, the post gets a new
        collision-free slug first, so no other post is overwritten.
        """
        old_path = self.find_path(post)
        target = self.path_for(post)
        if self._occupied_by_other(target, old_path):
            taken = post.slug
            post.slug = self.find_new_slug(post, taken)
            target = self.path_for(post)
            logger.info("Slug %r is taken at %s, using %r", taken, target.parent, post.slug)
        new_path = self.save(post, target)
        if old_path is not None and old_path.resolve() != new_path.resolve() and self.fs.exists(old_path):
            self.fs.delete(old_path)
            logger.info("Moved post %s from %s to %s", post.id, old_path, new_path)
        return new_path

    def delete(self, post: Post) -> Path | None:
        """Delete the file backing ``post``. Returns the removed path, if any."""
        path = self.find_path(post)
        if path is None:
            return None
        self.fs.delete(path)
        post.source_path = None
        logger.info("Deleted post %s at %s", post.id, path)
        return path
