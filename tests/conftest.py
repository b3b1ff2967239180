from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from sitepost.config.settings import SiteSettings
from sitepost.storage import PostStorage


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Create an empty site tree with posts and pages directories."""
    (tmp_path / "_posts").mkdir()
    (tmp_path / "_pages").mkdir()
    return tmp_path


@pytest.fixture
def settings(site_root: Path) -> SiteSettings:
    return SiteSettings(site_root=site_root)


@pytest.fixture
def paged_settings(site_root: Path) -> SiteSettings:
    return SiteSettings(site_root=site_root, pages_enabled=True)


@pytest.fixture
def storage(settings: SiteSettings) -> PostStorage:
    return PostStorage(settings)


@pytest.fixture
def paged_storage(paged_settings: SiteSettings) -> PostStorage:
    return PostStorage(paged_settings)


@pytest.fixture
def write_post_file(site_root: Path) -> Callable[..., Path]:
    """Write a raw post file under ``_posts`` (or another subdirectory)."""

    def _write(filename: str, text: str, subdir: str = "_posts") -> Path:
        path = site_root / subdir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write
