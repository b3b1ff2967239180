"""Site configuration for sitepost.

Settings describe where posts and pages live in a local static-site tree and
how their filenames and URLs are templated.

Priority (highest to lowest):
1. Environment variables (``SITEPOST_<FIELD>``, e.g. ``SITEPOST_POSTS_PATH``)
2. Config file (``.sitepost.toml`` in the site root)
3. Defaults
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sitepost.exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".sitepost.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class SiteSettings(BaseSettings):
    """Path layout of a static site project.

    ``posts_path`` and ``pages_path`` are relative to ``site_root`` unless absolute.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Local root directory of the site project",
    )
    posts_path: Path = Field(default=Path("_posts"), description="Posts directory")
    pages_path: Path = Field(default=Path("_pages"), description="Pages directory")
    pages_enabled: bool = Field(
        default=False,
        description="File pages under pages_path; when False pages live with posts",
    )
    post_url_format: str = Field(
        default="/%y/%m/%d/%f",
        description="Site URL of a post; %y year, %m month, %d day, %f filename",
    )
    file_extension: str = Field(default=".html", description="Extension of published files")
    post_layout: str = Field(default="post", description="Front matter layout for posts")
    page_layout: str = Field(default="page", description="Front matter layout for pages")

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="SITEPOST_",
    )

    @field_validator("file_extension")
    @classmethod
    def validate_file_extension(cls, v: str) -> str:
        v = v.strip()
        if not v.strip("."):
            msg = "file_extension must not be empty"
            raise ValueError(msg)
        return v if v.startswith(".") else f".{v}"

    @property
    def posts_dir(self) -> Path:
        return self._resolve(self.posts_path)

    @property
    def pages_dir(self) -> Path:
        return self._resolve(self.pages_path)

    @property
    def file_pattern(self) -> str:
        """Glob pattern matching published files."""
        return f"*{self.file_extension}"

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


def load_settings(site_root: Path | None = None) -> SiteSettings:
    """Load settings from ``.sitepost.toml`` and environment variables.

    Args:
        site_root: Root directory of the site. If None, uses current working directory.

    Raises:
        ConfigLoadError: If the config file cannot be parsed or holds invalid values.

    """
    root_path = site_root if site_root is not None else Path.cwd()
    config_file = root_path / CONFIG_FILENAME

    file_settings: dict[str, Any] = {}
    if config_file.is_file():
        try:
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigLoadError(str(config_file), str(e)) from e
        logger.debug("Loaded site configuration from %s", config_file)

    try:
        env_settings = SiteSettings().model_dump(exclude_unset=True)
        merged = _deep_merge(file_settings, env_settings)
        merged["site_root"] = root_path
        return SiteSettings.model_validate(merged)
    except ValidationError as e:
        raise ConfigLoadError(str(config_file), str(e)) from e
