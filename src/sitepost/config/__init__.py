"""Configuration for sitepost."""

from sitepost.config.settings import CONFIG_FILENAME, SiteSettings, load_settings

__all__ = ["CONFIG_FILENAME", "SiteSettings", "load_settings"]
