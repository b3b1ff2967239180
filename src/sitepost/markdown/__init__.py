"""Markdown and front matter helpers."""
