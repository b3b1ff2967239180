"""Tests for slug normalization and path safety utilities."""

from pathlib import Path

import pytest

from sitepost.utils import PathTraversalError, safe_path_join, slugify


class TestSlugify:
    """Tests for slugify function."""

    def test_basic_slugify(self):
        assert slugify("Hello World!") == "hello-world"
        assert slugify("This is a Test") == "this-is-a-test"

    def test_unsafe_characters_are_dropped_not_replaced(self):
        assert slugify("Don't Panic") == "dont-panic"
        assert slugify("C#/.NET tips") == "cnet-tips"
        assert slugify("snake_case") == "snakecase"

    def test_unicode_is_transliterated(self):
        assert slugify("Café à Paris") == "cafe-a-paris"
        assert slugify("Naïve Résumé") == "naive-resume"

    def test_space_runs_collapse(self):
        assert slugify("one   two") == "one-two"
        assert slugify("a - b") == "a-b"

    def test_edges_are_trimmed(self):
        assert slugify("  padded  ") == "padded"
        assert slugify("-dash-") == "dash"
        assert slugify("  Hello -- World  ") == "hello-world"

    def test_existing_slug_is_unchanged(self):
        assert slugify("hello-world-2") == "hello-world-2"

    def test_path_traversal_attempts(self):
        assert slugify("../../etc/passwd") == "etcpasswd"

    def test_empty_results(self):
        assert slugify("") == ""
        assert slugify(None) == ""
        assert slugify("!!!") == ""
        assert slugify("🔥🔥🔥") == ""


class TestSafePathJoin:
    def test_basic_join(self, tmp_path):
        result = safe_path_join(tmp_path, "file.html")
        assert result == tmp_path.resolve() / "file.html"

    def test_subdirectory_join(self, tmp_path):
        result = safe_path_join(tmp_path, "_posts", "2019-01-01-a.html")
        assert result == tmp_path.resolve() / "_posts" / "2019-01-01-a.html"

    def test_path_traversal_blocked(self, tmp_path):
        with pytest.raises(PathTraversalError):
            safe_path_join(tmp_path, "../etc/passwd")

        with pytest.raises(PathTraversalError):
            safe_path_join(tmp_path, "_posts", "../../outside.html")

    def test_absolute_path_blocked(self, tmp_path):
        with pytest.raises(PathTraversalError, match="Absolute paths not allowed"):
            safe_path_join(tmp_path, "/etc/passwd")

    def test_accepts_relative_base(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert safe_path_join(Path("site"), "x.html") == tmp_path.resolve() / "site" / "x.html"
