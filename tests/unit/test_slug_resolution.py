"""Tests for collision-free slug resolution."""

import pytest

from sitepost.slugs import MAX_SLUG_SUFFIX, resolve_slug

POST_ID = "5D3C1A9E-0000-4000-8000-ABCDEF012345"


def _fallback() -> str:
    return POST_ID


class RecordingProbe:
    """Existence probe over a fixed set of taken slugs that records every call."""

    def __init__(self, taken=()):
        self.taken = set(taken)
        self.calls: list[str] = []

    def __call__(self, slug: str) -> bool:
        self.calls.append(slug)
        return slug in self.taken


def test_free_slug_is_used_as_is():
    probe = RecordingProbe()
    assert resolve_slug("Hello World!", probe, fallback_id=_fallback) == "hello-world"
    assert probe.calls == ["hello-world"]


def test_collisions_add_numeric_suffix():
    probe = RecordingProbe({"hello-world", "hello-world-1"})
    assert resolve_slug("Hello World!", probe, fallback_id=_fallback) == "hello-world-2"
    assert probe.calls == ["hello-world", "hello-world-1", "hello-world-2"]


def test_unsafe_mode_skips_probing():
    probe = RecordingProbe({"hello-world"})
    assert resolve_slug("Hello World!", probe, safe=False, fallback_id=_fallback) == "hello-world"
    assert probe.calls == []


def test_exhaustion_falls_back_to_id(caplog):
    calls: list[str] = []

    def always_exists(slug: str) -> bool:
        calls.append(slug)
        return True

    slug = resolve_slug("Hello World!", always_exists, fallback_id=_fallback)

    assert slug == "5d3c1a9e-0000-4000-8000-abcdef012345"
    assert len(calls) == MAX_SLUG_SUFFIX + 1
    assert calls[-1] == f"hello-world-{MAX_SLUG_SUFFIX}"
    assert "falling back to post id" in caplog.text


def test_fallback_id_is_only_requested_when_needed():
    def explode() -> str:
        pytest.fail("fallback id should not be requested")

    assert resolve_slug("Fine Title", RecordingProbe(), fallback_id=explode) == "fine-title"


def test_text_without_safe_characters_uses_id():
    probe = RecordingProbe()
    assert resolve_slug("!!!", probe, fallback_id=_fallback) == "5d3c1a9e-0000-4000-8000-abcdef012345"
    assert probe.calls == []
