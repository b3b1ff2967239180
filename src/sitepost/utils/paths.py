"""Slug normalization and path safety utilities."""

import re
from pathlib import Path
from unicodedata import normalize

from sitepost.exceptions import SitePostError


class PathTraversalError(SitePostError):
    """Raised when a path would escape its intended directory."""


# Anything that is not a lowercase ASCII letter, digit, space or hyphen.
WEB_UNSAFE_CHARS = re.compile(r"[^a-z0-9 \-]")
_SEPARATOR_RUN = re.compile(r"[ \-]+")


def slugify(text: str | None) -> str:
    """Convert text to a filesystem and URL safe slug.

    Lowercases the text, drops every character outside ``[a-z0-9 -]`` and
    turns the remaining runs of spaces into single hyphens. Accented letters
    are transliterated to ASCII first.

    Args:
        text: Input text to slugify

    Returns:
        Slug string, possibly empty when nothing safe remains

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Café à Paris")
        'cafe-a-paris'
        >>> slugify("Don't panic")
        'dont-panic'
        >>> slugify("../../etc/passwd")
        'etcpasswd'
        >>> slugify("!!!")
        ''

    """
    if text is None:
        return ""

    ascii_text = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    stripped = WEB_UNSAFE_CHARS.sub("", ascii_text.lower())
    return _SEPARATOR_RUN.sub("-", stripped).strip("-")


def safe_path_join(base_dir: Path, *parts: str) -> Path:
    """Join path parts and ensure the result stays within ``base_dir``.

    Args:
        base_dir: Base directory that result must stay within
        *parts: Path parts to join

    Returns:
        Resolved path guaranteed to be within base_dir

    Raises:
        PathTraversalError: If resulting path would escape base_dir

    Examples:
        >>> base = Path("/site")
        >>> safe_path_join(base, "_posts", "2019-01-01-hello.html")
        PosixPath('/site/_posts/2019-01-01-hello.html')

    """
    if any(Path(part).is_absolute() for part in parts):
        absolute_part = next(part for part in parts if Path(part).is_absolute())
        msg = f"Absolute paths not allowed: {absolute_part}"
        raise PathTraversalError(msg)

    base_resolved = base_dir.resolve()
    candidate_path = base_resolved.joinpath(*parts)

    try:
        candidate_resolved = candidate_path.resolve()
        candidate_resolved.relative_to(base_resolved)
    except (ValueError, OSError) as err:
        msg = f"Path traversal detected: joining {parts} to {base_dir} would escape base directory"
        raise PathTraversalError(msg) from err

    return candidate_resolved
