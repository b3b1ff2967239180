"""Encode and decode the YAML front matter block of a content file.

A content file looks like::

    ---
    title: Hello World
    date: 2019-01-01 10:00:00+00:00
    ---

    Body text, kept verbatim to the end of the file.

Both ``\\n`` and ``\\r\\n`` are accepted on read. Everything written is
normalized to ``\\n``.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from sitepost.exceptions import MalformedDocumentError

FRONT_MATTER_DELIMITER = "---"

# Delimiter line, metadata lines (lazy), delimiter line, blank line, then the body.
_DOCUMENT_PATTERN = re.compile(r"\A---\r?\n((?:[^\n]*\n)*?)---\r?\n\r?\n([\s\S]*)\Z")


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n")


def decode(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its front matter mapping and its body.

    Args:
        text: Full document text.

    Returns:
        Tuple of (metadata dict, body string). Metadata keys keep the order
        they have in the file; the body is returned exactly as it appears.

    Raises:
        MalformedDocumentError: If the delimiter pair or the blank separator
            line is missing, or the block is not a YAML mapping.

    """
    text = text.lstrip("\ufeff")
    match = _DOCUMENT_PATTERN.match(text)
    if match is None:
        msg = "Front matter delimiters or body separator not found"
        raise MalformedDocumentError(msg)

    block, body = match.group(1), match.group(2)

    # Out-of-range timestamps surface from the constructor as ValueError.
    try:
        metadata = yaml.safe_load(normalize_newlines(block))
    except (yaml.YAMLError, ValueError) as exc:
        msg = f"Invalid YAML front matter: {exc}"
        raise MalformedDocumentError(msg) from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        msg = f"Front matter must be a mapping, got {type(metadata).__name__}"
        raise MalformedDocumentError(msg)

    return metadata, body


def encode(metadata: dict[str, Any]) -> str:
    """Render a metadata mapping as a delimited front matter block.

    The result always ends with the closing delimiter followed by a blank line,
    so the body can be appended directly.
    """
    block = ""
    if metadata:
        block = yaml.safe_dump(
            dict(metadata),
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
            width=1000,
        )
    text = f"{FRONT_MATTER_DELIMITER}\n{block}{FRONT_MATTER_DELIMITER}\n\n"
    return normalize_newlines(text)


def render_document(metadata: dict[str, Any], body: str) -> str:
    """Return the full file text for a metadata mapping and a body."""
    return normalize_newlines(encode(metadata) + body)
