"""Document header parsing for Folio.

A document is UTF-8 text made of a header block, a literal ``---`` line and a
body. The header is a flat list of ``key: value`` lines with no schema:

    title: Hello World
    date: 2024-01-15
    ---
    * Body in the converter's source markup

Key functions:
- split_document: Separate the header block from the body.
- parse_metadata: Turn a header block into a key/value mapping.
"""

from __future__ import annotations

SEPARATOR = "\n---\n"

Metadata = dict[str, str | None]


def split_document(text: str) -> tuple[str, str]:
    """Split raw document text into its header block and body.

    Args:
        text: Full document text.

    Returns:
        Tuple of (header, body). When the separator is missing the whole
        text is treated as body and the header is empty.
    """
    idx = text.find(SEPARATOR)
    if idx == -1:
        return "", text
    return text[:idx], text[idx + len(SEPARATOR) :]


def parse_metadata(header: str) -> Metadata:
    """Parse a header block into a mapping.

    Each line is split on its first colon. Values are stripped, keys are kept
    verbatim, and later lines win over earlier ones with the same key. A line
    without a colon keeps its key with a ``None`` value so templates see the
    field as missing.

    Args:
        header: Header text preceding the separator.

    Returns:
        Dictionary mapping keys to values (or None).

    Examples:
        >>> parse_metadata("title: Hello World")
        {'title': 'Hello World'}

        >>> parse_metadata("draft")
        {'draft': None}
    """
    metadata: Metadata = {}
    for line in header.split("\n"):
        if not line.strip():
            continue
        key, colon, value = line.partition(":")
        metadata[key] = value.strip() if colon else None
    return metadata
