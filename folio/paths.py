"""Source-to-output path mapping for Folio.

Every document becomes a directory holding an ``index.html`` so public URLs
carry no file extension ("pretty URLs"):

    posts/hello.org   ->  hello/index.html   served at /hello/
    notes/a/b.md      ->  a/b/index.html     served at /a/b/
    index.html        ->  index.html         served at /

Paths handled here are relative to the documents directory (or the output
root for the index page) and always use forward slashes.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePath, PurePosixPath

INDEX_NAME = "index.html"


def output_path(path: str | PurePath) -> PurePosixPath:
    """Return the output location for a source path.

    Args:
        path: Source path relative to the documents directory.

    Returns:
        The path unchanged if its base name is ``index.html``, otherwise
        ``<dir>/<stem>/index.html``.
    """
    source = PurePosixPath(PurePath(path).as_posix())
    if source.name == INDEX_NAME:
        return source
    return source.parent / source.stem / INDEX_NAME


def href(path: str | PurePath) -> str:
    """Return the root-relative public URL for a source path.

    Args:
        path: Source path relative to the documents directory.

    Returns:
        Directory of the output path with leading and trailing slashes.

    Examples:
        >>> href("test.org")
        '/test/'

        >>> href("index.html")
        '/'
    """
    directory = output_path(path).parent.as_posix()
    if directory in ("", "."):
        return "/"
    return f"/{directory.strip('/')}/"


def document_extension(name: str, formats: Mapping[str, str]) -> str | None:
    """Return the recognised document extension of a filename.

    Args:
        name: File name to check.
        formats: Mapping of extensions (with leading dot) to converter formats.

    Returns:
        The matching extension in lower case, or None if not a document.
    """
    suffix = PurePosixPath(name).suffix.lower()
    if suffix and suffix in {ext.lower() for ext in formats}:
        return suffix
    return None
