"""Document loading for Folio.

This module turns the files of the documents directory into Document objects:
the header is parsed into metadata, the body is converted to HTML and the
output path and public URL are resolved.

Key classes:
- Document: A loaded source document.
- DocumentLoader: Lists the documents directory and builds Documents in order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Protocol

from . import paths
from .logging import get_logger
from .metadata import Metadata, parse_metadata, split_document

logger = get_logger("documents")


class Converter(Protocol):
    """Anything that turns a document body into HTML."""

    def convert(self, body: str, source_format: str) -> str: ...


@dataclass(frozen=True)
class Document:
    """A source document with its derived HTML, metadata and locations.

    Attributes:
        html: Body converted to HTML.
        filename: Base name of the source file.
        source_path: Path of the source file.
        output_path: Output location relative to the build root.
        href: Root-relative public URL.
        metadata: Parsed header fields.
    """

    html: str
    filename: str
    source_path: Path
    output_path: PurePosixPath
    href: str
    metadata: Metadata = field(default_factory=dict)

    @property
    def title(self) -> str | None:
        return self.metadata.get("title")


class DocumentLoader:
    """Loads every document in a directory.

    Documents are visited in file name order, not in the order the
    filesystem lists them; the index page and the write order follow it.

    Attributes:
        documents_dir: Directory holding the source documents.
        converter: Converter for document bodies.
        formats: Mapping of file extension to converter source format.
    """

    def __init__(
        self, documents_dir: Path, converter: Converter, formats: Mapping[str, str]
    ):
        self.documents_dir = documents_dir
        self.converter = converter
        self.formats = {ext.lower(): fmt for ext, fmt in formats.items()}

    def sources(self) -> list[tuple[Path, str]]:
        """List document files with their source formats.

        Entries that are directories or lack a recognised extension are
        logged and skipped.

        Returns:
            (path, source format) pairs sorted by file name.
        """
        found = []
        for path in sorted(self.documents_dir.iterdir()):
            extension = paths.document_extension(path.name, self.formats)
            if path.is_dir() or extension is None:
                logger.info("Skipping %s", path.name)
                continue
            found.append((path, self.formats[extension]))
        return found

    def load(self) -> list[Document]:
        """Load all documents, skipping entries that aren't documents."""
        return [self.load_document(path, fmt) for path, fmt in self.sources()]

    def load_document(self, path: Path, source_format: str) -> Document:
        """Parse and convert a single document.

        Args:
            path: Source file path.
            source_format: Converter source format for the body.

        Returns:
            The loaded Document.
        """
        header, body = split_document(path.read_text(encoding="utf-8"))
        relative = path.relative_to(self.documents_dir)
        return Document(
            html=self.converter.convert(body, source_format),
            filename=path.name,
            source_path=path,
            output_path=paths.output_path(relative),
            href=paths.href(relative),
            metadata=parse_metadata(header),
        )
