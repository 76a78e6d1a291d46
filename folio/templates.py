"""Template rendering for Folio.

There are two page templates, ``post.html.jinja`` for a single document and
``index.html.jinja`` for the list of all documents. Both can include the
partials found in the partials directory by their file name without its
extension, e.g. ``{% include "header" %}`` for ``partials/header.html``.

Key classes:
- SiteTemplates: Read-only handle over the compiled templates, loaded once.
- Stylesheet: Reads the site stylesheet and highlighting theme.
- PageRenderer: Builds render contexts and renders pages.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, Template
from jinja2 import select_autoescape
from markupsafe import Markup

from .documents import Document

POST_TEMPLATE = "post.html.jinja"
INDEX_TEMPLATE = "index.html.jinja"


def load_partials(partials_dir: Path) -> dict[str, str]:
    """Read every file in the partials directory.

    Args:
        partials_dir: Directory of partial templates.

    Returns:
        Mapping of partial name (file name without its last extension) to source.
    """
    partials: dict[str, str] = {}
    if not partials_dir.exists():
        return partials
    for path in sorted(partials_dir.iterdir()):
        if path.is_file():
            partials[path.stem] = path.read_text(encoding="utf-8")
    return partials


def _blank_none(value: Any) -> Any:
    # Header lines without a colon leave None values; render them as empty.
    return "" if value is None else value


@dataclass(frozen=True)
class SiteTemplates:
    """Compiled page templates and the partials they can include.

    Attributes:
        post: Template for a single document page.
        index: Template for the document listing.
        partials: Names of the registered partials.
    """

    post: Template
    index: Template
    partials: tuple[str, ...]

    @classmethod
    def load(cls, pages_dir: Path, partials_dir: Path) -> SiteTemplates:
        """Compile the page templates with partials registered.

        Args:
            pages_dir: Directory holding the two page templates.
            partials_dir: Directory of partials.

        Returns:
            SiteTemplates instance.

        Raises:
            jinja2.TemplateNotFound: If a page template is missing.
        """
        partials = load_partials(partials_dir)
        env = Environment(
            loader=ChoiceLoader([FileSystemLoader(pages_dir), DictLoader(partials)]),
            autoescape=select_autoescape(["html", "jinja"], default=True),
            finalize=_blank_none,
        )
        return cls(
            post=env.get_template(POST_TEMPLATE),
            index=env.get_template(INDEX_TEMPLATE),
            partials=tuple(partials),
        )


class Stylesheet:
    """Site-wide CSS: the base stylesheet followed by the highlighting theme.

    Both files are read on every call.
    """

    def __init__(self, base: Path, theme: Path):
        self.base = base
        self.theme = theme

    def read(self) -> str:
        return (
            self.base.read_text(encoding="utf-8")
            + "\n"
            + self.theme.read_text(encoding="utf-8")
        )


class PageRenderer:
    """Renders documents and the index into HTML.

    Attributes:
        templates: Compiled site templates.
        stylesheet: Source of the site CSS.
        site_name: Name used in page titles.
    """

    def __init__(self, templates: SiteTemplates, stylesheet: Stylesheet, site_name: str):
        self.templates = templates
        self.stylesheet = stylesheet
        self.site_name = site_name

    def page_title(self, document: Document | None = None) -> str:
        """Return the page title for a document, or the site name."""
        if document is not None and document.title:
            return f"{document.title} - {self.site_name}"
        return self.site_name

    def defaults(self, document: Document | None = None) -> dict[str, Any]:
        """Return the values every render receives."""
        return {
            "css": Markup(self.stylesheet.read()),
            "title": self.page_title(document),
            "site": self.site_name,
        }

    def render_post(self, document: Document) -> str:
        """Render a single document page."""
        return self.templates.post.render(post=document, **self.defaults(document))

    def render_index(self, documents: Sequence[Document]) -> str:
        """Render the index page listing all documents."""
        return self.templates.index.render(posts=list(documents), **self.defaults())
