"""Syntax highlighting of rendered pages for Folio.

Pandoc marks code blocks whose language it recognises as
``<code class="sourceCode python">``. After a page is rendered, every such
element has its text replaced by Pygments markup and gains a marker class so
the highlighting theme applies to it.

Running the highlighter twice on the same HTML would highlight the already
highlighted markup again; the optimizer applies it once per page.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

DEFAULT_SELECTOR = "code.sourceCode"
DEFAULT_MARKER = "highlight"

# Highlighted text must match the source exactly, newlines included
LEXER_OPTIONS = {"stripnl": False, "ensurenl": False}


def theme_css(style: str = "default", marker_class: str = DEFAULT_MARKER) -> str:
    """Return Pygments CSS for a style, scoped to the marker class.

    Args:
        style: Pygments style name.
        marker_class: Class the highlighter adds to code elements.

    Returns:
        CSS rules for the highlighted token classes.
    """
    return HtmlFormatter(style=style).get_style_defs(f".{marker_class}")


class CodeHighlighter:
    """Highlights code blocks in rendered HTML with Pygments.

    Attributes:
        selector: CSS selector for code elements to highlight.
        marker_class: Class added to each highlighted element.
    """

    def __init__(
        self, selector: str = DEFAULT_SELECTOR, marker_class: str = DEFAULT_MARKER
    ):
        self.selector = selector
        self.marker_class = marker_class
        self.formatter = HtmlFormatter(nowrap=True)

    def highlight(self, html: str) -> str:
        """Highlight every matching code element in an HTML document.

        Args:
            html: Rendered HTML.

        Returns:
            Serialized HTML with highlighted code blocks.
        """
        soup = BeautifulSoup(html, "html.parser")
        for element in soup.select(self.selector):
            code = element.get_text()
            lexer = self.lexer_for(element.get("class") or [], code)
            fragment = BeautifulSoup(highlight(code, lexer, self.formatter), "html.parser")
            element.clear()
            for node in list(fragment.contents):
                element.append(node)
            classes = list(element.get("class") or [])
            if self.marker_class not in classes:
                classes.append(self.marker_class)
            element["class"] = classes
        return str(soup)

    def lexer_for(self, classes: list[str], code: str) -> Lexer:
        """Pick a lexer from the element's classes or by guessing from content."""
        for name in classes:
            if name in ("sourceCode", self.marker_class):
                continue
            try:
                return get_lexer_by_name(name, **LEXER_OPTIONS)
            except ClassNotFound:
                continue
        try:
            return guess_lexer(code, **LEXER_OPTIONS)
        except ClassNotFound:
            return TextLexer(**LEXER_OPTIONS)
