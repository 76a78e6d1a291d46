"""HTML, CSS and JavaScript minification for Folio.

Every page goes through HtmlOptimizer before it is written: code blocks are
highlighted, a BeautifulSoup pass strips comments and redundant attributes and
minifies inline ``<style>`` and ``<script>`` blocks, and minify-html collapses
whitespace and removes attribute quotes where safe.

Key classes:
- JsMinifier: Minifies inline scripts with terser, or rjsmin without it.
- HtmlOptimizer: Highlights and minifies a full HTML page.
- MinifyError: Raised when the script minifier reports an error.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import csscompressor
import minify_html
import rjsmin
from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .executables import find_executable
from .highlight import CodeHighlighter
from .logging import get_logger

logger = get_logger("minify")

# Attributes dropped when empty; boolean attributes like ``disabled`` are kept
EMPTY_REMOVABLE_ATTRIBUTES = {"class", "id", "style", "title", "lang", "dir"}

REDUNDANT_ATTRIBUTES = {
    ("script", "type"): "text/javascript",
    ("script", "language"): "javascript",
    ("style", "type"): "text/css",
    ("link", "type"): "text/css",
    ("form", "method"): "get",
    ("input", "type"): "text",
}

SCRIPT_TYPES = {"", "text/javascript", "application/javascript", "module"}

VOID_ELEMENTS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "source",
    "track",
    "wbr",
}

# Never removed even when empty
KEEP_EMPTY_ELEMENTS = {"html", "head", "body", "textarea", "td", "th"}

# Descendants keep their markup untouched, whitespace tokens included
PREFORMATTED_ELEMENTS = ["pre", "code", "textarea"]

# A single space inside one of these is content, not formatting
INLINE_ELEMENTS = {
    "a",
    "abbr",
    "b",
    "bdi",
    "bdo",
    "cite",
    "data",
    "dfn",
    "em",
    "i",
    "kbd",
    "mark",
    "q",
    "s",
    "samp",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "time",
    "u",
    "var",
}

SOURCE_ATTRIBUTES = {
    "audio": ("src",),
    "video": ("src",),
    "script": ("src",),
    "iframe": ("src", "srcdoc"),
    "object": ("data",),
    "canvas": (),
}


class MinifyError(Exception):
    """Raised when an inline script cannot be minified."""


def minify_css(css: str) -> str:
    """Minify a stylesheet.

    Args:
        css: CSS source.

    Returns:
        Compressed CSS.
    """
    return csscompressor.compress(css)


class JsMinifier:
    """Minifies JavaScript source.

    Uses terser when it can be found on PATH or in the project's
    node_modules, since it reports syntax errors. Otherwise rjsmin is used.

    Attributes:
        project_root: Optional project root for local terser lookup.
        use_terser: Whether to look for terser at all.
    """

    def __init__(self, project_root: Path | None = None, use_terser: bool = True):
        self.project_root = project_root
        self.use_terser = use_terser

    def minify(self, source: str) -> str:
        """Minify a script.

        Args:
            source: JavaScript source.

        Returns:
            Minified JavaScript.

        Raises:
            MinifyError: If terser rejects the script.
        """
        terser = (
            find_executable("terser", self.project_root) if self.use_terser else None
        )
        if terser is None:
            return rjsmin.jsmin(source)

        result = subprocess.run(
            [terser, "--compress", "--mangle"],
            input=source,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
        stderr = (result.stderr or "").strip()
        if result.returncode != 0:
            logger.error("Failed to minify script:\n%s", source)
            raise MinifyError(stderr or f"terser exited with status {result.returncode}")
        if stderr:
            logger.warning("terser: %s", stderr)
        return result.stdout.strip()


class HtmlOptimizer:
    """Turns rendered HTML into the final page text.

    Attributes:
        highlighter: Code highlighter applied before minification.
        js_minifier: Minifier for inline scripts.
        remove_empty_elements: Whether to drop elements with no content.
    """

    def __init__(
        self,
        highlighter: CodeHighlighter | None = None,
        js_minifier: JsMinifier | None = None,
        remove_empty_elements: bool = True,
    ):
        self.highlighter = highlighter or CodeHighlighter()
        self.js_minifier = js_minifier or JsMinifier()
        self.remove_empty_elements = remove_empty_elements

    def optimize(self, html: str) -> str:
        """Highlight and minify an HTML page.

        Args:
            html: Rendered page.

        Returns:
            Optimized HTML ready to be written.

        Raises:
            MinifyError: If an inline script fails to minify.
        """
        highlighted = self.highlighter.highlight(html)
        return self.minify(highlighted)

    def minify(self, html: str) -> str:
        """Minify HTML without highlighting it."""
        soup = BeautifulSoup(html, "html.parser")
        _strip_comments(soup)
        for tag in soup.find_all(True):
            _clean_attributes(tag)
        for style in soup.find_all("style"):
            if style.string and style.string.strip():
                style.string = minify_css(str(style.string))
        for script in soup.find_all("script"):
            if _is_inline_script(script):
                script.string = self.js_minifier.minify(str(script.string))
        if self.remove_empty_elements:
            _remove_empty_elements(soup)
        return minify_html.minify(str(soup), minify_css=False, minify_js=False)


def _strip_comments(soup: BeautifulSoup) -> None:
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()


def _clean_attributes(tag: Tag) -> None:
    for name in list(tag.attrs):
        value = tag.attrs[name]
        if isinstance(value, list):
            value = " ".join(value)
        lowered = name.lower()
        if (
            lowered in EMPTY_REMOVABLE_ATTRIBUTES or lowered.startswith("on")
        ) and not value.strip():
            del tag.attrs[name]
            continue
        redundant = REDUNDANT_ATTRIBUTES.get((tag.name, lowered))
        if redundant is not None and value.strip().lower() == redundant:
            del tag.attrs[name]


def _is_inline_script(script: Tag) -> bool:
    if script.get("src"):
        return False
    if str(script.get("type", "")).strip().lower() not in SCRIPT_TYPES:
        return False
    return bool(script.string and script.string.strip())


def _is_empty(tag: Tag) -> bool:
    if tag.name in INLINE_ELEMENTS:
        return not tag.contents
    return all(
        isinstance(child, NavigableString) and not child.strip()
        for child in tag.contents
    )


def _can_remove(tag: Tag) -> bool:
    if tag.name in VOID_ELEMENTS or tag.name in KEEP_EMPTY_ELEMENTS:
        return False
    if tag.name in PREFORMATTED_ELEMENTS or tag.find_parent(PREFORMATTED_ELEMENTS):
        return False
    attributes = SOURCE_ATTRIBUTES.get(tag.name)
    if attributes is not None and (
        not attributes or any(tag.get(attr) for attr in attributes)
    ):
        return False
    return _is_empty(tag)


def _remove_empty_elements(soup: BeautifulSoup) -> None:
    # Reverse document order visits children before their parents.
    for tag in reversed(soup.find_all(True)):
        if _can_remove(tag):
            tag.decompose()
