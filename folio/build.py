"""Site building functionality for Folio.

This module sequences the whole build: it loads configuration, writes the
embedded font stylesheet, loads templates and documents, then renders and
writes the index page followed by one page per document.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads site configuration from folio.yaml.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from jinja2 import TemplateError, TemplateSyntaxError

from . import paths
from .converter import ConversionError, PandocConverter
from .documents import Converter, Document, DocumentLoader
from .fonts import FONT_TEMPLATE, compile_font_css
from .highlight import CodeHighlighter
from .logging import get_logger
from .minify import HtmlOptimizer, JsMinifier, MinifyError
from .templates import INDEX_TEMPLATE, PageRenderer, SiteTemplates, Stylesheet

logger = get_logger("build")


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


CONFIG_FILE = "folio.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "output_dir": "build",
    "documents_dir": "posts",
    "partials_dir": "partials",
    "pages_dir": "pages",
    "assets_dir": "assets",
    "site_name": "Folio",
    "stylesheet": "style.css",
    "highlight_theme": "highlight.css",
    "converter": "pandoc",
    "formats": {".org": "org", ".md": "markdown"},
    "fonts": [],
    "remove_empty_elements": True,
}


@dataclass
class BuildResult:
    """Result of a site build.

    Attributes:
        documents: Documents in build order.
        output_dir: Directory where the site was built.
        written: Paths of the pages written, in write order.
    """

    documents: list[Document]
    output_dir: Path
    written: list[Path] = field(default_factory=list)


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILE
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def build_site(
    project_root: Path,
    converter: Converter | None = None,
    js_minifier: JsMinifier | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        converter: Optional document converter; pandoc by default.
        js_minifier: Optional inline script minifier.

    Returns:
        BuildResult with the documents, output directory and written pages.

    Raises:
        BuildError: If any step fails. Nothing is retried.
    """
    config = load_config(project_root)
    output_dir = project_root / config["output_dir"]
    assets_dir = project_root / config["assets_dir"]
    (output_dir / "assets").mkdir(parents=True, exist_ok=True)

    try:
        compile_font_css(assets_dir, output_dir, config.get("fonts") or [])
    except OSError as exc:
        raise BuildError(
            assets_dir / FONT_TEMPLATE, _format_error_message(exc), exc
        ) from exc

    pages_dir = project_root / config["pages_dir"]
    try:
        templates = SiteTemplates.load(pages_dir, project_root / config["partials_dir"])
    except TemplateSyntaxError as exc:
        raise BuildError(
            Path(exc.filename or pages_dir),
            f"Template syntax error on line {exc.lineno}: {exc.message}",
            exc,
        ) from exc
    except (TemplateError, OSError) as exc:
        raise BuildError(pages_dir, _format_error_message(exc), exc) from exc

    converter = converter or PandocConverter(config["converter"], project_root)
    documents = _load_documents(
        project_root / config["documents_dir"], converter, config["formats"]
    )

    renderer = PageRenderer(
        templates,
        Stylesheet(
            assets_dir / config["stylesheet"], assets_dir / config["highlight_theme"]
        ),
        str(config["site_name"]),
    )
    optimizer = HtmlOptimizer(
        CodeHighlighter(),
        js_minifier or JsMinifier(project_root),
        remove_empty_elements=bool(config["remove_empty_elements"]),
    )

    result = BuildResult(documents=documents, output_dir=output_dir)
    index_source = pages_dir / INDEX_TEMPLATE
    html = _render(index_source, renderer.render_index, documents)
    index_path = PurePosixPath(paths.INDEX_NAME)
    result.written.append(
        _write_page(output_dir, index_path, html, optimizer, index_source)
    )
    for document in documents:
        html = _render(document.source_path, renderer.render_post, document)
        result.written.append(
            _write_page(
                output_dir, document.output_path, html, optimizer, document.source_path
            )
        )
    return result


def _load_documents(
    documents_dir: Path, converter: Converter, formats: dict[str, str]
) -> list[Document]:
    if not documents_dir.is_dir():
        raise BuildError(documents_dir, "Documents directory not found")
    loader = DocumentLoader(documents_dir, converter, formats)
    documents = []
    for path, source_format in loader.sources():
        try:
            documents.append(loader.load_document(path, source_format))
        except ConversionError as exc:
            raise BuildError(path, str(exc), exc) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise BuildError(path, _format_error_message(exc), exc) from exc
    return documents


def _render(source: Path, render: Callable[[Any], str], subject: Any) -> str:
    try:
        return render(subject)
    except OSError as exc:
        raise BuildError(
            Path(exc.filename or source), _format_error_message(exc), exc
        ) from exc
    except Exception as exc:
        raise BuildError(source, _format_error_message(exc), exc) from exc


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "TemplateNotFound":
        return f"Template not found: {error_msg}"
    if isinstance(exc, FileNotFoundError):
        return f"File not found: {exc.filename}"

    return f"{error_type}: {error_msg}"


def _write_page(
    output_dir: Path,
    relative: PurePosixPath,
    html: str,
    optimizer: HtmlOptimizer,
    source: Path,
) -> Path:
    """Optimize a rendered page and write it under the output directory.

    Args:
        output_dir: Base output directory.
        relative: Output path relative to the output directory.
        html: Rendered HTML.
        optimizer: Optimizer applied before writing.
        source: Source file, reported if writing fails.

    Returns:
        Path of the written file.
    """
    target = output_dir / paths.output_path(relative)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        optimized = optimizer.optimize(html)
        logger.info("Writing to %s", target)
        with open(target, "w", encoding="utf-8") as f:
            f.write(optimized)
    except MinifyError as exc:
        raise BuildError(source, f"Script minification failed: {exc}", exc) from exc
    except OSError as exc:
        raise BuildError(source, _format_error_message(exc), exc) from exc
    return target
