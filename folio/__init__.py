"""Folio static site generator.

This package turns a directory of structured documents into a static site.
Each document carries a small ``key: value`` header, a ``---`` separator and a
body that pandoc converts to HTML. Pages are rendered with Jinja2 templates,
code blocks are highlighted with Pygments and the final HTML is minified.

The main entry point is the CLI module, which provides commands for scaffolding
new projects, creating documents and building sites.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
