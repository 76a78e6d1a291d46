"""Command-line interface for Folio.

This module defines the CLI commands using Click framework.

Commands:
- new: Scaffold a new Folio project.
- build: Build the site into the output directory.
- doc: Create a new document interactively.
"""

from __future__ import annotations

import re
import shutil
from datetime import datetime
from pathlib import Path

import click
import questionary

from . import __version__
from .highlight import theme_css

# Path to the default project template
_TEMPLATES_DIR = Path(__file__).parent / "templates" / "default"

_PYGMENTS_STYLE = "monokai"


@click.group()
@click.version_option(version=__version__, prog_name="folio")
def cli():
    """Folio static site generator."""


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Folio project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Folio site created at {target}")


@cli.command()
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
def build(verbose: bool):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site
    from .logging import configure_logging

    configure_logging(verbose=verbose)
    try:
        result = build_site(project_root)
    except BuildError as exc:
        source = exc.source_path
        if source.is_absolute() and source.is_relative_to(project_root):
            source = source.relative_to(project_root)
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {source}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.written)} pages into {result.output_dir}")


@cli.command()
def doc():
    """Create a new document interactively."""
    project_root = Path.cwd()
    from .build import load_config

    config = load_config(project_root)
    documents_dir = project_root / config["documents_dir"]
    if not documents_dir.exists():
        raise click.ClickException(
            f"No {config['documents_dir']}/ directory found. "
            "Run this command from a Folio project root."
        )

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()

    extensions = sorted(config["formats"])
    extension = extensions[0]
    if len(extensions) > 1:
        extension = questionary.select(
            "Format:",
            choices=extensions,
            style=_questionary_style(),
        ).ask()
        if extension is None:
            raise click.Abort()

    title = title.strip()
    target_path = documents_dir / f"{_slugify(title)}{extension}"
    if target_path.exists():
        raise click.ClickException(
            f"File already exists: {target_path.relative_to(project_root)}"
        )

    today = datetime.now().strftime("%Y-%m-%d")
    target_path.write_text(
        f"title: {title}\ndate: {today}\n---\n", encoding="utf-8"
    )
    click.echo(f"Created {target_path.relative_to(project_root)}")


def _slugify(title: str) -> str:
    """Convert a title to a file name stem."""
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", title)
    return cleaned.strip("-").lower() or "untitled"


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Folio project.

    Args:
        root: Root directory for the new project.
    """
    for src_path in _TEMPLATES_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_TEMPLATES_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)

    (root / "assets" / "highlight.css").write_text(
        theme_css(_PYGMENTS_STYLE) + "\n", encoding="utf-8"
    )
