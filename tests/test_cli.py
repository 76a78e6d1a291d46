import logging
from pathlib import Path
from types import SimpleNamespace

import pytest
from click.testing import CliRunner

from folio.build import BuildError, BuildResult
from folio.cli import cli


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("folio")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_cli_new_scaffolds_project(tmp_path):
    runner = CliRunner()
    target = tmp_path / "mysite"
    result = runner.invoke(cli, ["new", str(target)])
    assert result.exit_code == 0
    assert (target / "folio.yaml").exists()
    assert (target / "pages" / "post.html.jinja").exists()
    assert (target / "pages" / "index.html.jinja").exists()
    assert (target / "partials" / "head.html").exists()
    assert (target / "assets" / "fonts.css").exists()
    assert (target / "posts" / "hello-world.org").exists()
    assert ".highlight" in (target / "assets" / "highlight.css").read_text(encoding="utf-8")

    # fails on non-empty directory
    result = runner.invoke(cli, ["new", str(target)])
    assert result.exit_code != 0
    assert "non-empty" in result.output


def test_cli_build(monkeypatch, tmp_path):
    runner = CliRunner()
    monkeypatch.chdir(tmp_path)
    seen = {}

    def fake_build_site(root):
        seen["root"] = root
        out = root / "build"
        return BuildResult(documents=[], output_dir=out, written=[out / "index.html"])

    monkeypatch.setattr("folio.build.build_site", fake_build_site)
    result = runner.invoke(cli, ["build"], catch_exceptions=False)
    assert result.exit_code == 0
    assert seen["root"] == Path.cwd()
    assert "Built 1 pages into" in result.output


def test_cli_build_failure_exits_nonzero(monkeypatch, tmp_path):
    runner = CliRunner()
    monkeypatch.chdir(tmp_path)

    def failing_build_site(root):
        raise BuildError(root / "posts" / "bad.org", "pandoc exited with status 1")

    monkeypatch.setattr("folio.build.build_site", failing_build_site)
    result = runner.invoke(cli, ["build", "--verbose"])
    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert str(Path("posts") / "bad.org") in result.output
    assert "pandoc exited with status 1" in result.output


def test_cli_doc_creates_document(monkeypatch, tmp_path):
    runner = CliRunner()
    monkeypatch.chdir(tmp_path)
    (tmp_path / "posts").mkdir()

    monkeypatch.setattr(
        "folio.cli.questionary.text",
        lambda *args, **kwargs: SimpleNamespace(ask=lambda: "  My First Post "),
    )
    monkeypatch.setattr(
        "folio.cli.questionary.select",
        lambda *args, **kwargs: SimpleNamespace(ask=lambda: ".md"),
    )
    result = runner.invoke(cli, ["doc"])
    assert result.exit_code == 0
    created = tmp_path / "posts" / "my-first-post.md"
    text = created.read_text(encoding="utf-8")
    assert text.startswith("title: My First Post\ndate: ")
    assert text.endswith("\n---\n")

    result = runner.invoke(cli, ["doc"])
    assert result.exit_code != 0
    assert "already exists" in result.output


def test_cli_doc_requires_documents_dir(monkeypatch, tmp_path):
    runner = CliRunner()
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(cli, ["doc"])
    assert result.exit_code != 0
    assert "No posts/ directory found" in result.output


def test_module_main_entrypoint():
    from folio.__main__ import main

    assert callable(main)
