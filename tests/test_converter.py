import subprocess

import pytest

from folio import converter as converter_mod
from folio.converter import ConversionError, PandocConverter


def test_convert_pipes_body_through_pandoc(monkeypatch):
    calls = {}

    def fake_run(cmd, **kwargs):
        calls["cmd"] = cmd
        calls["input"] = kwargs["input"]
        return subprocess.CompletedProcess(cmd, 0, stdout="<p>Hello</p>\n", stderr="")

    monkeypatch.setattr(converter_mod, "find_executable", lambda name, root=None: "/usr/bin/pandoc")
    monkeypatch.setattr(subprocess, "run", fake_run)

    html = PandocConverter().convert("Hello", "org")
    assert html == "<p>Hello</p>\n"
    assert calls["cmd"] == ["/usr/bin/pandoc", "--from=org", "--to=html"]
    assert calls["input"] == "Hello"


def test_convert_failure_raises(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 64, stdout="", stderr="Unknown input format")

    monkeypatch.setattr(converter_mod, "find_executable", lambda name, root=None: "pandoc")
    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(ConversionError) as excinfo:
        PandocConverter().convert("Hello", "nope")
    assert excinfo.value.stderr == "Unknown input format"
    assert "status 64" in str(excinfo.value)


def test_convert_missing_executable(monkeypatch):
    monkeypatch.setattr(converter_mod, "find_executable", lambda name, root=None: None)
    with pytest.raises(ConversionError, match="not found"):
        PandocConverter("pandoc-missing").convert("Hello", "org")


def test_find_executable_checks_node_modules(monkeypatch, tmp_path):
    from folio import executables

    monkeypatch.setenv("PATH", str(tmp_path / "empty"))
    assert executables.find_executable("terser", tmp_path) is None

    local = tmp_path / "node_modules" / ".bin" / "terser"
    local.parent.mkdir(parents=True)
    local.write_text("#!/bin/sh\n", encoding="utf-8")
    local.chmod(0o644)
    assert executables.find_executable("terser", tmp_path) is None

    local.chmod(0o755)
    assert executables.find_executable("terser", tmp_path) == str(local)
    assert executables.find_executable("terser") is None
