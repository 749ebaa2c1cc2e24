# tests/test_source.py
import os
from pathlib import Path

import pytest

from mgrep.core.ignore import is_path_ignored, load_ignore_spec
from mgrep.core.scanner import TreeScanner
from mgrep.core.source import read_sources
from mgrep.models import FilePath, InputReadFailure, LiteralText, SourceText

# --- Fixtures ---

@pytest.fixture
def project(tmp_path):
    """
    A small tree with:
    1. plain text files at two levels
    2. a directory and a pattern excluded by .gitignore
    3. a binary file that no rule excludes
    4. a default-ignored directory (node_modules/)
    """
    src = tmp_path / "src"
    src.mkdir()
    logs = tmp_path / "logs"
    logs.mkdir()
    assets = tmp_path / "assets"
    assets.mkdir()
    modules = tmp_path / "node_modules"
    modules.mkdir()

    (src / "main.py").write_text("print('needle')\n", encoding="utf-8")
    (src / "notes.tmp").write_text("needle in tmp\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("# Needle project\nneedle here\n", encoding="utf-8")
    (logs / "app.log").write_text("needle in log\n", encoding="utf-8")
    (assets / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00needle")
    (modules / "dep.js").write_text("needle\n", encoding="utf-8")

    (tmp_path / ".gitignore").write_text("logs/\n*.tmp\n", encoding="utf-8")
    return tmp_path


# --- Ignore rules ---

def test_defaults_apply_without_gitignore(tmp_path):
    spec = load_ignore_spec(tmp_path)
    assert is_path_ignored(spec, Path(".git"), is_directory=True) is True
    assert is_path_ignored(spec, Path("__pycache__"), is_directory=True) is True
    assert is_path_ignored(spec, Path("src/main.py")) is False


def test_gitignore_rules_are_loaded(project):
    spec = load_ignore_spec(project)
    assert is_path_ignored(spec, Path("logs"), is_directory=True) is True
    assert is_path_ignored(spec, Path("logs/app.log")) is True
    assert is_path_ignored(spec, Path("src/notes.tmp")) is True
    assert is_path_ignored(spec, Path("README.md")) is False


def test_directory_pattern_needs_directory_flag(tmp_path):
    spec = load_ignore_spec(tmp_path, extra_patterns=["build/"])
    assert is_path_ignored(spec, Path("build"), is_directory=True) is True
    assert is_path_ignored(spec, Path("build")) is False


def test_gitignore_can_reinclude_a_default(tmp_path):
    (tmp_path / ".gitignore").write_text("!*.pyc\n", encoding="utf-8")
    spec = load_ignore_spec(tmp_path)
    assert is_path_ignored(spec, Path("cached.pyc")) is False


# --- Scanner ---

def test_scanner_yields_text_files_in_sorted_order(project):
    scanner = TreeScanner(project, load_ignore_spec(project))
    labels = [source.label for source in scanner.scan()]
    assert labels == ["README.md", "src/main.py"]


def test_scanner_skips_binary_files_even_when_not_ignored(project):
    scanner = TreeScanner(project, load_ignore_spec(project, extra_patterns=["!*.png"]))
    labels = [source.label for source in scanner.scan()]
    assert "assets/image.png" not in labels


def test_scanner_skips_undecodable_files(tmp_path):
    (tmp_path / "latin1.txt").write_bytes("caf\xe9".encode("latin-1"))
    (tmp_path / "ok.txt").write_text("fine", encoding="utf-8")
    labels = [s.label for s in TreeScanner(tmp_path, load_ignore_spec(tmp_path)).scan()]
    assert labels == ["ok.txt"]


# --- Source reader ---

def test_literal_text_source():
    assert read_sources(LiteralText("a\nb")) == [SourceText(content="a\nb")]


def test_file_source(tmp_path):
    poem = tmp_path / "poem.txt"
    poem.write_text("I'm nobody! Who are you?\n", encoding="utf-8")
    assert read_sources(FilePath(str(poem))) == [SourceText(content="I'm nobody! Who are you?\n")]


def test_missing_file_raises(tmp_path):
    with pytest.raises(InputReadFailure, match="No such file"):
        read_sources(FilePath(str(tmp_path / "missing.txt")))


def test_non_utf8_file_raises(tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(InputReadFailure):
        read_sources(FilePath(str(bad)))


def test_directory_source_expands_to_labelled_files(project):
    sources = read_sources(FilePath(str(project) + "/"))
    assert [s.label for s in sources] == ["README.md", "src/main.py"]
    assert sources[1].content == "print('needle')\n"


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="named pipes need os.mkfifo")
def test_scanner_skips_named_pipes(tmp_path):
    os.mkfifo(tmp_path / "pipe")
    (tmp_path / "ok.txt").write_text("fine", encoding="utf-8")
    labels = [s.label for s in TreeScanner(tmp_path, load_ignore_spec(tmp_path)).scan()]
    assert labels == ["ok.txt"]
