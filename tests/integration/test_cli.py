#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_cli.py
"""End-to-end tests for the gdoc2md command line."""

import io
import json
import logging
import os

import pytest
from utils import slice_clip_json

from gdoc2md.cli import main
from gdoc2md.cli.builder import EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_USAGE_ERROR

SUGGESTION_TEXT = "Keep new text old text"


@pytest.fixture(autouse=True)
def cli_environment(tmp_path, monkeypatch):
    """Run each test in an empty directory with no GDOC2MD_* variables and restore logging afterwards."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("GDOC2MD_"):
            monkeypatch.delenv(key)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield tmp_path
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "clipboard.html"
    path.write_text("<p>Hello <b>world</b></p>", encoding="utf-8")
    return path


@pytest.fixture
def suggestion_files(tmp_path):
    html = tmp_path / "suggest.html"
    html.write_text(f"<p>{SUGGESTION_TEXT}</p>", encoding="utf-8")
    clip = tmp_path / "slice_clip.json"
    clip.write_text(
        slice_clip_json(SUGGESTION_TEXT, insertions={5: ["s1"], 13: []}, deletions={14: ["s2"]}), encoding="utf-8"
    )
    return str(html), str(clip)


@pytest.mark.integration
class TestConversion:
    """Tests for reading input and writing output."""

    def test_file_to_stdout(self, html_file, capsys):
        assert main([str(html_file)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Hello **world**\n"

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<p>from stdin</p>"))
        assert main([]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "from stdin\n"

    def test_out_file(self, html_file, tmp_path, capsys):
        out = tmp_path / "notes.md"
        assert main([str(html_file), "--out", str(out)]) == EXIT_SUCCESS
        assert out.read_text(encoding="utf-8") == "Hello **world**\n"
        assert capsys.readouterr().out == ""

    def test_rich_preview(self, html_file, capsys):
        assert main([str(html_file), "--rich"]) == EXIT_SUCCESS
        assert "Hello" in capsys.readouterr().out

    def test_metadata_and_flag(self, suggestion_files, capsys):
        html, clip = suggestion_files
        assert main([html, "-m", clip, "--suggestions", "accept"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Keep new text \n"

    def test_log_file(self, html_file, tmp_path):
        log_file = tmp_path / "run.log"
        assert main([str(html_file), "--verbose", "--log-file", str(log_file)]) == EXIT_SUCCESS
        assert "normalization pass" in log_file.read_text(encoding="utf-8")


@pytest.mark.integration
class TestOptionPrecedence:
    """Flags beat environment variables, which beat configuration files."""

    def test_environment_variable(self, suggestion_files, monkeypatch, capsys):
        monkeypatch.setenv("GDOC2MD_SUGGESTIONS", "show")
        html, clip = suggestion_files
        assert main([html, "-m", clip]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Keep <ins>new text</ins> ~~old text~~\n"

    def test_flag_beats_environment(self, suggestion_files, monkeypatch, capsys):
        monkeypatch.setenv("GDOC2MD_SUGGESTIONS", "show")
        html, clip = suggestion_files
        assert main([html, "-m", clip, "--suggestions", "reject"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Keep old text\n"

    def test_discovered_config(self, suggestion_files, tmp_path, capsys):
        (tmp_path / ".gdoc2md.toml").write_text('suggestions = "accept"\n', encoding="utf-8")
        html, clip = suggestion_files
        assert main([html, "-m", clip]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Keep new text \n"

    def test_environment_beats_config(self, suggestion_files, tmp_path, monkeypatch, capsys):
        (tmp_path / ".gdoc2md.toml").write_text('suggestions = "accept"\n', encoding="utf-8")
        monkeypatch.setenv("GDOC2MD_SUGGESTIONS", "reject")
        html, clip = suggestion_files
        assert main([html, "-m", clip]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Keep old text\n"

    def test_explicit_config_with_renderer_option(self, tmp_path, capsys):
        config = tmp_path / "custom.json"
        config.write_text(json.dumps({"bullet-symbol": "*"}), encoding="utf-8")
        source = tmp_path / "list.html"
        source.write_text("<ul><li>a</li></ul>", encoding="utf-8")
        assert main([str(source), "--config", str(config)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "* a\n"


@pytest.mark.integration
class TestErrors:
    """Tests for exit codes."""

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.html")]) == EXIT_FILE_ERROR
        assert capsys.readouterr().err.startswith("Error:")

    def test_missing_config(self, html_file, capsys):
        assert main([str(html_file), "--config", "nope.toml"]) == EXIT_FILE_ERROR
        assert "does not exist" in capsys.readouterr().err

    def test_invalid_metadata(self, html_file, tmp_path, capsys):
        clip = tmp_path / "bad.json"
        clip.write_text("{not json", encoding="utf-8")
        assert main([str(html_file), "--metadata", str(clip)]) == EXIT_ERROR
        assert capsys.readouterr().err.startswith("Error:")

    def test_invalid_config_value(self, html_file, tmp_path, capsys):
        (tmp_path / ".gdoc2md.json").write_text('{"suggestions": "maybe"}', encoding="utf-8")
        assert main([str(html_file)]) == EXIT_ERROR
        assert "suggestions" in capsys.readouterr().err

    def test_invalid_choice(self, html_file):
        with pytest.raises(SystemExit) as exc_info:
            main([str(html_file), "--code-blocks", "tabs"])
        assert exc_info.value.code == EXIT_USAGE_ERROR

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("gdoc2md ")
