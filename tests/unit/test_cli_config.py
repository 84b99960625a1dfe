#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli_config.py
"""Unit tests for CLI configuration files and environment-aware actions."""

import argparse
import logging

import pytest

from gdoc2md.cli.actions import EnvironmentAwareAction, EnvironmentAwareBooleanAction, env_key_for
from gdoc2md.cli.config import discover_config_file, load_config_file, load_config_with_priority


@pytest.mark.unit
class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_toml(self, tmp_path):
        path = tmp_path / ".gdoc2md.toml"
        path.write_text('code-blocks = "fenced"\nsuggestions = "accept"\n', encoding="utf-8")
        assert load_config_file(path) == {"code_blocks": "fenced", "suggestions": "accept"}

    def test_yaml(self, tmp_path):
        path = tmp_path / ".gdoc2md.yaml"
        path.write_text("heading_ids: html\nbullet_symbol: '*'\n", encoding="utf-8")
        assert load_config_file(path) == {"heading_ids": "html", "bullet_symbol": "*"}

    def test_json(self, tmp_path):
        path = tmp_path / ".gdoc2md.json"
        path.write_text('{"suggestions": "show"}', encoding="utf-8")
        assert load_config_file(str(path)) == {"suggestions": "show"}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / ".gdoc2md.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.gdoc2md]\ncode_blocks = "fenced"\n', encoding="utf-8")
        assert load_config_file(path) == {"code_blocks": "fenced"}

    @pytest.mark.parametrize(
        "name,content",
        [
            (".gdoc2md.toml", "code_blocks = "),
            (".gdoc2md.json", "{not json"),
            (".gdoc2md.yaml", "- a\n- b\n"),
            ("settings.ini", "[x]"),
        ],
    )
    def test_invalid_files(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")


@pytest.mark.unit
class TestDiscovery:
    """Tests for configuration discovery."""

    def test_nothing_found(self, tmp_path):
        assert discover_config_file(tmp_path) is None

    def test_dotfile_preferred_over_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.gdoc2md]\nsuggestions = 'show'\n", encoding="utf-8")
        (tmp_path / ".gdoc2md.json").write_text("{}", encoding="utf-8")
        assert discover_config_file(tmp_path) == tmp_path / ".gdoc2md.json"

    def test_pyproject_without_section_ignored(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert discover_config_file(tmp_path) is None

    def test_broken_pyproject_skipped(self, tmp_path, caplog):
        (tmp_path / "pyproject.toml").write_text("[tool.gdoc2md\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert discover_config_file(tmp_path) is None
        assert "Ignoring" in caplog.text

    def test_priority(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".gdoc2md.toml").write_text('suggestions = "hide"\n', encoding="utf-8")
        explicit = tmp_path / "other.json"
        explicit.write_text('{"suggestions": "accept"}', encoding="utf-8")
        assert load_config_with_priority() == {"suggestions": "hide"}
        assert load_config_with_priority(str(explicit)) == {"suggestions": "accept"}


@pytest.mark.unit
class TestEnvironmentActions:
    """Tests for environment-aware argparse actions."""

    @staticmethod
    def _parser():
        parser = argparse.ArgumentParser()
        parser.add_argument("--suggestions", action=EnvironmentAwareAction, choices=["show", "hide"], default=None)
        parser.add_argument("--rich", action=EnvironmentAwareBooleanAction)
        return parser

    def test_env_key(self):
        assert env_key_for("code_blocks") == "GDOC2MD_CODE_BLOCKS"

    def test_no_environment(self, monkeypatch):
        monkeypatch.delenv("GDOC2MD_SUGGESTIONS", raising=False)
        monkeypatch.delenv("GDOC2MD_RICH", raising=False)
        args = self._parser().parse_args([])
        assert args.suggestions is None
        assert args.rich is False

    def test_environment_default_and_flag_override(self, monkeypatch):
        monkeypatch.setenv("GDOC2MD_SUGGESTIONS", "hide")
        monkeypatch.setenv("GDOC2MD_RICH", "yes")
        parser = self._parser()
        assert parser.parse_args([]).suggestions == "hide"
        assert parser.parse_args([]).rich is True
        assert parser.parse_args(["--suggestions", "show"]).suggestions == "show"

    def test_invalid_environment_value_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("GDOC2MD_SUGGESTIONS", "sometimes")
        with caplog.at_level(logging.WARNING):
            args = self._parser().parse_args([])
        assert args.suggestions is None
        assert "GDOC2MD_SUGGESTIONS" in caplog.text
