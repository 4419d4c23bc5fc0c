"""Tests for init CLI command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from blogforge.cli import cli
from blogforge.config.loader import load_config


class TestInitCommandNonInteractive:
    """Tests for init with --no-interact flag."""

    def test_init_basic(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--no-interact", "init", str(tmp_path)])
        assert result.exit_code == 0
        assert "init" in result.output
        assert (tmp_path / "blogforge.config.json").is_file()
        assert (tmp_path / "content" / "articles").is_dir()

    def test_init_json_output(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "--no-interact",
                "init",
                str(tmp_path),
                "--languages",
                "en,ar",
                "--default-language",
                "ar",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "init"
        assert data["data"]["languages"] == ["en", "ar"]
        assert data["data"]["default_language"] == "ar"
        assert data["data"]["multilingual"] is True

    def test_init_single_language_flag(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "--no-interact", "init", str(tmp_path), "--languages", "en,fr", "--single-language"],
        )
        assert json.loads(result.output)["data"]["multilingual"] is False

    def test_init_custom_directories(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["--no-interact", "init", str(tmp_path), "--articles", "posts", "--images", "img"],
        )
        assert result.exit_code == 0
        assert (tmp_path / "content" / "posts").is_dir()
        assert (tmp_path / "public" / "img").is_dir()
        assert load_config(tmp_path).directories.articles == "posts"

    def test_init_existing_project_fails(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cli_runner.invoke(cli, ["--no-interact", "init", str(tmp_path)])
        result = cli_runner.invoke(cli, ["--json", "--no-interact", "init", str(tmp_path)])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "ALREADY_EXISTS"

    def test_init_force(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cli_runner.invoke(cli, ["--no-interact", "init", str(tmp_path)])
        result = cli_runner.invoke(
            cli, ["--no-interact", "init", str(tmp_path), "--languages", "de", "--force"]
        )
        assert result.exit_code == 0
        assert load_config(tmp_path).default_language == "de"


class TestInitCommandInteractive:
    def test_prompts_for_languages(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "init", str(tmp_path)], input="en,fr\nfr\n")
        assert result.exit_code == 0, result.output
        cfg = load_config(tmp_path)
        assert cfg.languages == ("en", "fr")
        assert cfg.default_language == "fr"
