from __future__ import annotations

from typer.testing import CliRunner

from wfv import __version__
from wfv.cli.app import app

runner = CliRunner()


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_commands_are_registered() -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "find" in result.stdout
    assert "releases" in result.stdout


def test_find_help_lists_options() -> None:
    result = runner.invoke(app, ["find", "--help"])

    assert result.exit_code == 0
    assert "--release-identifier" in result.stdout
    assert "--no-fetch" in result.stdout
