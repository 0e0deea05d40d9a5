"""Tests for the top-level CLI wiring."""
from typer.testing import CliRunner

from wechat_media.main import app

runner = CliRunner()


def test_help_lists_command_groups():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "auth" in result.stdout
    assert "materials" in result.stdout


def test_materials_help():
    result = runner.invoke(app, ["materials", "list", "--help"])
    assert result.exit_code == 0
    assert "--output" in result.stdout
