from typer.testing import CliRunner

from hushprompt.cli import app

runner = CliRunner()


def test_version_command_runs() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "hushprompt version" in result.stdout
