import pytest
from typer.testing import CliRunner

from relay import __version__
from relay.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # Keep Rich tables from wrapping cell contents.
    monkeypatch.setenv("COLUMNS", "200")


@pytest.mark.unit
def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.unit
def test_config_validate_clean():
    result = runner.invoke(app, ["config", "validate"])

    assert result.exit_code == 0
    assert "Configuration is valid" in result.output


@pytest.mark.unit
def test_config_validate_reports_errors(monkeypatch):
    monkeypatch.setenv("PORT", "99999")

    result = runner.invoke(app, ["config", "validate"])

    assert result.exit_code == 1
    assert "PORT" in result.output


@pytest.mark.unit
def test_config_show_masks_secrets(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-super-secret")

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    assert "gsk-super-secret" not in result.output
    assert "GROQ_API_KEY" in result.output


@pytest.mark.unit
def test_providers_lists_catalog(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-key")

    result = runner.invoke(app, ["providers"])

    assert result.exit_code == 0
    assert "Groq" in result.output
    assert "CEREBRAS_API_KEY" in result.output


@pytest.mark.unit
def test_providers_without_keys_fails():
    result = runner.invoke(app, ["providers"])

    assert result.exit_code == 1
    assert "No provider has an API key" in result.output
