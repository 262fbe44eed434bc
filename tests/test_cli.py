"""
Tests for the diagnostics CLI.

The httpx transport is swapped for FakeTransport via monkeypatch.
"""

import logging

import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from fakes import FakeTransport

runner = CliRunner()


@pytest.fixture
def fake_transport(monkeypatch) -> FakeTransport:
    fake = FakeTransport()
    monkeypatch.setattr(cli_main, "HttpxTransport", lambda settings: fake)
    monkeypatch.setenv("AUTHWIRE_API_KEY", "cli-key")
    yield fake
    logging.getLogger().handlers.clear()


class TestStartEnrollmentCommand:
    def test_prints_creation_options(self, fake_transport) -> None:
        fake_transport.respond_with_json(
            {
                "credentialCreationOptions": {
                    "challenge": "challengebytes",
                    "rp": {"id": "1234567890"},
                    "user": {"id": "user-id"},
                }
            }
        )

        result = runner.invoke(cli_main.app, ["start-enrollment", "--id-token", "tok"])

        assert result.exit_code == 0
        assert "challengebytes" in result.output
        assert fake_transport.last.headers["X-Goog-Api-Key"] == "cli-key"

    def test_invalid_response_exits_with_error(self, fake_transport) -> None:
        fake_transport.respond_with_json({"wrongkey": {}})

        result = runner.invoke(cli_main.app, ["start-enrollment", "--id-token", "tok"])

        assert result.exit_code == 1
        assert "internal_error" in result.output
        assert "credentialCreationOptions" in result.output


class TestSignUpCommand:
    def test_prints_tokens(self, fake_transport) -> None:
        fake_transport.respond_with_json({"idToken": "abc", "refreshToken": "xyz", "expiresIn": "3600"})

        result = runner.invoke(cli_main.app, ["sign-up", "--email", "user@example.com"])

        assert result.exit_code == 0
        assert "abc" in result.output
        assert fake_transport.last.json()["email"] == "user@example.com"


class TestEntryPoint:
    """The `authwire` console script resolves to `cli.main:run`."""

    def test_run_invokes_the_app(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.argv", ["authwire", "--help"])
        with pytest.raises(SystemExit) as exc_info:
            cli_main.run()
        assert exc_info.value.code == 0

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(cli_main.app, ["--help"])
        assert result.exit_code == 0
        for command in ("start-enrollment", "sign-up", "doctor"):
            assert command in result.output
