"""
Tests for environment-driven settings.
"""

import pytest

from core.config import AppSettings, get_user_env_file


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ("AUTHWIRE_API_KEY", "AUTHWIRE_APP_ID", "AUTHWIRE_BACKEND_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


class TestAppSettings:
    def test_reads_prefixed_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("AUTHWIRE_API_KEY", "key-from-env")
        monkeypatch.setenv("AUTHWIRE_APP_ID", "app-from-env")

        settings = AppSettings(_env_file=None)
        configuration = settings.request_configuration()

        assert configuration.api_key == "key-from-env"
        assert configuration.app_id == "app-from-env"

    def test_missing_api_key_is_rejected(self) -> None:
        settings = AppSettings(_env_file=None)
        with pytest.raises(ValueError, match="AUTHWIRE_API_KEY"):
            settings.request_configuration()

    def test_defaults(self) -> None:
        settings = AppSettings(_env_file=None)
        assert settings.backend_base_url.startswith("https://")
        assert settings.http_timeout_seconds > 0

    def test_user_env_file_location(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_user_env_file() == tmp_path / "authwire" / ".env"
