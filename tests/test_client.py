"""Tests for the startup credential gate."""

import threading
from types import SimpleNamespace

import pytest

from agenda.calendar.client import AuthenticationError, acquire_credentials, client_config
from agenda.core.config import Settings


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    return Settings(
        _env_file=None,
        google_client_id="client-id",
        google_client_secret="client-secret",
        auth_timeout_millis=10000,
    )


class TestAcquireCredentials:
    def test_returns_credentials(self, settings: Settings):
        credentials = SimpleNamespace(token="access-token")

        result = acquire_credentials(settings, login=lambda s: credentials)

        assert result is credentials

    def test_timeout_fails_startup(self, settings: Settings):
        """A login that never completes is abandoned at the deadline."""
        never = threading.Event()

        def hanging_login(s):
            never.wait(5)
            return SimpleNamespace(token="too-late")

        with pytest.raises(AuthenticationError, match="timed out"):
            acquire_credentials(settings, timeout=0.05, login=hanging_login)
        never.set()

    def test_login_error_fails_startup(self, settings: Settings):
        def broken_login(s):
            raise ValueError("invalid_grant")

        with pytest.raises(AuthenticationError, match="invalid_grant"):
            acquire_credentials(settings, login=broken_login)

    def test_empty_token_fails_startup(self, settings: Settings):
        with pytest.raises(AuthenticationError):
            acquire_credentials(settings, login=lambda s: SimpleNamespace(token=None))


class TestClientConfig:
    def test_installed_app_config(self, settings: Settings):
        config = client_config(settings)["installed"]
        assert config["client_id"] == "client-id"
        assert config["client_secret"] == "client-secret"
        assert config["token_uri"] == "https://oauth2.googleapis.com/token"
