"""Tests for application settings."""

from datetime import timedelta

import pytest
from pydantic import ValidationError
from pydantic_settings import SettingsConfigDict

from agenda.core.config import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("NOTIFICATION_PERIOD_MINUTES", "THEME", "WINDOW_COMMAND", "LIMIT_DAYS"):
        monkeypatch.delenv(name, raising=False)


def isolated(tmp_path, toml: str = "") -> type[Settings]:
    """A Settings class reading its TOML file from ``tmp_path``."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(toml)

    class IsolatedSettings(Settings):
        model_config = SettingsConfigDict(env_file=None, toml_file=config_file)

    return IsolatedSettings


class TestDefaults:
    def test_defaults(self, tmp_path):
        settings = isolated(tmp_path)()

        assert settings.lead_time == timedelta(minutes=2)
        assert settings.refresh_period_seconds == 10
        assert settings.visible_window == timedelta(days=7)
        assert settings.auth_timeout == 10.0
        assert settings.cancelled_as_remove is True
        assert settings.window_command == ["zellij", "action", "toggle-floating-panes"]


class TestSources:
    def test_toml_file(self, tmp_path):
        settings = isolated(
            tmp_path,
            'notification_period_minutes = 5\ntheme = 3\nwindow_command = ["tmux", "select-pane"]\n',
        )()

        assert settings.lead_time == timedelta(minutes=5)
        assert settings.theme == 3
        assert settings.window_command == ["tmux", "select-pane"]

    def test_environment_beats_toml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NOTIFICATION_PERIOD_MINUTES", "7")
        settings = isolated(tmp_path, "notification_period_minutes = 5\n")()
        assert settings.notification_period_minutes == 7

    def test_window_command_from_string(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WINDOW_COMMAND", "tmux display-popup")
        settings = isolated(tmp_path)()
        assert settings.window_command == ["tmux", "display-popup"]


class TestValidation:
    @pytest.mark.parametrize(
        "field, value",
        [
            ("theme", 9),
            ("theme", -1),
            ("notification_period_minutes", -1),
            ("refresh_period_seconds", 0),
            ("limit_days", 0),
            ("auth_timeout_millis", 0),
        ],
    )
    def test_out_of_range(self, tmp_path, field, value):
        with pytest.raises(ValidationError):
            isolated(tmp_path)(**{field: value})
