"""Application configuration via environment variables and a TOML file."""

from datetime import timedelta
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

CONFIG_PATH = Path.home() / ".config" / "agenda" / "config.toml"

# Number of palettes known to the renderer (agenda.ui.theme.PALETTES)
THEME_COUNT = 9


class Settings(BaseSettings):
    """Settings loaded from init kwargs, environment, .env, then config.toml.

    All values are read once at startup and treated as immutable for the
    lifetime of the process.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        toml_file=CONFIG_PATH,
        extra="ignore",
    )

    # Application
    app_name: str = "Agenda"
    debug: bool = False
    log_dir: Path = Path.home() / ".logs" / "agenda"

    # Reminders and refresh
    notification_period_minutes: int = Field(default=2, ge=0)
    refresh_period_seconds: int = Field(default=10, ge=1)
    limit_days: int = Field(default=7, ge=1)
    auth_timeout_millis: int = Field(default=10000, ge=1)
    cancelled_as_remove: bool = True

    # Presentation
    theme: int = 0
    window_command: Annotated[list[str], NoDecode] = ["zellij", "action", "toggle-floating-panes"]

    # Google Calendar API
    google_client_id: str = ""
    google_client_secret: str = ""
    google_refresh_token: str = ""  # Obtained via scripts/get_token.py
    google_calendar_id: str = "primary"
    auth_port: int = 8000

    @field_validator("theme")
    @classmethod
    def check_theme(cls, value: int) -> int:
        if not 0 <= value < THEME_COUNT:
            raise ValueError(f"theme must be between 0 and {THEME_COUNT - 1}")
        return value

    @field_validator("window_command", mode="before")
    @classmethod
    def split_window_command(cls, value):
        # Environment and TOML may give the command as a single string
        if isinstance(value, str):
            return value.split()
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @property
    def lead_time(self) -> timedelta:
        return timedelta(minutes=self.notification_period_minutes)

    @property
    def visible_window(self) -> timedelta:
        return timedelta(days=self.limit_days)

    @property
    def auth_timeout(self) -> float:
        """Credential deadline in seconds."""
        return self.auth_timeout_millis / 1000


settings = Settings()
