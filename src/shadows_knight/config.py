"""Runtime configuration for the search agent."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="SHADOWS_KNIGHT_", env_file=".env", extra="ignore")

    app_name: str = "shadows-knight"
    log_level: LogLevel = Field(
        default="WARNING",
        description="Log level for the stderr handler; stdout is reserved for jump coordinates.",
    )
    log_file: str | None = None
    strategy: str = "binary"
    simulation_turns: int = Field(default=20, ge=2, le=100)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


settings = Settings()
