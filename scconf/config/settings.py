"""Settings for scconf's own tooling (logging, CLI output)."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class Settings(BaseSettings):
    """scconf tooling settings, read from SC_* environment variables.

    These settings configure the loader facade and CLI only. The resolution
    engine takes its inputs as explicit arguments and never reads them.
    """

    model_config = SettingsConfigDict(
        env_prefix="SC_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default="INFO", description="Logging level")
    log_format: LogFormat = Field(default="console", description="Log output format")
    redact_secrets: bool = Field(
        default=True,
        description="Redact secrets in logs and CLI output",
    )
