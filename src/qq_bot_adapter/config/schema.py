"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotConfig(BaseModel):
    """Bot credentials, consumed by the connection layer."""

    app_id: str
    secret: str

    @field_validator("app_id")
    @classmethod
    def validate_app_id(cls, v: str) -> str:
        """Validate the numeric app id."""
        if not v.isdigit():
            raise ValueError("App id must be numeric")
        return v

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        """Reject an empty secret."""
        if not v.strip():
            raise ValueError("Bot secret must not be empty")
        return v


class ParserConfig(BaseModel):
    """Message parsing configuration."""

    attachment_scheme: Literal["https", "http"] = "https"


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("logs/qq-bot-adapter.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"
    file: FileLoggingConfig = FileLoggingConfig()


class AdapterConfig(BaseSettings):
    """Root configuration for qq-bot-adapter."""

    bot: BotConfig | None = None
    parser: ParserConfig = ParserConfig()
    logging: LoggingConfig = LoggingConfig()
    dispatch_types: list[str] = Field(
        default_factory=list,
        description="Dispatch types to accept; empty accepts every message dispatch",
    )

    model_config = SettingsConfigDict(
        env_prefix="QQ_BOT_",
        env_nested_delimiter="__",
    )
