"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from homehub.shared import EnumEnvironment, EnumLogLevel, EnumStorageBackend
from homehub.shared.env import load_secret_file_variables  # noqa: F401


class StorageSettings(BaseSettings):
    """Where identifier, room and credential documents are kept."""

    backend: EnumStorageBackend = Field(
        default=EnumStorageBackend.FILE, description="Document storage backend"
    )
    data_dir: str = Field(
        default="./data", description="Directory of the JSON documents (file backend)"
    )
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/homehub",
        description="MongoDB connection URI (mongo backend)",
    )
    database_name: str = Field(
        default="homehub", description="Name of the MongoDB database"
    )

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_", case_sensitive=False, extra="ignore"
    )


class HueSettings(BaseSettings):
    """Lighting bridge settings."""

    bridge_ip: Optional[str] = Field(
        default=None, description="Bridge address used when none is stored"
    )
    app_key: Optional[str] = Field(
        default=None, description="Paired application key used when none is stored"
    )
    verify_ssl: bool = Field(
        default=False, description="Verify the bridge's self-signed certificate"
    )
    timeout: float = Field(default=10.0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="HUE_", case_sensitive=False, extra="ignore"
    )


class HiveSettings(BaseSettings):
    """Heating cloud settings."""

    base_url: str = Field(
        default="https://beekeeper-uk.hivehome.com/1.0",
        description="Heating API base URL",
    )
    access_token: Optional[str] = Field(
        default=None, description="Access token used when none is stored"
    )
    timeout: float = Field(default=15.0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="HIVE_", case_sensitive=False, extra="ignore"
    )


class SpotifySettings(BaseSettings):
    """Media cloud settings."""

    base_url: str = Field(
        default="https://api.spotify.com/v1", description="Web API base URL"
    )
    client_id: Optional[str] = Field(
        default=None, description="OAuth client id, enables the authorization URL"
    )
    redirect_uri: Optional[str] = Field(
        default=None, description="OAuth redirect URI"
    )
    access_token: Optional[str] = Field(
        default=None, description="Access token used when none is stored"
    )
    timeout: float = Field(default=10.0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="SPOTIFY_", case_sensitive=False, extra="ignore"
    )


class AggregationSettings(BaseSettings):
    """Aggregation settings."""

    default_service: str = Field(
        default="hue",
        description="Service receiving room and zone ids without a prefix",
    )
    fetch_timeout: Optional[float] = Field(
        default=10.0,
        description="Per service fetch timeout in seconds (None disables it)",
    )

    model_config = SettingsConfigDict(
        env_prefix="HOME_", case_sensitive=False, extra="ignore"
    )


class ApiSettings(BaseSettings):
    """HTTP API settings."""

    title: str = Field(default="homehub", description="API title")
    description: str = Field(
        default="One home model over several smart home backends",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    prefix: str = Field(default="/api/v2", description="Prefix of every route")
    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"], description="Origins allowed by CORS"
    )
    host: str = Field(default="0.0.0.0", description="Address to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("API_GIT_COMMIT", "GIT_COMMIT"),
    )

    model_config = SettingsConfigDict(
        env_prefix="API_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    hue: HueSettings = Field(default_factory=HueSettings)
    hive: HiveSettings = Field(default_factory=HiveSettings)
    spotify: SpotifySettings = Field(default_factory=SpotifySettings)
    aggregation: AggregationSettings = Field(default_factory=AggregationSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings per environment.
    """
    return AppSettings()
