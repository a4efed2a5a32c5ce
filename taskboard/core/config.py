"""Configuration management for Taskboard."""

from typing import List, Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthConfig(BaseSettings):
    """Session token and password policy configuration."""

    secret_key: Optional[SecretStr] = Field(
        default=None,
        description="Secret used to sign session tokens; a random per-process key is used if unset",
    )
    algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    token_ttl_hours: int = Field(
        default=24,
        ge=1,
        description="Lifetime of an issued session token",
    )
    min_password_length: int = Field(
        default=8,
        ge=1,
        description="Minimum plaintext password length",
    )
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor",
    )

    model_config = SettingsConfigDict(env_prefix="AUTH_")


class DatabaseConfig(BaseSettings):
    """Database configuration."""

    database_url: str = Field(
        default="sqlite:///data/taskboard.db",
        description="SQLAlchemy database URL",
    )
    echo_sql: bool = Field(
        default=False,
        description="Log every SQL statement",
    )

    model_config = SettingsConfigDict(env_prefix="")


class ServerConfig(BaseSettings):
    """HTTP server configuration."""

    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server",
    )
    port: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server",
    )
    enable_cors: bool = Field(
        default=True,
        description="Enable CORS for the API server",
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:8080"],
        description="Origins allowed by CORS",
    )

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class Settings(BaseSettings):
    """Main settings combining all configurations."""

    # Sub-configurations
    auth: AuthConfig = Field(default_factory=AuthConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    # General settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (exposes internal error detail)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment and files."""
        # Load dotenv explicitly so sub-configurations see the variables too
        from dotenv import load_dotenv
        load_dotenv()
        return cls()


# Global settings instance
settings = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global settings
    if settings is None:
        settings = Settings.load()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings.load()
    return settings
