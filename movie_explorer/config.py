"""Runtime configuration based on environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, HttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

GEMINI_OPENAI_COMPAT_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class CatalogSettings(BaseModel):
    base_url: AnyHttpUrl = Field(default="https://api.themoviedb.org/3")
    image_base_url: AnyHttpUrl = Field(default="https://image.tmdb.org/t/p")
    api_key: SecretStr | None = Field(
        default=None,
        description="TMDB v4 read access token, sent as a bearer token.",
    )
    language: str = "en-US"
    request_timeout_seconds: int = Field(default=10, ge=1, le=60)


class BackendSettings(BaseModel):
    base_url: AnyHttpUrl = Field(default="http://localhost:5000/api")
    user_id: str = Field(default="user123", min_length=1)
    request_timeout_seconds: int = Field(default=30, ge=1, le=120)


class DatabaseSettings(BaseModel):
    dsn: str = Field(
        default="sqlite+aiosqlite:///./movie_explorer.db",
        description="SQLAlchemy async DSN.",
    )
    pool_size: int = Field(default=5, ge=1, le=50)
    max_overflow: int = Field(default=10, ge=0, le=100)
    echo: bool = False
    pool_recycle: int = Field(default=3600, ge=30)
    pool_pre_ping: bool = Field(default=True)


class OpenAICompatibleSettings(BaseModel):
    api_key: SecretStr | None = None
    base_url: HttpUrl | None = None


class AzureProviderSettings(BaseModel):
    api_key: SecretStr | None = None
    base_url: HttpUrl | None = None
    api_version: str | None = None


class LLMSettings(BaseModel):
    provider: Literal["openai", "azure", "azure_openai", "gemini", "custom", "anthropic"] = "gemini"
    model: str = "gemini-1.5-flash"
    api_key: SecretStr | None = None
    base_url: HttpUrl | None = None
    api_version: str | None = None
    request_timeout_seconds: int = Field(default=60, ge=5, le=600)
    openai: OpenAICompatibleSettings = Field(default_factory=OpenAICompatibleSettings)
    azure: AzureProviderSettings = Field(default_factory=AzureProviderSettings)
    gemini: OpenAICompatibleSettings = Field(default_factory=OpenAICompatibleSettings)
    custom: OpenAICompatibleSettings = Field(default_factory=OpenAICompatibleSettings)

    def openai_like_credentials(self, provider: str) -> tuple[SecretStr | None, str | None]:
        provider = provider.lower()
        if provider == "custom":
            api_key = self.custom.api_key or self.openai.api_key or self.api_key
            base_url = self.custom.base_url or self.openai.base_url or self.base_url
        elif provider == "gemini":
            api_key = self.gemini.api_key or self.api_key
            base_url = self.gemini.base_url or self.base_url or GEMINI_OPENAI_COMPAT_URL
        else:
            api_key = self.openai.api_key or self.api_key
            base_url = self.openai.base_url or self.base_url
        return api_key, str(base_url) if base_url else None


class TopMoviesSettings(BaseModel):
    movie_count: int = Field(default=5, ge=1, le=20)


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    public_base_url: AnyHttpUrl = Field(
        default="http://localhost:5000",
        description="Used to turn relative poster paths into absolute URLs.",
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class ExplorerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EXPLORER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    backend: BackendSettings = Field(default_factory=BackendSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    top_movies: TopMoviesSettings = Field(default_factory=TopMoviesSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


def load_settings(**overrides) -> ExplorerSettings:
    """Build a fresh settings object from the environment.

    The result is meant to be created once at startup and handed to the
    clients, services and app factory that need it.
    """

    return ExplorerSettings(**overrides)


__all__ = [
    "AzureProviderSettings",
    "BackendSettings",
    "CatalogSettings",
    "DatabaseSettings",
    "ExplorerSettings",
    "LLMSettings",
    "OpenAICompatibleSettings",
    "ServerSettings",
    "TopMoviesSettings",
    "load_settings",
]
