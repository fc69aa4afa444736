"""Application settings and configuration."""

from typing import Literal

from pydantic import Field, model_validator  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore

DEFAULT_ELASTICSEARCH_URL = "http://localhost:9200"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")
    PROJECT_NAME: str = Field(default="Library Discovery Catalog")

    # API
    API_PREFIX: str = Field(default="")

    # CORS - Accept string or list, will be normalized to list
    CORS_ORIGINS: str | list[str] = Field(default="http://localhost:3000,http://localhost:3001")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Elasticsearch
    ELASTICSEARCH_ENABLED: bool = Field(default=True)
    ELASTICSEARCH_URL: str = Field(default=DEFAULT_ELASTICSEARCH_URL)
    ELASTICSEARCH_USERNAME: str | None = Field(default=None)
    ELASTICSEARCH_PASSWORD: str | None = Field(default=None)
    ELASTICSEARCH_REQUEST_TIMEOUT_MS: int = Field(default=2000)
    ELASTICSEARCH_RETRY_MAX: int = Field(default=2)

    # Catalog
    CATALOG_INDEX: str = Field(default="catalog")
    CATALOG_TITLE_FIELD: str = Field(default="title_tsim")
    CATALOG_DISPLAY_TYPE_FIELD: str = Field(default="format")
    CATALOG_DEFAULT_PER_PAGE: int = Field(default=10, ge=1)
    CATALOG_MAX_PER_PAGE: int = Field(default=100, ge=1)
    MORE_LIKE_THIS_COUNT: int = Field(default=5, ge=0)

    # Email Configuration
    EMAIL_BACKEND: str = Field(default="console")  # console, mailpit, smtp
    EMAIL_HOST: str = Field(default="localhost")
    EMAIL_PORT: int = Field(default=1025)
    EMAIL_FROM: str = Field(default="noreply@local.test")
    EMAIL_USE_TLS: bool = Field(default=False)
    EMAIL_USE_SSL: bool = Field(default=False)

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins(cls, data):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(data, dict) and "CORS_ORIGINS" in data:
            cors_origins = data["CORS_ORIGINS"]
            if isinstance(cors_origins, str):
                data["CORS_ORIGINS"] = [
                    origin.strip() for origin in cors_origins.split(",") if origin.strip()
                ]
        return data

    def __init__(self, **kwargs):
        """Validate settings on initialization."""
        super().__init__(**kwargs)
        # Ensure CORS_ORIGINS is a list after initialization
        if isinstance(self.CORS_ORIGINS, str):
            object.__setattr__(
                self,
                "CORS_ORIGINS",
                [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()],
            )
        if self.CATALOG_DEFAULT_PER_PAGE > self.CATALOG_MAX_PER_PAGE:
            raise ValueError("CATALOG_DEFAULT_PER_PAGE must be <= CATALOG_MAX_PER_PAGE")
        # Fail fast in production if the search engine still points at localhost
        if self.ENV == "prod":
            if self.ELASTICSEARCH_ENABLED and self.ELASTICSEARCH_URL == DEFAULT_ELASTICSEARCH_URL:
                raise ValueError("ELASTICSEARCH_URL must be set in production")


# Global settings instance
settings = Settings()
