"""Settings parsing and model for both book platform services."""

import tomllib
from enum import StrEnum, auto
from functools import lru_cache
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, Field, HttpUrl, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Environment enum."""

    PRODUCTION = auto()
    STAGING = auto()
    DEVELOPMENT = auto()
    LOCAL = auto()
    TEST = auto()


class LogLevel(StrEnum):
    """Log level enum."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


class OTelConfig(BaseModel):
    """OpenTelemetry configuration."""

    trace_endpoint: HttpUrl
    api_key: str | None = None


class BookServiceConfig(BaseModel):
    """Configuration of the provider side, which owns the book corpus."""

    corpus_seed: int = Field(
        default=42,
        description="Seed of the pseudo-random sequence the corpus is built from.",
    )
    corpus_size: int = Field(
        default=200_000,
        ge=0,
        description="Number of books generated for every search.",
    )
    corpus_cache_enabled: bool = Field(
        default=False,
        description=(
            "Keep generated corpora in memory between searches. Off by default, "
            "in which case every search regenerates its corpus."
        ),
    )
    max_query_length: int = Field(
        default=256,
        ge=0,
        description="Author queries longer than this are rejected as bad requests.",
    )
    stream_batch_size: int = Field(
        default=256,
        gt=0,
        description="Number of JSON lines written to the response per chunk.",
    )


class BookClientConfig(BaseModel):
    """Configuration of the caller side, which queries the book service."""

    book_service_url: HttpUrl = HttpUrl("http://127.0.0.1:8081")
    timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="Connect and read deadline of a single attempt.",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        description="Retries after the first attempt, so max_retries + 1 in total.",
    )
    retry_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Backoff before the first retry, doubled for every retry after.",
    )

    @property
    def timeout_seconds(self) -> float:
        """Return the per-attempt timeout in seconds."""
        return self.timeout_ms / 1000

    @property
    def retry_delay_seconds(self) -> float:
        """Return the base retry delay in seconds."""
        return self.retry_delay_ms / 1000


class Settings(BaseSettings):
    """Settings model for the book service and the book client gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    project_root: Path = Path(__file__).joinpath("../../..").resolve()

    app_name: str = "book-platform"

    book_service: BookServiceConfig = BookServiceConfig()
    book_client: BookClientConfig = BookClientConfig()

    otel_config: OTelConfig | None = None
    otel_enabled: bool = False

    env: Environment = Field(
        default=Environment.PRODUCTION,
        description="The environment the app is running in.",
    )

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="The log level for the application.",
    )

    @model_validator(mode="after")
    def validate_otel(self) -> Self:
        """Require an OpenTelemetry config when OpenTelemetry is enabled."""
        if self.otel_enabled and not self.otel_config:
            msg = "otel_config must be provided when otel_enabled is set."
            raise ValueError(msg)
        return self

    @property
    def running_locally(self) -> bool:
        """Return True if the app is running locally."""
        return self.env in (Environment.LOCAL, Environment.TEST)

    @property
    def pyproject_toml(self) -> dict[str, Any]:
        """Get the contents of pyproject.toml."""
        return tomllib.load((self.project_root / "pyproject.toml").open("rb"))

    @property
    def app_version(self) -> str:
        """Get the application version from pyproject.toml."""
        return self.pyproject_toml["project"]["version"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get a cached settings object."""
    return Settings()
