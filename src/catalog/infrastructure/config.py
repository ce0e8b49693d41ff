"""Process configuration, read from the environment (or a .env file).

Every variable carries the ``PRODUCT_SERVICE_`` prefix, e.g.
``PRODUCT_SERVICE_REPO_TYPE=RELATIONAL``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog.domain.exceptions import ConfigurationError


class Environment(str, Enum):
    DEV = "DEV"
    PRE_PROD = "PRE_PROD"
    PROD = "PROD"


class RepositoryType(str, Enum):
    IN_MEMORY = "IN_MEMORY"
    RELATIONAL = "RELATIONAL"


class InitDataset(str, Enum):
    NONE = "NONE"
    SMALL = "SMALL"


class Settings(BaseSettings):
    """Settings consumed by the composition root."""

    environment: Environment = Field(Environment.DEV, description="Deployment lifecycle stage")

    repo_type: RepositoryType | None = Field(
        None,
        description="Backend: IN_MEMORY / RELATIONAL. Defaults to IN_MEMORY in DEV only.",
    )

    init_dataset: InitDataset = Field(
        InitDataset.NONE,
        description="Bootstrap dataset loaded when the repository is built",
    )

    database_url: str | None = Field(
        None,
        description="SQLAlchemy connection URL, required for RELATIONAL",
    )

    query_timeout: float = Field(60.0, gt=0, description="Per-query timeout in seconds")

    log_level: str = Field("INFO")
    log_file: str | None = Field(None)

    model_config = SettingsConfigDict(
        env_prefix="PRODUCT_SERVICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_backend(self) -> Settings:
        if self.repo_type is None:
            if self.environment is not Environment.DEV:
                raise ValueError(
                    "No repo type configured, set PRODUCT_SERVICE_REPO_TYPE"
                )
            self.repo_type = RepositoryType.IN_MEMORY

        if self.repo_type is RepositoryType.RELATIONAL and not (self.database_url or "").strip():
            raise ValueError(
                "No database url configured, set PRODUCT_SERVICE_DATABASE_URL"
            )
        return self


def load_settings(**overrides) -> Settings:
    """Read Settings, reporting problems as ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
