"""
Typed configuration models using Pydantic.

All runtime settings live here with explicit typing and validation.
No hardcoded paths or ports in the service code.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from swiftregistry.utils.logging import LOG_LEVELS


class StoreBackend(str, Enum):
    """Which registry store adapter to open."""

    MEMORY = "memory"
    SQLITE = "sqlite"


class StoreConfig(BaseModel):
    """Registry store configuration."""

    model_config = ConfigDict(frozen=True)

    backend: StoreBackend = Field(
        default=StoreBackend.SQLITE,
        description="Store adapter (memory or sqlite)",
    )
    path: Path = Field(
        default=Path("./data/registry.db"),
        description="SQLite database file (ignored for the memory backend)",
    )


class IngestionConfig(BaseModel):
    """Bootstrap ingestion configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=True, description="Run ingestion on startup")
    source: Path = Field(
        default=Path("data/swift_codes.csv"),
        description="Path to the bank code dataset",
    )
    batch_size: int = Field(
        default=1000, ge=1, le=100_000, description="Rows per bulk save"
    )
    encoding: str = Field(default="utf-8-sig", description="Dataset text encoding")
    delimiter: str = Field(
        default=",", min_length=1, max_length=1, description="Field separator"
    )


class ServerConfig(BaseModel):
    """HTTP adapter configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, alias="json")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = v.upper()
        if level not in LOG_LEVELS:
            msg = f"Log level must be one of {', '.join(LOG_LEVELS)}, got: {v!r}"
            raise ValueError(msg)
        return level


class RegistryConfig(BaseModel):
    """Complete registry configuration."""

    model_config = ConfigDict(frozen=True)

    store: StoreConfig = Field(default_factory=StoreConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
