"""
Configuration management with typed Pydantic models.

Provides store, ingestion, server and logging settings with
environment-aware YAML loading.
"""

from swiftregistry.config.loader import load_config
from swiftregistry.config.settings import (
    IngestionConfig,
    LoggingConfig,
    RegistryConfig,
    ServerConfig,
    StoreBackend,
    StoreConfig,
)

__all__ = [
    "IngestionConfig",
    "LoggingConfig",
    "RegistryConfig",
    "ServerConfig",
    "StoreBackend",
    "StoreConfig",
    "load_config",
]
