"""Registry store interface and adapters."""

from swiftregistry.config.settings import StoreBackend, StoreConfig
from swiftregistry.store.base import RegistryStore
from swiftregistry.store.memory import InMemoryStore
from swiftregistry.store.sqlite import SqliteStore


def open_store(config: StoreConfig) -> RegistryStore:
    """Open the store adapter selected in the configuration."""
    if config.backend is StoreBackend.MEMORY:
        return InMemoryStore()
    return SqliteStore(config.path)


__all__ = ["InMemoryStore", "RegistryStore", "SqliteStore", "open_store"]
