from nexgen.config import Settings, get_settings
from nexgen.store.base import KeyValueStore
from nexgen.store.memory import MemoryKeyValueStore
from nexgen.store.sql import SqlKeyValueStore

MEMORY_STORE_URL = "memory://"


def build_store(settings: Settings | None = None) -> KeyValueStore:
    settings = settings or get_settings()
    url = settings.STORE_URL.strip()
    if url == MEMORY_STORE_URL:
        return MemoryKeyValueStore()
    return SqlKeyValueStore.from_url(url)


__all__ = [
    "KeyValueStore",
    "MEMORY_STORE_URL",
    "MemoryKeyValueStore",
    "SqlKeyValueStore",
    "build_store",
]
