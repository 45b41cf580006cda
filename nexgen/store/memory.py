from typing import Optional

from nexgen.store.base import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        super().__init__()
        self._data: dict[str, str] = dict(initial or {})
        self._snapshot: Optional[dict[str, str]] = None

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    @property
    def backend(self) -> str:
        return "memory"

    def _begin(self) -> None:
        self._snapshot = dict(self._data)

    def _commit(self) -> None:
        self._snapshot = None

    def _rollback(self) -> None:
        if self._snapshot is not None:
            self._data = self._snapshot
        self._snapshot = None


__all__ = ["MemoryKeyValueStore"]
