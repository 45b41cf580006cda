from __future__ import annotations

import json
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional


class KeyValueStore(ABC):
    """String-keyed text storage with a per-instance critical section.

    Repositories read a whole collection, change it and write it back, so
    every such sequence must run inside ``transaction()``. The outermost
    transaction is all-or-nothing: writes made inside it are kept only if
    the block exits without an exception.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._depth = 0

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...

    @property
    def backend(self) -> str:
        return type(self).__name__

    def ping(self) -> bool:
        """Whether the backend can currently serve reads."""
        return True

    # Backends override these to buffer writes for the outermost transaction.
    def _begin(self) -> None:
        pass

    def _commit(self) -> None:
        pass

    def _rollback(self) -> None:
        pass

    @contextmanager
    def transaction(self) -> Iterator["KeyValueStore"]:
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._begin()
            self._depth += 1
            try:
                yield self
            except BaseException:
                if outermost:
                    self._rollback()
                raise
            else:
                if outermost:
                    self._commit()
            finally:
                self._depth -= 1

    def read_json(self, key: str):
        raw = self.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def write_json(self, key: str, value) -> None:
        self.set(key, json.dumps(value, ensure_ascii=False))


__all__ = ["KeyValueStore"]
