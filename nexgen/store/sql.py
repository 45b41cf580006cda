import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from nexgen.database import Base, create_store_engine
from nexgen.models.kv_entry import KeyValueEntry
from nexgen.store.base import KeyValueStore

logger = logging.getLogger(__name__)


class SqlKeyValueStore(KeyValueStore):
    """Key-value rows in one SQL table.

    Outside a transaction every call commits on its own. Inside one, all
    calls share a single session that commits (or rolls back) when the
    outermost ``transaction()`` block ends.
    """

    def __init__(self, engine: Engine):
        super().__init__()
        self.engine = engine
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=engine,
        )
        self._session: Optional[Session] = None

    @classmethod
    def from_url(cls, database_url: str) -> "SqlKeyValueStore":
        store = cls(create_store_engine(database_url))
        store.init_schema()
        return store

    def init_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine, tables=[KeyValueEntry.__table__])

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        with self._lock:
            if self._session is not None:
                yield self._session
                self._session.flush()
                return
            with self._session_factory() as db:
                yield db
                db.commit()

    def _begin(self) -> None:
        self._session = self._session_factory()

    def _commit(self) -> None:
        session, self._session = self._session, None
        try:
            session.commit()
        finally:
            session.close()

    def _rollback(self) -> None:
        session, self._session = self._session, None
        try:
            session.rollback()
        finally:
            session.close()
        logger.debug("Rolled back key-value transaction on %s", self.engine.url)

    def get(self, key: str) -> Optional[str]:
        with self._session_scope() as db:
            entry = db.get(KeyValueEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session_scope() as db:
            entry = db.get(KeyValueEntry, key)
            if entry is None:
                db.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value

    def remove(self, key: str) -> None:
        with self._session_scope() as db:
            db.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))

    @property
    def backend(self) -> str:
        return self.engine.url.get_backend_name()

    def ping(self) -> bool:
        try:
            with self._session_scope() as db:
                db.execute(select(1))
        except SQLAlchemyError:
            logger.exception("Key-value store on %s is unreachable", self.engine.url)
            return False
        return True

    def close(self) -> None:
        self.engine.dispose()
        logger.debug("Disposed key-value store engine %s", self.engine.url)


__all__ = ["SqlKeyValueStore"]
