from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from nexgen.store.base import KeyValueStore

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


def new_entity_id() -> str:
    return uuid.uuid4().hex[:9]


def dump_entity(entity: BaseModel) -> dict:
    return entity.model_dump(mode="json", by_alias=True, exclude_none=True)


class JsonCollectionRepository(Generic[EntityT]):
    """One JSON array under a fixed key, rewritten whole on every change.

    ``delete`` of an unknown id leaves the collection alone. A key that was
    never written yields the seed rows, which are persisted so their ids
    and timestamps stay stable.
    """

    storage_key: str
    entity_type: type[EntityT]

    def __init__(self, store: KeyValueStore):
        self.store = store

    def seed(self) -> list[EntityT]:
        return []

    def list(self) -> list[EntityT]:
        with self.store.transaction():
            rows = self.store.read_json(self.storage_key)
            if rows is None:
                entities = self.seed()
                self.save_all(entities)
                if entities:
                    logger.info("Seeded %d rows under %s", len(entities), self.storage_key)
                return entities
        return [self.entity_type.model_validate(row) for row in rows]

    def get(self, entity_id: str) -> Optional[EntityT]:
        for entity in self.list():
            if entity.id == entity_id:
                return entity
        return None

    def save_all(self, entities: list[EntityT]) -> None:
        self.store.write_json(self.storage_key, [dump_entity(entity) for entity in entities])

    def delete(self, entity_id: str) -> None:
        with self.store.transaction():
            entities = self.list()
            remaining = [entity for entity in entities if entity.id != entity_id]
            if len(remaining) == len(entities):
                logger.debug("Delete skipped, %s not found in %s", entity_id, self.storage_key)
                return
            self.save_all(remaining)


class EditableCollectionRepository(JsonCollectionRepository[EntityT]):
    """A collection whose rows are created and shallow-merged by callers.

    ``update`` of an unknown id is a no-op and can never change ``id``.
    """

    create_type: type[BaseModel]
    update_type: type[BaseModel]

    # ------------------------------------------------------------------
    # hooks
    # ------------------------------------------------------------------
    def build(self, payload: dict[str, Any]) -> EntityT:
        return self.entity_type.model_validate({**payload, "id": new_entity_id()})

    def prepare_changes(self, changes: dict[str, Any]) -> dict[str, Any]:
        return changes

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------
    def create(self, data) -> EntityT:
        payload = self._validated(self.create_type, data).model_dump()
        with self.store.transaction():
            entities = self.list()
            entity = self.build(payload)
            entities.append(entity)
            self.save_all(entities)
        logger.debug("Created %s in %s", entity.id, self.storage_key)
        return entity

    def update(self, entity_id: str, changes) -> None:
        validated = self._validated(self.update_type, changes)
        changes = self.prepare_changes(validated.model_dump(exclude_unset=True, exclude_none=True))
        with self.store.transaction():
            entities = self.list()
            for index, entity in enumerate(entities):
                if entity.id != entity_id:
                    continue
                merged = {**entity.model_dump(), **changes, "id": entity.id}
                entities[index] = self.entity_type.model_validate(merged)
                self.save_all(entities)
                return
        logger.debug("Update skipped, %s not found in %s", entity_id, self.storage_key)

    @staticmethod
    def _validated(model_type: type[BaseModel], data) -> BaseModel:
        if isinstance(data, model_type):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a mapping or {model_type.__name__}, got {type(data).__name__}")
        return model_type.model_validate(dict(data))


__all__ = [
    "EditableCollectionRepository",
    "JsonCollectionRepository",
    "dump_entity",
    "new_entity_id",
]
