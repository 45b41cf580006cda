from nexgen.core.constants import INVENTORY_STORAGE_KEY
from nexgen.core.dates import now_timestamp
from nexgen.repositories.base import EditableCollectionRepository, new_entity_id
from nexgen.schemas.inventory import InventoryCreate, InventoryRecord, InventoryUpdate

_SEED_ROWS = (
    {
        "id": "1",
        "item_name": "Ergonomic Desk Chair",
        "category": "Furniture",
        "quantity": 25,
        "unit_price": 199.99,
        "location": "Floor 1 - Section A",
    },
    {
        "id": "2",
        "item_name": 'MacBook Pro 14"',
        "category": "Electronics",
        "quantity": 3,
        "unit_price": 2499.00,
        "location": "Storage C",
    },
    {
        "id": "3",
        "item_name": "Wireless Mouse",
        "category": "Accessories",
        "quantity": 50,
        "unit_price": 29.99,
        "location": "Floor 1 - Supply Room",
    },
)


class InventoryRepository(EditableCollectionRepository[InventoryRecord]):
    storage_key = INVENTORY_STORAGE_KEY
    entity_type = InventoryRecord
    create_type = InventoryCreate
    update_type = InventoryUpdate

    def seed(self):
        stamp = now_timestamp()
        return [InventoryRecord(**row, last_updated=stamp) for row in _SEED_ROWS]

    def build(self, payload):
        return InventoryRecord(**payload, id=new_entity_id(), last_updated=now_timestamp())

    def prepare_changes(self, changes):
        return {**changes, "last_updated": now_timestamp()}


__all__ = ["InventoryRepository"]
