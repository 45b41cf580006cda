from nexgen.core.constants import ORDER_STORAGE_KEY
from nexgen.repositories.base import JsonCollectionRepository
from nexgen.schemas.sales_order import SalesOrder


class SalesOrderRepository(JsonCollectionRepository[SalesOrder]):
    """Orders are stored newest first and never edited in place.

    New orders come from the fulfillment service through ``prepend``.
    """

    storage_key = ORDER_STORAGE_KEY
    entity_type = SalesOrder

    def prepend(self, order: SalesOrder) -> None:
        with self.store.transaction():
            orders = self.list()
            self.save_all([order, *orders])

    def existing_ids(self) -> set[str]:
        return {order.id for order in self.list()}


__all__ = ["SalesOrderRepository"]
