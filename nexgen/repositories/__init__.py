from nexgen.repositories.inventory_repository import InventoryRepository
from nexgen.repositories.sales_order_repository import SalesOrderRepository
from nexgen.repositories.user_repository import UserRepository

__all__ = ["InventoryRepository", "SalesOrderRepository", "UserRepository"]
