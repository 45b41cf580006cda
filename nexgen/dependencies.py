from functools import lru_cache

from fastapi import Depends

from nexgen.config import get_settings
from nexgen.repositories import InventoryRepository, SalesOrderRepository, UserRepository
from nexgen.services import AnalyticsService, AuthService, OrderFulfillmentService
from nexgen.store import KeyValueStore, build_store


@lru_cache
def get_store() -> KeyValueStore:
    return build_store(get_settings())


def get_inventory_repository(store: KeyValueStore = Depends(get_store)) -> InventoryRepository:
    return InventoryRepository(store)


def get_user_repository(store: KeyValueStore = Depends(get_store)) -> UserRepository:
    return UserRepository(store, settings=get_settings())


def get_order_repository(store: KeyValueStore = Depends(get_store)) -> SalesOrderRepository:
    return SalesOrderRepository(store)


def get_fulfillment_service(store: KeyValueStore = Depends(get_store)) -> OrderFulfillmentService:
    return OrderFulfillmentService(store, settings=get_settings())


def get_analytics_service(store: KeyValueStore = Depends(get_store)) -> AnalyticsService:
    return AnalyticsService(store, settings=get_settings())


def get_auth_service(store: KeyValueStore = Depends(get_store)) -> AuthService:
    return AuthService(store, settings=get_settings())


__all__ = [
    "get_analytics_service",
    "get_auth_service",
    "get_fulfillment_service",
    "get_inventory_repository",
    "get_order_repository",
    "get_store",
    "get_user_repository",
]
