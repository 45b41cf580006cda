from nexgen.routers.auth import router as auth_router
from nexgen.routers.health import router as health_router
from nexgen.routers.inventory import router as inventory_router
from nexgen.routers.orders import router as orders_router
from nexgen.routers.reports import router as reports_router
from nexgen.routers.users import router as users_router

__all__ = [
    "auth_router",
    "health_router",
    "inventory_router",
    "orders_router",
    "reports_router",
    "users_router",
]
