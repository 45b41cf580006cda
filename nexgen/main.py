from fastapi import FastAPI

from nexgen.config import Settings, get_settings
from nexgen.core.logging import setup_logging
from nexgen.routers import (
    auth_router,
    health_router,
    inventory_router,
    orders_router,
    reports_router,
    users_router,
)

settings: Settings = get_settings()
logger = setup_logging(settings)

app = FastAPI(title=settings.APP_NAME)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(inventory_router)
app.include_router(users_router)
app.include_router(orders_router)
app.include_router(reports_router)

logger.info("%s started with store %s", settings.APP_NAME, settings.STORE_URL.split("://", 1)[0])


__all__ = ["app"]
