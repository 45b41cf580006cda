from fastapi import APIRouter, Depends, Response, status

from nexgen.config import get_settings
from nexgen.core.dates import now_timestamp
from nexgen.dependencies import get_store
from nexgen.store import KeyValueStore

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(response: Response, store: KeyValueStore = Depends(get_store)):
    settings = get_settings()
    reachable = store.ping()
    if not reachable:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "ok" if reachable else "degraded",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "store": {"backend": store.backend, "reachable": reachable},
        "time": now_timestamp(),
    }


__all__ = ["router"]
