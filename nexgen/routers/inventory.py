from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from nexgen.dependencies import get_analytics_service, get_inventory_repository
from nexgen.repositories import InventoryRepository
from nexgen.schemas.inventory import DashboardStats, InventoryCreate, InventoryRecord, InventoryUpdate
from nexgen.services import AnalyticsService

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=List[InventoryRecord])
def list_records(repo: InventoryRepository = Depends(get_inventory_repository)):
    return repo.list()


@router.get("/stats", response_model=DashboardStats)
def inventory_stats(analytics: AnalyticsService = Depends(get_analytics_service)):
    return analytics.get_dashboard_stats()


@router.get("/{record_id}", response_model=InventoryRecord)
def get_record(record_id: str, repo: InventoryRepository = Depends(get_inventory_repository)):
    record = repo.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Inventory record not found.")
    return record


@router.post("", response_model=InventoryRecord, status_code=status.HTTP_201_CREATED)
def create_record(
    payload: InventoryCreate,
    repo: InventoryRepository = Depends(get_inventory_repository),
):
    return repo.create(payload)


@router.patch("/{record_id}", response_model=InventoryRecord)
def update_record(
    record_id: str,
    payload: InventoryUpdate,
    repo: InventoryRepository = Depends(get_inventory_repository),
):
    repo.update(record_id, payload)
    return get_record(record_id, repo)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(record_id: str, repo: InventoryRepository = Depends(get_inventory_repository)):
    repo.delete(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
