from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from nexgen.core.exceptions import EmptyOrderError, InsufficientStockError
from nexgen.dependencies import get_fulfillment_service, get_order_repository
from nexgen.repositories import SalesOrderRepository
from nexgen.schemas.sales_order import SalesOrder, SalesOrderCreate
from nexgen.services import OrderFulfillmentService

router = APIRouter(prefix="/orders", tags=["Sales Orders"])


@router.get("", response_model=List[SalesOrder])
def list_orders(repo: SalesOrderRepository = Depends(get_order_repository)):
    return repo.list()


@router.post("", response_model=SalesOrder, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: SalesOrderCreate,
    service: OrderFulfillmentService = Depends(get_fulfillment_service),
):
    try:
        return service.create_order(
            payload.user_id,
            payload.username,
            payload.items,
            attachment=payload.attachment(),
        )
    except InsufficientStockError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except EmptyOrderError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: str,
    service: OrderFulfillmentService = Depends(get_fulfillment_service),
):
    service.delete_order(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
