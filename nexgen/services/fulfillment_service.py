from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Mapping, Sequence
from typing import Optional, Union

from nexgen.config import Settings, get_settings
from nexgen.core.constants import ORDER_ID_LENGTH, ORDER_ID_PREFIX
from nexgen.core.dates import now_timestamp
from nexgen.core.exceptions import EmptyOrderError, InsufficientStockError
from nexgen.repositories.inventory_repository import InventoryRepository
from nexgen.repositories.sales_order_repository import SalesOrderRepository
from nexgen.schemas.sales_order import (
    AttachmentMeta,
    OrderLineRequest,
    SalesOrder,
    SalesOrderItem,
    SalesOrderStatus,
)
from nexgen.store.base import KeyValueStore

logger = logging.getLogger(__name__)

_ORDER_ID_ALPHABET = string.ascii_uppercase + string.digits

OrderLineInput = Union[OrderLineRequest, Mapping]
AttachmentInput = Union[AttachmentMeta, Mapping]


def generate_order_id(existing_ids=()) -> str:
    while True:
        token = "".join(secrets.choice(_ORDER_ID_ALPHABET) for _ in range(ORDER_ID_LENGTH))
        order_id = f"{ORDER_ID_PREFIX}{token}"
        if order_id not in existing_ids:
            return order_id


def _coerce_lines(items: Sequence[OrderLineInput]) -> list[OrderLineRequest]:
    lines = [
        item if isinstance(item, OrderLineRequest) else OrderLineRequest.model_validate(dict(item))
        for item in items
    ]
    if not lines:
        raise EmptyOrderError()
    return lines


def _coerce_attachment(attachment: Optional[AttachmentInput]) -> Optional[AttachmentMeta]:
    if attachment is None or isinstance(attachment, AttachmentMeta):
        return attachment
    return AttachmentMeta.model_validate(dict(attachment))


def _requested_totals(lines: list[OrderLineRequest]) -> dict[str, int]:
    totals: dict[str, int] = {}
    for line in lines:
        totals[line.inventory_id] = totals.get(line.inventory_id, 0) + line.quantity
    return totals


class OrderFulfillmentService:
    """Turns requested lines into an approved order while deducting stock.

    The whole validate/deduct/persist sequence holds the store's lock, so
    two callers sharing a store cannot both pass validation against the
    same quantity. The order is built before anything is written, and a
    failure while writing rolls the store back to where it started.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        restock_on_delete: Optional[bool] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.store = store
        self.inventory = InventoryRepository(store)
        self.orders = SalesOrderRepository(store)
        if restock_on_delete is None:
            restock_on_delete = settings.ORDER_DELETE_RESTOCK
        self.restock_on_delete = restock_on_delete

    def create_order(
        self,
        user_id: str,
        username: str,
        items: Sequence[OrderLineInput],
        attachment: Optional[AttachmentInput] = None,
    ) -> SalesOrder:
        lines = _coerce_lines(items)
        attachment = _coerce_attachment(attachment)

        with self.store.transaction():
            records = self.inventory.list()
            by_id = {record.id: record for record in records}

            # Validation phase: nothing is touched until every line fits.
            for inventory_id, requested in _requested_totals(lines).items():
                record = by_id.get(inventory_id)
                available = record.quantity if record is not None else 0
                if record is None or available < requested:
                    item_name = record.item_name if record is not None else inventory_id
                    logger.warning(
                        "Order for %s rejected: %s requested=%d available=%d",
                        username,
                        item_name,
                        requested,
                        available,
                        extra={"inventory_id": inventory_id},
                    )
                    raise InsufficientStockError(item_name, requested, available)

            stamp = now_timestamp()
            order_items = [
                SalesOrderItem(
                    inventory_id=line.inventory_id,
                    item_name=by_id[line.inventory_id].item_name,
                    quantity=line.quantity,
                    unit_price=by_id[line.inventory_id].unit_price,
                )
                for line in lines
            ]
            order = SalesOrder(
                id=generate_order_id(self.orders.existing_ids()),
                user_id=user_id,
                username=username,
                items=order_items,
                total_amount=sum(item.quantity * item.unit_price for item in order_items),
                status=SalesOrderStatus.APPROVED,
                created_at=stamp,
                document_name=attachment.document_name if attachment else None,
                document_type=attachment.document_type if attachment else None,
            )

            # Execution phase: the order is fully built, now deduct and persist.
            for line in lines:
                record = by_id[line.inventory_id]
                record.quantity -= line.quantity
                record.last_updated = stamp

            self.inventory.save_all(records)
            self.orders.prepend(order)

        logger.info(
            "Order %s approved for %s: %d lines, total %.2f",
            order.id,
            username,
            len(order.items),
            order.total_amount,
            extra={"order_id": order.id, "user_id": order.user_id},
        )
        return order

    def delete_order(self, order_id: str) -> None:
        with self.store.transaction():
            order = self.orders.get(order_id)
            if order is None:
                return
            self.orders.delete(order_id)
            if self.restock_on_delete:
                self._restock(order)
        logger.info(
            "Order %s deleted (restocked=%s)",
            order_id,
            self.restock_on_delete,
            extra={"order_id": order_id},
        )

    def _restock(self, order: SalesOrder) -> None:
        records = self.inventory.list()
        by_id = {record.id: record for record in records}
        stamp = now_timestamp()
        for item in order.items:
            record = by_id.get(item.inventory_id)
            if record is None:
                logger.info(
                    "Skipping restock of %s for order %s: inventory record is gone",
                    item.item_name,
                    order.id,
                )
                continue
            record.quantity += item.quantity
            record.last_updated = stamp
        self.inventory.save_all(records)


__all__ = ["OrderFulfillmentService", "generate_order_id"]
