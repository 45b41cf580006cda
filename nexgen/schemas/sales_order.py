from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SalesOrderStatus(str, Enum):
    # Fulfillment only produces APPROVED; the other two are kept for an approval workflow.
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderLineRequest(_CamelModel):
    inventory_id: str
    quantity: int = Field(gt=0)


class AttachmentMeta(_CamelModel):
    document_name: str
    document_type: Optional[str] = None


class SalesOrderItem(_CamelModel):
    inventory_id: str
    item_name: str
    quantity: int = Field(gt=0)
    unit_price: float = Field(ge=0)


class SalesOrder(_CamelModel):
    id: str
    user_id: str
    username: str
    items: List[SalesOrderItem]
    total_amount: float
    status: SalesOrderStatus
    created_at: str
    processed_at: Optional[str] = None
    processed_by: Optional[str] = None
    document_name: Optional[str] = None
    document_type: Optional[str] = None

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


class SalesOrderCreate(_CamelModel):
    user_id: str
    username: str
    items: List[OrderLineRequest]
    document_name: Optional[str] = None
    document_type: Optional[str] = None

    def attachment(self) -> Optional[AttachmentMeta]:
        if not self.document_name:
            return None
        return AttachmentMeta(
            document_name=self.document_name,
            document_type=self.document_type,
        )


__all__ = [
    "AttachmentMeta",
    "OrderLineRequest",
    "SalesOrder",
    "SalesOrderCreate",
    "SalesOrderItem",
    "SalesOrderStatus",
]
