from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from nexgen.core.stock_rules import StockStatus, stock_status


class InventoryBase(BaseModel):
    item_name: str
    category: str = ""
    location: str = ""
    quantity: int = Field(ge=0)
    unit_price: float = Field(ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InventoryCreate(InventoryBase):
    pass


class InventoryUpdate(BaseModel):
    item_name: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    unit_price: Optional[float] = Field(default=None, ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InventoryRecord(InventoryBase):
    id: str
    last_updated: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    @computed_field
    @property
    def status(self) -> StockStatus:
        return stock_status(self.quantity)


class DashboardStats(BaseModel):
    total_records: int
    today_entries: int
    total_value: float
    low_stock_items: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


__all__ = [
    "DashboardStats",
    "InventoryBase",
    "InventoryCreate",
    "InventoryRecord",
    "InventoryUpdate",
]
