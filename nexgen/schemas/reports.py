from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from nexgen.core.dates import ensure_utc


class Timeframe(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class DateRange(BaseModel):
    """Inclusive window; naive datetimes are read as UTC."""

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_order(self):
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class Performer(BaseModel):
    name: str
    amount: float


class PerformanceStats(BaseModel):
    total_sales: float
    order_count: int
    avg_order_value: float
    total_quantity: int
    top_performer: Optional[Performer] = None
    low_performer: Optional[Performer] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TrendPoint(BaseModel):
    name: str
    amount: float
    count: int


__all__ = ["DateRange", "PerformanceStats", "Performer", "Timeframe", "TrendPoint"]
