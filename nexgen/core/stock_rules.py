from enum import Enum

from nexgen.core.constants import LOW_STOCK_THRESHOLD


class StockStatus(str, Enum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"


def stock_status(quantity):
    if quantity > LOW_STOCK_THRESHOLD:
        return StockStatus.IN_STOCK
    if quantity > 0:
        return StockStatus.LOW_STOCK
    return StockStatus.OUT_OF_STOCK


def is_low_stock(status):
    return status in (StockStatus.LOW_STOCK, StockStatus.OUT_OF_STOCK)


__all__ = ["StockStatus", "is_low_stock", "stock_status"]
