class NexgenError(Exception):
    """Base class for errors raised by the inventory core."""


class InsufficientStockError(NexgenError):
    def __init__(self, item_name: str, requested: int, available: int):
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(f"Stock Depletion: {item_name} has insufficient balance.")


class EmptyOrderError(NexgenError):
    def __init__(self):
        super().__init__("A sales order needs at least one line item.")


__all__ = ["EmptyOrderError", "InsufficientStockError", "NexgenError"]
