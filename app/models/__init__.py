"""Models package for the receipt points service."""

from app.models.schema import Item, PointsResponse, ProcessReceiptResponse, Receipt

__all__ = [
    "Item",
    "Receipt",
    "ProcessReceiptResponse",
    "PointsResponse",
]
