from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    shortDescription: str = Field(..., description="The short product description for the item.")
    price: str = Field(..., description="The total price paid for this item, e.g. '6.49'.")


class Receipt(BaseModel):
    """Purchase receipt as submitted by clients.

    Field formats are not enforced here; ValidationService applies the pattern
    rules so that a shape failure and a format failure stay distinguishable.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    retailer: str = Field(..., description="Name of the retailer or store the receipt is from.")
    purchaseDate: str = Field(..., description="Purchase date printed on the receipt (YYYY-MM-DD).")
    purchaseTime: str = Field(..., description="Purchase time printed on the receipt, 24-hour HH:MM.")
    items: Tuple[Item, ...] = Field(default_factory=tuple)
    total: str = Field(..., description="Total amount paid on the receipt, e.g. '35.35'.")
    pointsEarned: Optional[int] = Field(
        default=None,
        description="Client-supplied points; accepted for compatibility and never used for scoring.",
    )

    @field_validator("items", mode="before")
    @classmethod
    def coerce_items(cls, value):
        # null items means no items
        if value is None:
            return ()
        return value


class ProcessReceiptResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int
