"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

import datetime

from pydantic import BaseModel, Field

from stockledger.core.entities.movement import MovementDraft


class RecordEntryRequest(BaseModel):
    """Request to record stock arriving (ENTRY movement)."""

    product_id: int = Field(..., gt=0, description="Catalog product ID")
    quantity: int = Field(..., gt=0, description="Units received")
    date: datetime.datetime | None = Field(
        default=None,
        description="Movement time in ISO format (defaults to now)",
    )
    reference: str | None = Field(default=None, description="Delivery or PO reference")
    supplier: str | None = Field(default=None, description="Supplier name")
    reason: str | None = Field(default=None, description="Why the stock came in")
    notes: str | None = Field(default=None, description="Additional notes")
    created_by: str | None = Field(default=None, description="Who recorded it")

    def to_draft(self) -> MovementDraft:
        return MovementDraft(**self.model_dump())


class RecordExitRequest(BaseModel):
    """Request to record stock leaving (EXIT movement)."""

    product_id: int = Field(..., gt=0, description="Catalog product ID")
    quantity: int = Field(..., gt=0, description="Units issued")
    date: datetime.datetime | None = Field(
        default=None,
        description="Movement time in ISO format (defaults to now)",
    )
    receiver: str | None = Field(default=None, description="Who received the stock")
    user: str | None = Field(default=None, description="Who issued the stock")
    purpose: str | None = Field(default=None, description="What the stock is for")
    notes: str | None = Field(default=None, description="Additional notes")
    created_by: str | None = Field(default=None, description="Who recorded it")

    def to_draft(self) -> MovementDraft:
        return MovementDraft(**self.model_dump())
