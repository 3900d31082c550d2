"""Stock movement domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class MovementType(str, Enum):
    """Direction of a stock movement (wire values kept from the ledger format)."""

    ENTRY = "ENTREE"
    EXIT = "SORTIE"


class Movement(BaseModel):
    """
    A single recorded stock entry or exit.

    Immutable once created. ``product_name`` is a snapshot taken when the
    movement was recorded and is not kept in sync with later renames.
    Serializing with ``by_alias=True`` yields the camelCase ledger layout.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    product_id: int = Field(..., alias="productId")
    product_name: str = Field(..., alias="productName")
    type: MovementType
    quantity: int = Field(..., gt=0)
    date: datetime

    # Entry metadata
    reference: str | None = None
    supplier: str | None = None
    reason: str | None = None

    # Exit metadata
    receiver: str | None = None
    user: str | None = None
    purpose: str | None = None

    notes: str | None = None
    created_by: str | None = Field(default=None, alias="createdBy")

    @field_validator("date")
    @classmethod
    def ensure_aware(cls, v: datetime, info: ValidationInfo) -> datetime:
        # Naive timestamps are wall-clock time in the "tz" context zone, else host-local
        if v.tzinfo is not None:
            return v
        tz = (info.context or {}).get("tz")
        return v.replace(tzinfo=tz) if tz is not None else v.astimezone()

    @property
    def is_entry(self) -> bool:
        return self.type == MovementType.ENTRY

    @property
    def is_exit(self) -> bool:
        return self.type == MovementType.EXIT


class MovementDraft(BaseModel):
    """Caller-supplied fields for a movement that has not been recorded yet."""

    product_id: int | None = None
    quantity: int = 0
    date: datetime | None = None
    reference: str | None = None
    supplier: str | None = None
    reason: str | None = None
    receiver: str | None = None
    user: str | None = None
    purpose: str | None = None
    notes: str | None = None
    created_by: str | None = None


class MovementFilter(BaseModel):
    """Conjunctive filter over the movement log. Unset fields match everything."""

    start_date: datetime | None = None
    end_date: datetime | None = None
    product_id: int | None = None
    type: MovementType | None = None
    user: str | None = None
    search_term: str | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def ensure_aware(cls, v: datetime | None) -> datetime | None:
        if v is None or v.tzinfo is not None:
            return v
        return v.astimezone()

    def describe(self) -> str:
        """Short human-readable label, used in report headers."""
        parts: list[str] = []
        if self.start_date and self.end_date:
            parts.append(
                f"{self.start_date:%d/%m/%Y} - {self.end_date:%d/%m/%Y}"
            )
        if self.product_id is not None:
            parts.append(f"product #{self.product_id}")
        if self.type is not None:
            parts.append("IN" if self.type == MovementType.ENTRY else "OUT")
        if self.user:
            parts.append(f"user '{self.user}'")
        if self.search_term:
            parts.append(f"search '{self.search_term}'")
        return ", ".join(parts)


class UnreconciledMovement(BaseModel):
    """A movement whose catalog quantity update failed and awaits review."""

    movement_id: str
    reason: str
    flagged_at: datetime
