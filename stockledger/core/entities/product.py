"""Catalog product snapshot as seen by the ledger."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TypeProduct(str, Enum):
    """Consumption class of a product."""

    CONSUMABLE = "CONSUMABLE"
    NON_CONSUMABLE = "NON_CONSUMABLE"


class Product(BaseModel):
    """
    Read-only copy of a catalog product.

    The catalog service owns products; ``quantity`` here is only as fresh
    as the last fetch.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    name: str
    quantity: int = 0
    stock_alert_threshold: int | None = Field(default=None, alias="stockAlertThreshold")
    type_product: TypeProduct | None = Field(default=None, alias="typeProduct")
    category: str | None = None
    status: str | None = None
    description: str | None = None
    image_path: str | None = Field(default=None, alias="imagePath")

    def effective_threshold(self, default: int = 10) -> int:
        """Alert threshold, falling back to ``default`` when unset or zero."""
        return self.stock_alert_threshold or default
