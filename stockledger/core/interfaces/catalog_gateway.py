"""
Abstract interface for the remote product catalog.

The catalog owns products and their authoritative quantity. The ledger
only reads snapshots and issues quantity updates.
"""

from abc import ABC, abstractmethod

from stockledger.core.entities.product import Product


class ICatalogGateway(ABC):
    """Port to the product catalog service."""

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """
        Fetch one product.

        Returns:
            The product, or None when the catalog has no such id.

        Raises:
            GatewayUnavailableError: If the catalog cannot be reached.
        """

    @abstractmethod
    async def list_products(self) -> list[Product]:
        """Fetch every product, in catalog order."""

    @abstractmethod
    async def update_product_quantity(self, product_id: int, quantity: int) -> None:
        """
        Set the on-hand quantity of a product.

        Raises:
            ProductNotFoundError: If the product vanished.
            GatewayUnavailableError: If the update could not be applied.
        """
