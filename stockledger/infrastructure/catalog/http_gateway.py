"""
HTTP client for the product catalog service.

Talks JSON to the catalog's ``/products`` endpoints and sends quantity
updates as multipart form data. Transport problems are classified into
``GatewayUnavailableError``; nothing is retried.
"""

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from stockledger.config import CatalogSettings, get_logger
from stockledger.core.entities.product import Product
from stockledger.core.exceptions import GatewayUnavailableError, ProductNotFoundError
from stockledger.core.interfaces.catalog_gateway import ICatalogGateway

logger = get_logger(__name__)


class HttpCatalogGateway(ICatalogGateway):
    """Catalog gateway over a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        products_path: str = "/products",
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._products_path = "/" + products_path.strip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: CatalogSettings) -> "HttpCatalogGateway":
        return cls(
            base_url=settings.base_url,
            products_path=settings.products_path,
            timeout=settings.timeout,
        )

    async def aclose(self) -> None:
        """Close the underlying client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def get_product(self, product_id: int) -> Product | None:
        """Fetch one product; None when the catalog does not know it."""
        response = await self._request(
            "get_product", "GET", f"{self._products_path}/getById/{product_id}"
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info("catalog_product_missing", product_id=product_id)
            return None
        self._raise_for_status("get_product", response)

        payload = self._json("get_product", response)
        if not payload:
            return None
        return self._to_product("get_product", payload)

    async def list_products(self) -> list[Product]:
        """Fetch every product in catalog order."""
        response = await self._request(
            "list_products", "GET", f"{self._products_path}/allProducts"
        )
        self._raise_for_status("list_products", response)

        payload = self._json("list_products", response) or []
        if not isinstance(payload, list):
            raise GatewayUnavailableError("list_products", "expected a JSON array")

        products = [self._to_product("list_products", item) for item in payload]
        logger.info("catalog_products_listed", count=len(products))
        return products

    async def update_product_quantity(self, product_id: int, quantity: int) -> None:
        """Set a product's on-hand quantity."""
        # (None, value) parts force multipart encoding without a file upload
        response = await self._request(
            "update_product_quantity",
            "PATCH",
            f"{self._products_path}/update/{product_id}",
            files={"quantity": (None, str(quantity))},
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            raise ProductNotFoundError(product_id)
        self._raise_for_status("update_product_quantity", response)

        logger.info(
            "catalog_quantity_updated",
            product_id=product_id,
            quantity=quantity,
        )

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("catalog_timeout", operation=operation, url=url)
            raise GatewayUnavailableError(operation, "request timed out") from exc
        except httpx.RequestError as exc:
            logger.warning(
                "catalog_network_error",
                operation=operation,
                url=url,
                error=str(exc),
            )
            raise GatewayUnavailableError(operation, str(exc) or exc.__class__.__name__) from exc

    @staticmethod
    def _raise_for_status(operation: str, response: httpx.Response) -> None:
        if response.is_success:
            return
        logger.warning(
            "catalog_http_error",
            operation=operation,
            status_code=response.status_code,
        )
        raise GatewayUnavailableError(
            operation,
            f"HTTP {response.status_code}",
            status_code=response.status_code,
        )

    @staticmethod
    def _json(operation: str, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayUnavailableError(operation, "response is not valid JSON") from exc

    @staticmethod
    def _to_product(operation: str, payload: Any) -> Product:
        try:
            return Product.model_validate(payload)
        except PydanticValidationError as exc:
            raise GatewayUnavailableError(
                operation, f"unexpected product payload: {exc.error_count()} error(s)"
            ) from exc
