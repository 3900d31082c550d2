"""Product catalog gateway implementations."""

from stockledger.infrastructure.catalog.http_gateway import HttpCatalogGateway

__all__ = ["HttpCatalogGateway"]
