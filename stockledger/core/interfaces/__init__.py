"""Core interfaces (ports) for dependency injection."""

from stockledger.core.interfaces.catalog_gateway import ICatalogGateway
from stockledger.core.interfaces.movement_store import IMovementStore

__all__ = [
    "ICatalogGateway",
    "IMovementStore",
]
